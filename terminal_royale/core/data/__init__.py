"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Card and API record types
- game_enums.py: Centralized enums for sides, towers, outcomes and modes
- game_info.py: Static card stat catalog
"""

from .data_structures import (
    Card,
    PlayerProfile,
    ClanMember,
    WarParticipant,
    CurrentWar,
    TournamentMember,
    Tournament,
    PlayerRanking,
    normalise_tag,
)
from .game_enums import (
    Side,
    TowerId,
    BattleOutcome,
    GameMode,
    OpponentKind,
    TOWER_ORDER,
    SIDE_NAMES,
    TOWER_NAMES,
    OUTCOME_NAMES,
    GAME_MODE_NAMES,
)
from .game_info import CardStats, CARD_DATA, FALLBACK_CARD_STATS, get_card_stats

__all__ = [
    "Card",
    "PlayerProfile",
    "ClanMember",
    "WarParticipant",
    "CurrentWar",
    "TournamentMember",
    "Tournament",
    "PlayerRanking",
    "normalise_tag",
    "Side",
    "TowerId",
    "BattleOutcome",
    "GameMode",
    "OpponentKind",
    "TOWER_ORDER",
    "SIDE_NAMES",
    "TOWER_NAMES",
    "OUTCOME_NAMES",
    "GAME_MODE_NAMES",
    "CardStats",
    "CARD_DATA",
    "FALLBACK_CARD_STATS",
    "get_card_stats",
]
