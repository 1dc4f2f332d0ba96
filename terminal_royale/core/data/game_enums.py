"""Centralized battle enums and constants.

This module contains the core enums that are used across multiple modules,
providing a single source of truth for sides, towers, outcomes and modes.
"""

from enum import Enum, auto


class Side(Enum):
    """The two opposing sides of a battle."""
    PLAYER = 0
    OPPONENT = 1


class TowerId(Enum):
    """Defensive towers every side owns for the whole battle."""
    GUARD_TOWER_1 = auto()
    GUARD_TOWER_2 = auto()
    KING_TOWER = auto()


class BattleOutcome(Enum):
    """Terminal results of a battle. Exactly one is produced per battle."""
    PLAYER_WIN = auto()
    OPPONENT_WIN = auto()
    SURRENDER = auto()
    DRAW = auto()


class GameMode(Enum):
    """How the opponent for the next battle is found."""
    NORMAL = "1"      # Random clan member
    TOURNAMENT = "2"  # Random tournament member
    RANKED = "3"      # Random player from location rankings
    CLAN_WAR = "4"    # Random participant of the current clan war


class OpponentKind(Enum):
    """Where an opponent record came from."""
    CLAN_MEMBER = auto()
    WAR_PARTICIPANT = auto()
    TOURNAMENT = auto()
    RANKING = auto()
    MOCK = auto()
    DEFAULT = auto()


# Damage always lands on the first standing tower in this order
TOWER_ORDER: tuple[TowerId, ...] = (
    TowerId.GUARD_TOWER_1,
    TowerId.GUARD_TOWER_2,
    TowerId.KING_TOWER,
)

SIDE_NAMES = {
    Side.PLAYER: "Player",
    Side.OPPONENT: "Opponent",
}

TOWER_NAMES = {
    TowerId.GUARD_TOWER_1: "Guard Tower 1",
    TowerId.GUARD_TOWER_2: "Guard Tower 2",
    TowerId.KING_TOWER: "King Tower",
}

OUTCOME_NAMES = {
    BattleOutcome.PLAYER_WIN: "Victory",
    BattleOutcome.OPPONENT_WIN: "Defeat",
    BattleOutcome.SURRENDER: "Surrender",
    BattleOutcome.DRAW: "Draw",
}

GAME_MODE_NAMES = {
    GameMode.NORMAL: "Normal Mode (Battle with clan members)",
    GameMode.TOURNAMENT: "Tournament Mode (Battle in tournaments)",
    GameMode.RANKED: "Ranked Mode (Battle with ranked players)",
    GameMode.CLAN_WAR: "Clan War Mode (Battle in clan wars)",
}
