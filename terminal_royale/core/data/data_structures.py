"""Record types shared between the API collaborator and the battle core.

Data Flow:
1. API / fixture JSON -> records below (from_dict)
2. Records -> Opponent variants (game.opponents) -> BattleEngine (name, deck)

The records are frozen: nothing in a battle mutates a card or a profile.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def normalise_tag(tag: str) -> str:
    """Return the tag with exactly one leading '#', upper-cased and trimmed."""
    cleaned = tag.strip().replace("%23", "#").lstrip("#")
    return "#" + cleaned.upper()


@dataclass(frozen=True)
class Card:
    """A card in a deck. Name indexes the stat catalog."""
    name: str
    level: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        return cls(name=str(data["name"]), level=int(data.get("level", 1)))


@dataclass(frozen=True)
class PlayerProfile:
    """Player information as returned by the players endpoint."""
    tag: str
    name: str
    exp_level: int = 1
    trophies: int = 0
    current_deck: tuple[Card, ...] = field(default_factory=tuple)
    clan_tag: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerProfile":
        clan = data.get("clan") or {}
        clan_tag = clan.get("tag") or None
        return cls(
            tag=str(data["tag"]),
            name=str(data["name"]),
            exp_level=int(data.get("expLevel", 1)),
            trophies=int(data.get("trophies", 0)),
            current_deck=tuple(Card.from_dict(c) for c in data.get("currentDeck", [])),
            clan_tag=clan_tag,
        )


@dataclass(frozen=True)
class ClanMember:
    tag: str
    name: str
    trophies: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClanMember":
        return cls(
            tag=str(data.get("tag", "")),
            name=str(data["name"]),
            trophies=int(data.get("trophies", 0)),
        )


@dataclass(frozen=True)
class WarParticipant:
    tag: str
    name: str
    fame: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WarParticipant":
        return cls(
            tag=str(data.get("tag", "")),
            name=str(data["name"]),
            fame=int(data.get("fame", 0)),
        )


@dataclass(frozen=True)
class CurrentWar:
    state: str = ""
    participants: tuple[WarParticipant, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurrentWar":
        # River races report participants per clan; older payloads list them at the top level
        raw = data.get("participants")
        if raw is None:
            raw = (data.get("clan") or {}).get("participants", [])
        return cls(
            state=str(data.get("state", "")),
            participants=tuple(WarParticipant.from_dict(p) for p in raw),
        )


@dataclass(frozen=True)
class TournamentMember:
    tag: str
    name: str
    score: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TournamentMember":
        return cls(
            tag=str(data.get("tag", "")),
            name=str(data["name"]),
            score=int(data.get("score", 0)),
        )


@dataclass(frozen=True)
class Tournament:
    tag: str
    name: str
    members_list: tuple[TournamentMember, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tournament":
        return cls(
            tag=str(data.get("tag", "")),
            name=str(data.get("name", "")),
            members_list=tuple(TournamentMember.from_dict(m) for m in data.get("membersList", [])),
        )


@dataclass(frozen=True)
class PlayerRanking:
    tag: str
    name: str
    trophies: int = 0
    rank: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerRanking":
        return cls(
            tag=str(data.get("tag", "")),
            name=str(data["name"]),
            trophies=int(data.get("trophies", 0)),
            rank=int(data.get("rank", 0)),
        )
