"""Opponent variants and opponent selection.

Every source of opponents (clan members, war participants, tournament
members, location rankings, offline mock players) is projected onto a small
tagged variant. The battle engine only ever reads ``name`` and ``deck``.

An opponent without a deck of its own borrows the player's deck during the
battle. That is a deliberate simplification: the API does not expose decks
for clan members, tournament members or ranked players.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Optional, Sequence

import numpy as np

from ..core.data import Card, GameMode, OpponentKind, PlayerProfile, normalise_tag
from ..clients.clash_client import ClashApiError

if TYPE_CHECKING:
    from ..clients.clash_client import ClashApiClient


DEFAULT_OPPONENT_NAME = "Default Enemy"
DEFAULT_OPPONENT_TROPHIES = 1000
RANKING_LIMIT = 10


@dataclass(frozen=True)
class Opponent:
    """Common projection of every opponent variant."""
    kind: ClassVar[OpponentKind]
    name: str
    rating: int = 0
    deck: tuple[Card, ...] = field(default_factory=tuple)

    @property
    def has_deck(self) -> bool:
        return len(self.deck) > 0

    def battle_deck(self, fallback: Sequence[Card]) -> tuple[Card, ...]:
        """The opponent's own deck, or ``fallback`` when it has none."""
        return self.deck if self.deck else tuple(fallback)


@dataclass(frozen=True)
class ClanMemberOpponent(Opponent):
    kind: ClassVar[OpponentKind] = OpponentKind.CLAN_MEMBER


@dataclass(frozen=True)
class WarParticipantOpponent(Opponent):
    kind: ClassVar[OpponentKind] = OpponentKind.WAR_PARTICIPANT


@dataclass(frozen=True)
class TournamentOpponent(Opponent):
    kind: ClassVar[OpponentKind] = OpponentKind.TOURNAMENT


@dataclass(frozen=True)
class RankingOpponent(Opponent):
    kind: ClassVar[OpponentKind] = OpponentKind.RANKING


@dataclass(frozen=True)
class MockOpponent(Opponent):
    kind: ClassVar[OpponentKind] = OpponentKind.MOCK


@dataclass(frozen=True)
class DefaultOpponent(Opponent):
    kind: ClassVar[OpponentKind] = OpponentKind.DEFAULT
    name: str = DEFAULT_OPPONENT_NAME
    rating: int = DEFAULT_OPPONENT_TROPHIES


class OpponentSelector:
    """Finds an opponent for the selected game mode.

    Collaborator failures and empty results never propagate: they produce a
    ``DefaultOpponent`` and a notice explaining the switch.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        client: Optional["ClashApiClient"] = None,
        mock_players: Optional[Sequence[PlayerProfile]] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.rng = rng
        self.client = client
        self.mock_players = list(mock_players) if mock_players is not None else None
        self._notify = notify or (lambda message: None)

    @property
    def is_offline(self) -> bool:
        return self.mock_players is not None

    def _pick(self, items: Sequence):
        return items[int(self.rng.integers(len(items)))]

    def _fallback(self, reason: str) -> DefaultOpponent:
        self._notify(f"{reason} Switching to default opponent.")
        return DefaultOpponent()

    def select(self, mode: Optional[GameMode], player: PlayerProfile, query: str = "") -> Opponent:
        """
        Pick an opponent for a battle.

        Args:
            mode: Selected game mode (None for an unrecognised choice)
            player: The player looking for a battle
            query: Tournament tag/name or location id, depending on the mode

        Returns:
            The chosen opponent, or DefaultOpponent on any failure
        """
        if self.is_offline:
            return self._select_mock(player)

        if mode is None:
            return self._fallback("Invalid mode.")
        if self.client is None:
            return self._fallback("No API client available.")

        try:
            if mode == GameMode.NORMAL:
                return self._select_clan_member(player)
            if mode == GameMode.TOURNAMENT:
                return self._select_tournament_member(query)
            if mode == GameMode.RANKED:
                return self._select_ranked_player(query)
            return self._select_war_participant(player)
        except ClashApiError as e:
            return self._fallback(f"Could not fetch opponents ({e}).")

    def _select_mock(self, player: PlayerProfile) -> Opponent:
        assert self.mock_players is not None
        own_tag = normalise_tag(player.tag)
        candidates = [p for p in self.mock_players if normalise_tag(p.tag) != own_tag]
        if len(self.mock_players) < 2 or not candidates:
            return DefaultOpponent()
        mock = self._pick(candidates)
        return MockOpponent(name=mock.name, rating=mock.trophies, deck=mock.current_deck)

    def _select_clan_member(self, player: PlayerProfile) -> Opponent:
        if not player.clan_tag:
            return self._fallback("You are not in a clan.")
        members = self.client.fetch_clan_members(player.clan_tag)
        if not members:
            return self._fallback("No clan members found.")
        member = self._pick(members)
        return ClanMemberOpponent(name=member.name, rating=member.trophies)

    def _select_tournament_member(self, query: str) -> Opponent:
        if not query.strip():
            return self._fallback("No tournament given.")
        tournament = self.client.search_tournament(query.strip())
        if not tournament.members_list:
            return self._fallback("Tournament not found.")
        member = self._pick(tournament.members_list)
        return TournamentOpponent(name=member.name, rating=member.score)

    def _select_ranked_player(self, location_id: str) -> Opponent:
        rankings = self.client.fetch_location_player_rankings(location_id.strip() or "global", RANKING_LIMIT)
        if not rankings:
            return self._fallback("No ranked players found.")
        ranked = self._pick(rankings)
        return RankingOpponent(name=ranked.name, rating=ranked.trophies)

    def _select_war_participant(self, player: PlayerProfile) -> Opponent:
        if not player.clan_tag:
            return self._fallback("You are not in a clan.")
        war = self.client.fetch_current_war(player.clan_tag)
        if not war.participants:
            return self._fallback("No clan war found.")
        participant = self._pick(war.participants)
        return WarParticipantOpponent(name=participant.name, rating=0)
