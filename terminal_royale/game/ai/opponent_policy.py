"""Opponent policy strategy classes.

This module implements the Strategy design pattern for the non-player side.
A policy decides whether and what the opponent plays on its turn; the battle
engine applies the result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ...core.data import Card, get_card_stats
from ...core.engine.battle_state import Tower
from ..combat.damage_model import compute_damage


MIN_PLAY_ELIXIR = 3


@dataclass(frozen=True)
class PolicyDecision:
    """What the opponent did on its turn. ``damage == 0`` means it skipped."""
    damage: int
    card_crit: bool
    tower_crit: bool
    description: str
    card: Optional[Card] = None
    annotation: str = ""

    @property
    def played(self) -> bool:
        return self.damage > 0


class OpponentPolicy(ABC):
    """Abstract base class for opponent policies."""

    @abstractmethod
    def decide_and_act(
        self,
        deck: Sequence[Card],
        elixir: float,
        opponent_name: str,
        defending_towers: Sequence[Tower],
        rng: np.random.Generator,
    ) -> PolicyDecision:
        """Decide the opponent's play for this turn.

        Args:
            deck: Cards the opponent can play
            elixir: Current opponent elixir pool
            opponent_name: Name used in the description
            defending_towers: The player's towers in fixed order
            rng: Battle random generator

        Returns:
            PolicyDecision with damage and a replay description
        """
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        pass

    @staticmethod
    def skip(opponent_name: str) -> PolicyDecision:
        return PolicyDecision(
            damage=0,
            card_crit=False,
            tower_crit=False,
            description=f"{opponent_name} skipped turn (not enough elixir)",
        )


class RandomCardPolicy(OpponentPolicy):
    """Plays a uniformly random card whenever ``min_elixir`` is banked.

    The battle engine sets ``min_elixir`` to the flat cost it charges per
    opponent play, so a card is only chosen when the play can be paid for.
    """

    def __init__(self, min_elixir: float = MIN_PLAY_ELIXIR):
        self.min_elixir = min_elixir

    def decide_and_act(
        self,
        deck: Sequence[Card],
        elixir: float,
        opponent_name: str,
        defending_towers: Sequence[Tower],
        rng: np.random.Generator,
    ) -> PolicyDecision:
        if elixir < self.min_elixir or len(deck) == 0:
            return self.skip(opponent_name)

        card = deck[int(rng.integers(len(deck)))]
        stats = get_card_stats(card.name)
        roll = compute_damage(card, stats, defending_towers, rng)

        return PolicyDecision(
            damage=roll.damage,
            card_crit=roll.card_crit,
            tower_crit=roll.tower_crit,
            description=f"{opponent_name} used {card.name} (Level {card.level}) dealing {roll.damage} damage",
            card=card,
            annotation=roll.annotation(),
        )

    def get_policy_name(self) -> str:
        return "Random Card"

