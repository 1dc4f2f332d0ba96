"""
Damage calculation for card plays.

This module computes how much damage a card deals to a defending side. It is
pure: the random generator passed in is the only source of randomness and no
state is touched, so the same generator state always yields the same roll.
"""
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Sequence

import numpy as np

from ...core.data import Card, CardStats, TowerId
from ...core.engine.battle_state import Tower


LEVEL_DAMAGE_BONUS = 10
JITTER_RANGE = 10
CARD_CRIT_MULTIPLIER = Fraction(3, 2)
TOWER_CRIT_MULTIPLIER = Fraction(6, 5)


@dataclass(frozen=True)
class DamageRoll:
    """Outcome of a single damage calculation."""
    damage: int
    card_crit: bool
    tower_crit: bool

    @property
    def multiplier(self) -> float:
        return float(crit_multiplier(self.card_crit, self.tower_crit))

    def annotation(self) -> str:
        """Crit marker appended to replay entries, empty without crits."""
        if self.card_crit and self.tower_crit:
            return " [critical hit + tower crit]"
        if self.card_crit:
            return " [critical hit]"
        if self.tower_crit:
            return " [tower crit]"
        return ""


def crit_multiplier(card_crit: bool, tower_crit: bool) -> Fraction:
    multiplier = Fraction(1)
    if card_crit:
        multiplier *= CARD_CRIT_MULTIPLIER
    if tower_crit:
        multiplier *= TOWER_CRIT_MULTIPLIER
    return multiplier


def base_damage(card: Card, stats: CardStats) -> int:
    """Card damage before randomness: base damage plus 10 per level above 1."""
    return stats.base_damage + (card.level - 1) * LEVEL_DAMAGE_BONUS


def defending_crit_chance(defending_towers: Sequence[Tower]) -> float:
    """Crit chance of the first standing tower, or the King Tower's when none stand."""
    for tower in defending_towers:
        if tower.hp_current > 0:
            return tower.crit_chance
    for tower in defending_towers:
        if tower.tower_id == TowerId.KING_TOWER:
            return tower.crit_chance
    return 0.0


def compute_damage(
    card: Card,
    stats: CardStats,
    defending_towers: Sequence[Tower],
    rng: np.random.Generator,
) -> DamageRoll:
    """
    Roll damage for a card against a defending side.

    Args:
        card: The card being played
        stats: Catalog stats for the card (fallback entry on a miss)
        defending_towers: The defending side's towers in fixed order
        rng: Random generator, seeded per battle

    Returns:
        DamageRoll with damage >= 1 and both crit flags
    """
    jitter = int(rng.integers(-JITTER_RANGE, JITTER_RANGE + 1))
    card_crit = bool(rng.random() < stats.crit_chance)
    tower_crit = bool(rng.random() < defending_crit_chance(defending_towers))

    # Fractions keep the double crit at exactly x1.8
    multiplier = crit_multiplier(card_crit, tower_crit)
    damage = max(1, math.floor((base_damage(card, stats) + jitter) * multiplier))
    return DamageRoll(damage=damage, card_crit=card_crit, tower_crit=tower_crit)
