"""Static card information.

The catalog is read-only configuration data populated once at import time.
Lookups never fail: unknown cards resolve to ``FALLBACK_CARD_STATS``.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CardStats:
    """Combat statistics for a card."""
    elixir_cost: int
    base_damage: int
    hit_points: int   # Informational only, damage resolution ignores it
    crit_chance: float

    def get_display_properties(self) -> Dict[str, Any]:
        """Get properties shown next to a card in the deck list."""
        return {
            "elixir": self.elixir_cost,
            "damage": self.base_damage,
            "hp": self.hit_points,
        }


FALLBACK_CARD_STATS = CardStats(elixir_cost=3, base_damage=50, hit_points=100, crit_chance=0.05)

# Centralized data for all known cards
CARD_DATA: Dict[str, CardStats] = {
    "Giant": CardStats(6, 140, 2500, 0.05),
    "Musketeer": CardStats(4, 100, 600, 0.15),
    "Fireball": CardStats(3, 200, 0, 0.10),
    "Archers": CardStats(3, 120, 350, 0.10),
    "Knight": CardStats(3, 200, 800, 0.10),
    "Arrows": CardStats(2, 100, 0, 0.05),
    "Goblin Barrel": CardStats(3, 60, 150, 0.20),
    "Minions": CardStats(3, 70, 200, 0.10),
}


def get_card_stats(card_name: str) -> CardStats:
    """Look up a card's stats, substituting the fallback entry on a miss."""
    return CARD_DATA.get(card_name, FALLBACK_CARD_STATS)
