"""Combat calculations."""

from .damage_model import DamageRoll, compute_damage, base_damage, crit_multiplier, defending_crit_chance

__all__ = ["DamageRoll", "compute_damage", "base_damage", "crit_multiplier", "defending_crit_chance"]
