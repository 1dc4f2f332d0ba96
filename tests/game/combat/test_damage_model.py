"""
Unit tests for damage calculation.

Scripted generators pin the jitter and both crit rolls so each formula
branch can be checked exactly; a seeded numpy generator checks the bounds.
"""

import numpy as np
import pytest

from terminal_royale.core.config import BattleConfig
from terminal_royale.core.data import Card, CardStats, TowerId, get_card_stats
from terminal_royale.core.engine.battle_state import SideState
from terminal_royale.game.combat.damage_model import (
    DamageRoll,
    base_damage,
    compute_damage,
    defending_crit_chance,
)

from conftest import StubRng


@pytest.fixture
def towers():
    return SideState.from_config(BattleConfig()).towers


class TestBaseDamage:

    def test_level_one_uses_catalog_damage(self):
        assert base_damage(Card("Knight", 1), get_card_stats("Knight")) == 200

    def test_ten_per_level_above_one(self):
        assert base_damage(Card("Knight", 11), get_card_stats("Knight")) == 300


class TestDefendingCritChance:

    def test_first_standing_tower(self, towers):
        assert defending_crit_chance(towers) == 0.05

    def test_king_tower_when_guards_are_down(self, towers):
        towers[0].hp_current = 0
        towers[1].hp_current = 0
        assert defending_crit_chance(towers) == 0.10

    def test_king_tower_when_nothing_stands(self, towers):
        for tower in towers:
            tower.hp_current = 0
        assert defending_crit_chance(towers) == 0.10


class TestComputeDamage:

    def test_knight_without_randomness(self, towers, stub_rng):
        roll = compute_damage(Card("Knight", 1), get_card_stats("Knight"), towers, stub_rng)

        assert roll == DamageRoll(damage=200, card_crit=False, tower_crit=False)
        assert stub_rng.integer_calls == [(-10, 11)]

    def test_jitter_is_added(self, towers):
        roll = compute_damage(Card("Knight", 1), get_card_stats("Knight"), towers, StubRng(integers=[-7]))
        assert roll.damage == 193

    def test_card_crit(self, towers):
        rng = StubRng(randoms=[0.0, 0.99])
        roll = compute_damage(Card("Musketeer", 1), get_card_stats("Musketeer"), towers, rng)

        assert roll.card_crit and not roll.tower_crit
        assert roll.damage == 150
        assert roll.annotation() == " [critical hit]"

    def test_tower_crit(self, towers):
        rng = StubRng(randoms=[0.99, 0.0])
        roll = compute_damage(Card("Musketeer", 1), get_card_stats("Musketeer"), towers, rng)

        assert roll.damage == 120
        assert roll.annotation() == " [tower crit]"

    def test_double_crit_is_exactly_one_point_eight(self, towers):
        rng = StubRng(randoms=[0.0, 0.0])
        roll = compute_damage(Card("Musketeer", 1), get_card_stats("Musketeer"), towers, rng)

        assert roll.damage == 180
        assert roll.multiplier == pytest.approx(1.8)
        assert roll.annotation() == " [critical hit + tower crit]"

    def test_damage_never_below_one(self, towers):
        weak = CardStats(elixir_cost=1, base_damage=0, hit_points=0, crit_chance=0.0)
        roll = compute_damage(Card("Nothing", 1), weak, towers, StubRng(integers=[-10]))
        assert roll.damage == 1

    def test_unknown_card_uses_fallback_stats(self, towers, stub_rng):
        roll = compute_damage(Card("Hog Rider", 1), get_card_stats("Hog Rider"), towers, stub_rng)
        assert roll.damage == 50

    def test_seeded_generator_bounds(self, towers):
        rng = np.random.default_rng(1234)
        stats = get_card_stats("Knight")
        card = Card("Knight", 1)

        for _ in range(500):
            roll = compute_damage(card, stats, towers, rng)
            assert 190 <= roll.damage <= int((210 * 3 * 6) / (2 * 5))

    def test_same_seed_same_rolls(self, towers):
        stats = get_card_stats("Goblin Barrel")
        card = Card("Goblin Barrel", 5)

        first = [compute_damage(card, stats, towers, np.random.default_rng(7)) for _ in range(3)]
        second = [compute_damage(card, stats, towers, np.random.default_rng(7)) for _ in range(3)]

        assert first == second
