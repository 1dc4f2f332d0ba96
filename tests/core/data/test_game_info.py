"""Unit tests for the static card catalog."""

from terminal_royale.core.data import CARD_DATA, FALLBACK_CARD_STATS, get_card_stats


class TestCardCatalog:

    def test_known_card_lookup(self):
        stats = get_card_stats("Knight")
        assert stats.elixir_cost == 3
        assert stats.base_damage == 200
        assert stats.hit_points == 800
        assert stats.crit_chance == 0.10

    def test_unknown_card_uses_fallback(self):
        assert get_card_stats("Hog Rider") == FALLBACK_CARD_STATS
        assert FALLBACK_CARD_STATS.elixir_cost == 3
        assert FALLBACK_CARD_STATS.base_damage == 50

    def test_catalog_contents(self):
        assert set(CARD_DATA) == {
            "Giant", "Musketeer", "Fireball", "Archers",
            "Knight", "Arrows", "Goblin Barrel", "Minions",
        }
        assert all(0.0 <= stats.crit_chance <= 1.0 for stats in CARD_DATA.values())

    def test_display_properties(self):
        assert get_card_stats("Giant").get_display_properties() == {"elixir": 6, "damage": 140, "hp": 2500}
