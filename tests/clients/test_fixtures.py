"""Unit tests for loading offline mock players."""

import json

import pytest

from terminal_royale.clients.fixtures import FixtureLoadError, find_mock_player, load_mock_players


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestLoadMockPlayers:

    def test_bundled_fixture(self):
        players = load_mock_players("assets/data/player.json")

        assert [p.tag for p in players] == ["#PLAYER1", "#PLAYER2", "#PLAYER3"]
        assert len(players[0].current_deck) == 8
        assert players[2].clan_tag is None

    def test_custom_file(self, tmp_path):
        path = write_json(tmp_path / "players.json", [{"tag": "#X", "name": "Xena", "trophies": 10}])

        players = load_mock_players(path)

        assert players[0].name == "Xena"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FixtureLoadError, match="Unable to read"):
            load_mock_players(str(tmp_path / "nope.json"))

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(FixtureLoadError, match="Unable to parse"):
            load_mock_players(str(path))

    def test_not_a_list(self, tmp_path):
        path = write_json(tmp_path / "object.json", {"tag": "#X"})

        with pytest.raises(FixtureLoadError, match="JSON array"):
            load_mock_players(path)

    def test_invalid_entry(self, tmp_path):
        path = write_json(tmp_path / "bad.json", [{"tag": "#X", "name": "Ok"}, {"tag": "#Y"}])

        with pytest.raises(FixtureLoadError, match="index 1"):
            load_mock_players(path)


class TestFindMockPlayer:

    @pytest.fixture
    def players(self):
        return load_mock_players("assets/data/player.json")

    @pytest.mark.parametrize("tag", ["#PLAYER2", "PLAYER2", "player2", " #player2 "])
    def test_tag_variants(self, players, tag):
        assert find_mock_player(players, tag).name == "Bob"

    def test_unknown_tag(self, players):
        assert find_mock_player(players, "#NOBODY") is None
