"""
Unit tests for the Game session orchestrator.

Sessions are driven by a ConsoleReader over an in-memory stream and a
RecordingRenderer, so the whole prompt flow runs without a terminal.
"""

import io
from dataclasses import replace
from unittest.mock import patch

import pytest

from terminal_royale.clients.clash_client import NotFoundError
from terminal_royale.clients.fixtures import FixtureLoadError
from terminal_royale.core.data import BattleOutcome, GameMode
from terminal_royale.core.input import ConsoleReader
from terminal_royale.game.battle_engine import SURRENDER_ENTRY
from terminal_royale.game.game import Game
from terminal_royale.game.opponents import DefaultOpponent


def make_game(renderer, script, **kwargs):
    kwargs.setdefault("save_log", False)
    return Game(renderer, reader=ConsoleReader(io.StringIO(script)), **kwargs)


class TestManagerProperties:

    def test_managers_require_initialize(self, recording_renderer):
        game = make_game(recording_renderer, "")

        with pytest.raises(RuntimeError, match="LogManager not initialized"):
            game.log_manager
        with pytest.raises(RuntimeError, match="UIManager not initialized"):
            game.ui_manager
        with pytest.raises(RuntimeError, match="OpponentSelector not initialized"):
            game.selector

    def test_initialize(self, recording_renderer):
        game = make_game(recording_renderer, "")

        game.initialize()

        assert recording_renderer.running
        assert game.ui_manager.surrender_token == "0"
        assert game.log_manager.messages[-1].text == "Session initialized"


class TestOfflineSession:

    def test_surrender_session(self, recording_renderer):
        game = make_game(recording_renderer, "2\n#PLAYER1\n1\n0\nn\n")

        summary = game.run()

        assert summary.player.name == "Alice"
        assert len(summary.results) == 1
        result = summary.results[0]
        assert result.outcome == BattleOutcome.SURRENDER
        assert result.replay == (SURRENDER_ENTRY,)

        messages = recording_renderer.texts("message")
        assert "\nWelcome Alice (Level 12, Trophies: 4200)!" in messages
        assert any(m.startswith("Opponent: ") for m in messages)
        assert messages[-1] == "Thank you for playing!"
        assert recording_renderer.texts("banner")[-1] == "You surrendered!"
        assert recording_renderer.texts("replay") == [(SURRENDER_ENTRY,)]
        assert len(recording_renderer.texts("deck")[0]) == 8
        assert not recording_renderer.running

    def test_unknown_and_empty_tags_are_reprompted(self, recording_renderer):
        game = make_game(recording_renderer, "2\n#NOPE\n\n#PLAYER2\n")

        summary = game.run()

        assert summary.player.name == "Bob"
        assert summary.results == ()
        messages = recording_renderer.texts("message")
        assert "Player not found in player.json. Please enter a valid tag (e.g., #PLAYER1 or #PLAYER2)." in messages
        assert "Player tag cannot be empty. Please try again." in messages

    def test_offline_forces_normal_mode(self, recording_renderer):
        game = make_game(recording_renderer, "#PLAYER1\n3\n", offline=True)
        game.initialize()
        game.setup_session()
        game.find_player()

        mode, query = game.choose_mode()

        assert (mode, query) == (GameMode.NORMAL, "")
        assert "Test Mode only supports Normal Mode. Switching to Normal Mode." in recording_renderer.texts("message")
        assert "2. Tournament Mode (Battle in tournaments)" not in recording_renderer.texts("message")

    def test_input_ending_early_ends_the_session(self, recording_renderer):
        game = make_game(recording_renderer, "2\n")

        summary = game.run()

        assert summary.player is None
        assert summary.results == ()
        assert not recording_renderer.running

    def test_fixture_errors_propagate(self, recording_renderer, config, tmp_path):
        config = replace(config, fixture_path=str(tmp_path / "missing.json"))
        game = make_game(recording_renderer, "", config=config, offline=True)

        with pytest.raises(FixtureLoadError):
            game.run()

        # Cleanup still ran
        assert not recording_renderer.running


class TestLiveSession:

    @pytest.fixture
    def client_class(self):
        with patch("terminal_royale.game.game.ClashApiClient") as client_class:
            yield client_class

    def test_token_prompt_and_player_lookup(self, recording_renderer, sample_player, client_class, monkeypatch):
        monkeypatch.delenv("CLASH_API_TOKEN", raising=False)
        client = client_class.return_value
        client.fetch_player.side_effect = [NotFoundError("no player", 404, "notFound"), sample_player]
        game = make_game(recording_renderer, "1\n  \nsecret\n#BAD\n#PLAYER1\n")

        summary = game.run()

        assert summary.player == sample_player
        assert client_class.call_args.args == ("secret",)
        assert recording_renderer.texts("prompt").count("Enter your API Token: ") == 2
        assert "Player not found. Check tag or API token. Please try again." in recording_renderer.texts("message")
        client.close.assert_called_once()

    def test_token_from_environment(self, recording_renderer, client_class, monkeypatch):
        monkeypatch.setenv("CLASH_API_TOKEN", "from-env")
        game = make_game(recording_renderer, "", offline=False)

        assert game.setup_session()
        assert client_class.call_args.args == ("from-env",)

    def test_live_mode_menu_and_queries(self, recording_renderer, client_class):
        game = make_game(recording_renderer, "2\n#CUP\n3\n\n9\n", offline=False, token="t")
        game.initialize()
        game.setup_session()

        assert game.choose_mode() == (GameMode.TOURNAMENT, "#CUP")
        assert game.choose_mode() == (GameMode.RANKED, "")
        assert game.choose_mode() == (None, "")
        assert game.choose_mode() is None
        assert "4. Clan War Mode (Battle in clan wars)" in recording_renderer.texts("message")

    def test_invalid_mode_selects_default_opponent(self, recording_renderer, client_class, sample_player):
        game = make_game(recording_renderer, "", offline=False, token="t")
        game.initialize()
        game.setup_session()

        opponent = game.select_opponent(None, "", sample_player)

        assert isinstance(opponent, DefaultOpponent)
        assert "Invalid mode. Switching to default opponent." in recording_renderer.texts("notice")
        assert "Opponent: Default Enemy (Trophies: 1000)" in recording_renderer.texts("message")
