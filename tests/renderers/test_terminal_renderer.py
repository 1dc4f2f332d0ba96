"""Unit tests for the ANSI terminal renderer."""

import io

import pytest

from terminal_royale.core.data import Card
from terminal_royale.core.engine.battle_state import BattleSnapshot, SideSnapshot
from terminal_royale.core.renderer import RendererConfig
from terminal_royale.renderers.terminal_renderer import TerminalRenderer


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def renderer(stream):
    return TerminalRenderer(RendererConfig(use_color=False), stream=stream)


def test_status_lines(renderer, stream):
    snapshot = BattleSnapshot(
        player=SideSnapshot((1000, 640, 2000), 4.5),
        opponent=SideSnapshot((0, 1000, 2000), 7.0),
        elapsed=12.4,
    )

    renderer.show_status(snapshot)

    lines = stream.getvalue().splitlines()
    assert lines[1:] == [
        "Your Towers: GT1 1000 | GT2 640 | King 2000",
        "Opponent Towers: GT1 0 | GT2 1000 | King 2000",
        "Your Elixir: 4.5 | Opponent Elixir: 7.0 | Time: 12s",
    ]


def test_deck_listing(renderer, stream):
    renderer.show_deck([Card("Knight", 1), Card("Mystery", 2)])

    lines = stream.getvalue().splitlines()
    assert lines[1:] == [
        "Your deck:",
        "1. Knight (Level 1, Elixir: 3, Damage: 200, HP: 800)",
        "2. Mystery (Level 2, Elixir: 3, Damage: 50, HP: 100)",
    ]


def test_replay_is_numbered(renderer, stream):
    renderer.show_replay(["Player surrendered", "Match ended! Draw."])

    assert stream.getvalue().splitlines()[1:] == [
        "Match replay:",
        "1. Player surrendered",
        "2. Match ended! Draw.",
    ]


def test_prompt_has_no_newline(renderer, stream):
    renderer.show_prompt("Enter your player tag: ")
    assert stream.getvalue() == "Enter your player tag: "


def test_plain_mode_writes_no_escape_codes(renderer, stream):
    renderer.start()
    renderer.show_notice("Not enough elixir!")
    renderer.show_banner("You surrendered!")
    renderer.stop()

    assert "\033" not in stream.getvalue()
    assert "Terminal Royale" in stream.getvalue()
    assert not renderer.is_running


def test_color_mode(stream):
    renderer = TerminalRenderer(RendererConfig(use_color=True), stream=stream)

    renderer.clear()
    renderer.show_notice("careful")

    output = stream.getvalue()
    assert output.startswith("\033[2J\033[H")
    assert "\033[93mcareful\033[0m" in output
