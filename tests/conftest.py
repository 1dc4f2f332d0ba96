"""
Shared fixtures for the Terminal Royale test suite.

Provides deterministic random generators, manual clocks and small decks so
battle transitions can be tested without wall-clock time or network access.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from terminal_royale.core.config import BattleConfig
from terminal_royale.core.data import Card, PlayerProfile
from terminal_royale.core.engine.event_source import ManualClock
from terminal_royale.core.events.event_manager import EventManager


class StubRng:
    """Stands in for numpy's Generator with scripted draws.

    Without scripted values ``integers`` returns 0 (no jitter, first card)
    and ``random`` returns 0.99 (no crit).
    """

    def __init__(self, integers=(), randoms=()):
        self._integers = list(integers)
        self._randoms = list(randoms)
        self.integer_calls = []

    def integers(self, low, high=None):
        self.integer_calls.append((low, high))
        return self._integers.pop(0) if self._integers else 0

    def random(self):
        return self._randoms.pop(0) if self._randoms else 0.99


class RecordingRenderer:
    """Renderer double that records every call instead of printing."""

    def __init__(self):
        self.calls = []
        self.running = False

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def clear(self):
        pass

    def show_message(self, text):
        self.calls.append(("message", text))

    def show_notice(self, text):
        self.calls.append(("notice", text))

    def show_prompt(self, text):
        self.calls.append(("prompt", text))

    def show_status(self, snapshot):
        self.calls.append(("status", snapshot))

    def show_deck(self, deck):
        self.calls.append(("deck", tuple(deck)))

    def show_replay(self, entries):
        self.calls.append(("replay", tuple(entries)))

    def show_banner(self, text):
        self.calls.append(("banner", text))

    def texts(self, kind):
        return [value for call_kind, value in self.calls if call_kind == kind]


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def stub_rng():
    """A generator that never crits and never jitters."""
    return StubRng()


@pytest.fixture
def clock():
    """A manual clock starting at t=0."""
    return ManualClock()


@pytest.fixture
def config():
    """Default battle configuration."""
    return BattleConfig()


@pytest.fixture
def knight_deck():
    """A single level 1 Knight (3 elixir, 200 damage)."""
    return (Card("Knight", 1),)


@pytest.fixture
def sample_player():
    """A player profile with a small two-card deck."""
    return PlayerProfile(
        tag="#PLAYER1",
        name="Alice",
        exp_level=12,
        trophies=4200,
        current_deck=(Card("Knight", 1), Card("Archers", 3)),
        clan_tag="#CLAN1",
    )


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()
