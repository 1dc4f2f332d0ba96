"""
Main session orchestration class.

This module coordinates a play session: choosing live or offline mode,
finding the player, then looping over opponent selection, battle and replay
until the player stops. The battle itself is delegated to BattleEngine; all
display goes through the UIManager and all logging through the LogManager.
"""

import os
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import numpy as np

from ..clients.clash_client import ClashApiClient, ClashApiError
from ..clients.fixtures import find_mock_player, load_mock_players
from ..core.config import BattleConfig
from ..core.data import GAME_MODE_NAMES, GameMode, PlayerProfile
from ..core.engine.event_source import RealtimeEventSource
from ..core.events.event_manager import EventManager
from ..core.events.events import LogMessage, LogSaveRequested, OpponentSelected
from ..core.input import ConsoleReader
from ..core.renderer import Renderer
from .battle_engine import BattleEngine, BattleResult
from .managers.log_manager import LogManager
from .managers.ui_manager import UIManager
from .opponents import Opponent, OpponentSelector


TManager = TypeVar("TManager")

API_TOKEN_ENV = "CLASH_API_TOKEN"
LIVE_MODE = "1"
TEST_MODE = "2"


@dataclass(frozen=True)
class SessionSummary:
    """Outcome of a whole session, one entry per finished battle."""
    player: Optional[PlayerProfile]
    results: tuple[BattleResult, ...]


class Game:
    """Session orchestrator that coordinates all game systems."""

    def __init__(
        self,
        renderer: Renderer,
        config: Optional[BattleConfig] = None,
        reader: Optional[ConsoleReader] = None,
        offline: Optional[bool] = None,
        token: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        save_log: bool = True,
    ):
        self.renderer = renderer
        self.config = config or BattleConfig()
        self.reader = reader or ConsoleReader()
        self.offline = offline
        self.token = token
        self.clock = clock
        self.save_log = save_log

        # Event system
        self.event_manager = EventManager(enable_debug_logging=False)

        # One seed sequence per session; every battle gets its own child stream
        self.seed_sequence = np.random.SeedSequence(self.config.seed)

        self.player: Optional[PlayerProfile] = None
        self.results: list[BattleResult] = []

        # Using private variables with properties for fail-fast validation
        self._log_manager: Optional[LogManager] = None
        self._ui_manager: Optional[UIManager] = None
        self._selector: Optional[OpponentSelector] = None
        self._client: Optional[ClashApiClient] = None

    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""
        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def ui_manager(self) -> UIManager:
        return self._require_manager(self._ui_manager, "UIManager")

    @property
    def selector(self) -> OpponentSelector:
        return self._require_manager(self._selector, "OpponentSelector")

    def _spawn_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed_sequence.spawn(1)[0])

    def initialize(self) -> None:
        """Start the renderer and the managers that live for the whole session."""
        self.renderer.start()

        self._log_manager = LogManager(event_manager=self.event_manager)
        self.event_manager.set_debug_callback(self.log_manager.debug)

        self._ui_manager = UIManager(
            renderer=self.renderer,
            event_manager=self.event_manager,
            surrender_token=self.config.surrender_token,
        )

        self.reader.start()
        self._emit_log("Session initialized")
        self.event_manager.process_events()

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(elapsed=0.0, message=message, category=category, level=level, source="Game"),
            source="Game",
        )

    def _ask(self, prompt: str) -> Optional[str]:
        """Prompt and block for one line. None means input has ended."""
        self.renderer.show_prompt(prompt)
        return self.reader.read_line()

    def _notify(self, message: str) -> None:
        self.renderer.show_notice(message)
        self._emit_log(message, "WARNING", "WARNING")

    def _log_request(self, method: str, path: str, status: int, elapsed: float) -> None:
        self._emit_log(f"{method} {path} -> {status} ({elapsed * 1000:.0f} ms)", "NETWORK", "DEBUG")

    def run(self) -> SessionSummary:
        """Run the session until the player quits or input ends."""
        self.initialize()
        try:
            if self.setup_session():
                self.player = self.find_player()
                if self.player is not None:
                    self.renderer.show_message(
                        f"\nWelcome {self.player.name} (Level {self.player.exp_level}, "
                        f"Trophies: {self.player.trophies})!"
                    )
                    self.renderer.show_message("Starting Clash Royale in terminal!")
                    self._battle_loop(self.player)
        finally:
            self.cleanup()

        return SessionSummary(player=self.player, results=tuple(self.results))

    def setup_session(self) -> bool:
        """Choose live or offline mode and prepare the opponent selector.

        Returns:
            False if input ended before the session could be set up

        Raises:
            FixtureLoadError: Offline mode could not load the mock players
        """
        if self.offline is None:
            answer = self._ask("Select mode (1: Live Mode, 2: Test Mode): ")
            if answer is None:
                return False
            self.offline = answer.strip() == TEST_MODE

        if self.offline:
            mock_players = load_mock_players(self.config.fixture_path)
            self._emit_log(f"Loaded {len(mock_players)} mock players from {self.config.fixture_path}")
            self._selector = OpponentSelector(self._spawn_rng(), mock_players=mock_players, notify=self._notify)
            return True

        token = self.token or os.environ.get(API_TOKEN_ENV, "")
        while not token.strip():
            answer = self._ask("Enter your API Token: ")
            if answer is None:
                return False
            token = answer

        self._client = ClashApiClient(
            token.strip(),
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout,
            on_request=self._log_request,
        )
        self._selector = OpponentSelector(self._spawn_rng(), client=self._client, notify=self._notify)
        return True

    def find_player(self) -> Optional[PlayerProfile]:
        """Prompt for a player tag until a player is found or input ends."""
        while True:
            tag = self._ask("Enter player tag ( #ABC123): ")
            if tag is None:
                return None
            tag = tag.strip()
            if not tag:
                self.renderer.show_message("Player tag cannot be empty. Please try again.")
                continue

            if self.selector.is_offline:
                player = find_mock_player(self.selector.mock_players or [], tag)
                if player is None:
                    self.renderer.show_message(
                        "Player not found in player.json. Please enter a valid tag (e.g., #PLAYER1 or #PLAYER2)."
                    )
                    continue
                return player

            assert self._client is not None
            try:
                return self._client.fetch_player(tag)
            except ClashApiError as e:
                self._emit_log(f"Player lookup failed for {tag}: {e}", "WARNING", "WARNING")
                self.renderer.show_message("Player not found. Check tag or API token. Please try again.")

    def choose_mode(self) -> Optional[tuple[Optional[GameMode], str]]:
        """Show the mode menu and read the choice plus any follow-up query.

        Returns:
            (mode, query) where mode is None for an unrecognised choice, or
            None if input ended
        """
        self.renderer.show_message("\nSelect game mode:")
        modes = [GameMode.NORMAL] if self.selector.is_offline else list(GameMode)
        for mode in modes:
            self.renderer.show_message(f"{mode.value}. {GAME_MODE_NAMES[mode]}")
        choices = ", ".join(mode.value for mode in modes)
        answer = self._ask(f"Enter number ({choices}): ")
        if answer is None:
            return None

        try:
            mode: Optional[GameMode] = GameMode(answer.strip())
        except ValueError:
            mode = None

        if self.selector.is_offline:
            if mode != GameMode.NORMAL:
                self.renderer.show_message("Test Mode only supports Normal Mode. Switching to Normal Mode.")
            return GameMode.NORMAL, ""

        query = ""
        if mode == GameMode.TOURNAMENT:
            query = self._ask("Enter tournament tag (e.g., #XYZ123) or name to search: ")
        elif mode == GameMode.RANKED:
            query = self._ask("Enter location ID (e.g., global or country code like 57000000): ")
        if query is None:
            return None
        return mode, query

    def select_opponent(self, mode: Optional[GameMode], query: str, player: PlayerProfile) -> Opponent:
        opponent = self.selector.select(mode, player, query)
        self.event_manager.publish(
            OpponentSelected(
                elapsed=0.0,
                opponent_name=opponent.name,
                rating=opponent.rating,
                kind_name=opponent.kind.name,
            ),
            source="Game",
        )
        self._emit_log(f"Selected {opponent.kind.name.lower()} opponent {opponent.name}")
        self.event_manager.process_events()
        return opponent

    def play_battle(self, player: PlayerProfile, opponent: Opponent) -> BattleResult:
        """Run one battle against ``opponent`` on the shared input queue."""
        self.renderer.show_deck(player.current_deck)
        self.ui_manager.set_deck_size(len(player.current_deck))

        source = RealtimeEventSource(
            self.reader.lines,
            regen_interval=self.config.regen_interval,
            opponent_interval=self.config.opponent_interval,
            surrender_token=self.config.surrender_token,
            clock=self.clock,
        )
        engine = BattleEngine(
            player_name=player.name,
            player_deck=player.current_deck,
            opponent=opponent,
            event_source=source,
            event_manager=self.event_manager,
            config=self.config,
            rng=self._spawn_rng(),
            clock=self.clock,
        )
        result = engine.run()
        self.results.append(result)
        self.renderer.show_replay(result.replay)
        return result

    def _battle_loop(self, player: PlayerProfile) -> None:
        while True:
            choice = self.choose_mode()
            if choice is None:
                return
            mode, query = choice

            opponent = self.select_opponent(mode, query, player)
            self.play_battle(player, opponent)

            answer = self._ask("\nContinue playing? (y/n): ")
            if answer is None or answer.strip().lower() != "y":
                self.renderer.show_message("Thank you for playing!")
                return

    def cleanup(self) -> None:
        """Clean up resources."""
        self._emit_log("Session ended")
        if self.save_log and self._log_manager is not None:
            self.event_manager.publish(LogSaveRequested(elapsed=0.0), source="Game")
        self.event_manager.process_events()
        self.event_manager.shutdown()

        if self._client is not None:
            self._client.close()
            self._client = None

        self.renderer.stop()
