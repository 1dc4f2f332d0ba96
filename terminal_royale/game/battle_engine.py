"""
Battle engine: the event loop of a single battle.

The engine owns the BattleState for the lifetime of one battle. It pulls one
message at a time from its EventSource, applies the matching transition to
completion, records the result in the replay log and publishes display
events. Termination happens on exactly one of PLAYER_WIN, OPPONENT_WIN,
SURRENDER or DRAW, and every terminal branch stops the event source first.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from ..core.config import BattleConfig
from ..core.data import BattleOutcome, Card, Side, get_card_stats
from ..core.engine.battle_state import BattleSnapshot, BattleState
from ..core.engine.event_source import (
    BattleMessage,
    EventSource,
    OpponentTick,
    PlayerInput,
    RegenTick,
    Surrender,
)
from ..core.engine.replay import ReplayLog
from ..core.events.event_manager import EventManager
from ..core.events.events import (
    BattleEnded,
    BattleNotice,
    BattleStarted,
    CardPlayed,
    ElixirRegenerated,
    LogMessage,
    OpponentSkipped,
)
from .ai.opponent_policy import OpponentPolicy, RandomCardPolicy
from .combat.damage_model import compute_damage
from .opponents import Opponent


SURRENDER_ENTRY = "Player surrendered"
PLAYER_WIN_ENTRY = "Player won the match"
OPPONENT_WIN_ENTRY = "Opponent won the match"
DRAW_ENTRY = "Match ended in a draw"

OUTCOME_ENTRIES = {
    BattleOutcome.SURRENDER: SURRENDER_ENTRY,
    BattleOutcome.PLAYER_WIN: PLAYER_WIN_ENTRY,
    BattleOutcome.OPPONENT_WIN: OPPONENT_WIN_ENTRY,
    BattleOutcome.DRAW: DRAW_ENTRY,
}


@dataclass(frozen=True)
class BattleResult:
    """What a finished battle hands back to the caller."""
    outcome: BattleOutcome
    replay: tuple[str, ...]
    snapshot: BattleSnapshot
    elapsed: float


class BattleEngine:
    """Runs one battle between the player and an opponent."""

    def __init__(
        self,
        player_name: str,
        player_deck: Sequence[Card],
        opponent: Opponent,
        event_source: EventSource,
        event_manager: EventManager,
        config: Optional[BattleConfig] = None,
        rng: Optional[np.random.Generator] = None,
        policy: Optional[OpponentPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.player_name = player_name
        self.player_deck = tuple(player_deck)
        self.opponent = opponent
        # Opponents without their own deck play the player's cards
        self.opponent_deck = opponent.battle_deck(self.player_deck)
        self.event_source = event_source
        self.event_manager = event_manager
        self.config = config or BattleConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.policy = policy or RandomCardPolicy(min_elixir=self.config.opponent_play_cost)
        self.clock = clock

        self.replay = ReplayLog()
        self._state: Optional[BattleState] = None
        self.outcome: Optional[BattleOutcome] = None

    @property
    def state(self) -> BattleState:
        if self._state is None:
            raise RuntimeError("Battle not started. Call run() first.")
        return self._state

    def _elapsed(self) -> float:
        return self.state.elapsed(self.clock())

    def _snapshot(self) -> BattleSnapshot:
        return self.state.snapshot(self.clock())

    def _emit_log(self, message: str, category: str = "BATTLE", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(
                elapsed=self._elapsed() if self._state else 0.0,
                message=message,
                category=category,
                level=level,
                source="BattleEngine",
            ),
            source="BattleEngine",
        )

    def _notice(self, message: str, category: str = "INPUT") -> None:
        """Report a recoverable condition. Never touches the replay log."""
        self.event_manager.publish(BattleNotice(elapsed=self._elapsed(), message=message), source="BattleEngine")
        self._emit_log(message, category)

    def _record(self, entry: str) -> None:
        self.replay.append(entry)
        self._emit_log(entry)

    def run(self) -> BattleResult:
        """Run the battle until it reaches a terminal outcome."""
        if self._state is not None:
            raise RuntimeError("A BattleEngine runs a single battle")

        self._state = BattleState.new(self.config, self.clock())
        self.event_manager.publish(
            BattleStarted(
                elapsed=0.0,
                player_name=self.player_name,
                opponent_name=self.opponent.name,
                snapshot=self._snapshot(),
            ),
            source="BattleEngine",
        )
        self._emit_log(f"Battle started: {self.player_name} vs {self.opponent.name}", "SYSTEM")
        self.event_manager.process_events()

        self.event_source.start()
        try:
            while True:
                message = self.event_source.next_event()
                if message is None:
                    self._emit_log("Event source closed before the battle ended", "WARNING", "WARNING")
                    return self._finish(BattleOutcome.DRAW)

                outcome = self.handle(message)
                if outcome is None and self._elapsed() > self.config.time_limit:
                    outcome = BattleOutcome.DRAW
                if outcome is not None:
                    return self._finish(outcome)

                self.event_manager.process_events()
        finally:
            self.event_source.stop()

    def handle(self, message: BattleMessage) -> Optional[BattleOutcome]:
        """Apply one transition. Returns the outcome if it was terminal."""
        if isinstance(message, Surrender):
            return BattleOutcome.SURRENDER
        if isinstance(message, PlayerInput):
            return self._handle_player_input(message.text)
        if isinstance(message, RegenTick):
            return self._handle_regen_tick()
        if isinstance(message, OpponentTick):
            return self._handle_opponent_tick()
        raise TypeError(f"Unknown battle message: {message!r}")

    def _parse_choice(self, text: str) -> Optional[int]:
        text = text.strip()
        # ASCII digits only
        if not (text.isascii() and text.isdigit()):
            return None
        choice = int(text)
        if choice < 1 or choice > len(self.player_deck):
            return None
        return choice

    def _handle_player_input(self, text: str) -> Optional[BattleOutcome]:
        choice = self._parse_choice(text)
        if choice is None:
            self._notice(f"Invalid choice. Please select a number from 1 to {len(self.player_deck)}")
            return None

        card = self.player_deck[choice - 1]
        stats = get_card_stats(card.name)
        player = self.state.side(Side.PLAYER)
        if not self.state.spend(Side.PLAYER, stats.elixir_cost):
            self._notice(f"Not enough elixir! Need {stats.elixir_cost}, you have {player.elixir:.1f}.")
            return None

        opponent = self.state.side(Side.OPPONENT)
        roll = compute_damage(card, stats, opponent.towers, self.rng)
        target = self.state.apply_damage(Side.OPPONENT, roll.damage)
        self._record(
            f"Player used {card.name} (Level {card.level}) dealing {roll.damage} damage to {target}{roll.annotation()}"
        )
        self.event_manager.publish(
            CardPlayed(
                elapsed=self._elapsed(),
                side=Side.PLAYER,
                actor_name=self.player_name,
                card_name=card.name,
                card_level=card.level,
                damage=roll.damage,
                target_description=target,
                card_crit=roll.card_crit,
                tower_crit=roll.tower_crit,
                snapshot=self._snapshot(),
            ),
            source="BattleEngine",
        )

        if self.state.is_king_tower_down(Side.OPPONENT):
            return BattleOutcome.PLAYER_WIN
        return None

    def _handle_regen_tick(self) -> Optional[BattleOutcome]:
        self.state.regenerate(Side.PLAYER)
        self.state.regenerate(Side.OPPONENT)
        self.event_manager.publish(
            ElixirRegenerated(elapsed=self._elapsed(), snapshot=self._snapshot(), deck_size=len(self.player_deck)),
            source="BattleEngine",
        )
        return None

    def _handle_opponent_tick(self) -> Optional[BattleOutcome]:
        if self.state.is_king_tower_down(Side.PLAYER):
            return None

        opponent = self.state.side(Side.OPPONENT)
        player = self.state.side(Side.PLAYER)
        decision = self.policy.decide_and_act(
            self.opponent_deck, opponent.elixir, self.opponent.name, player.towers, self.rng
        )

        # Flat cost regardless of the card actually played
        if decision.played and not self.state.spend(Side.OPPONENT, self.config.opponent_play_cost):
            decision = self.policy.skip(self.opponent.name)

        if not decision.played:
            self.event_manager.publish(
                OpponentSkipped(elapsed=self._elapsed(), opponent_name=self.opponent.name, reason=decision.description),
                source="BattleEngine",
            )
            self._emit_log(decision.description, "AI", "DEBUG")
            return None

        target = self.state.apply_damage(Side.PLAYER, decision.damage)
        self._record(f"{decision.description} to {target}{decision.annotation}")

        card = decision.card
        self.event_manager.publish(
            CardPlayed(
                elapsed=self._elapsed(),
                side=Side.OPPONENT,
                actor_name=self.opponent.name,
                card_name=card.name if card else "",
                card_level=card.level if card else 0,
                damage=decision.damage,
                target_description=target,
                card_crit=decision.card_crit,
                tower_crit=decision.tower_crit,
                snapshot=self._snapshot(),
            ),
            source="BattleEngine",
        )

        if self.state.is_king_tower_down(Side.PLAYER):
            return BattleOutcome.OPPONENT_WIN
        return None

    def _finish(self, outcome: BattleOutcome) -> BattleResult:
        """Stop the timers, record the outcome as the final entry and report."""
        self.event_source.stop()
        self.outcome = outcome
        entry = OUTCOME_ENTRIES[outcome]
        self._record(entry)

        snapshot = self._snapshot()
        self.event_manager.publish(
            BattleEnded(elapsed=snapshot.elapsed, outcome=outcome, final_entry=entry, snapshot=snapshot),
            source="BattleEngine",
        )
        self.event_manager.process_events()

        return BattleResult(
            outcome=outcome,
            replay=self.replay.entries,
            snapshot=snapshot,
            elapsed=snapshot.elapsed,
        )
