"""Event sources feeding the battle engine.

The engine never waits on timers or input itself. It asks an ``EventSource``
for the next message and processes it to completion before asking again.

Core Concepts:
- Messages are immutable: Surrender, PlayerInput, RegenTick, OpponentTick
- RealtimeEventSource keeps wall-clock deadlines for the two periodic ticks
  and blocks on the console line queue until the earliest deadline
- ScriptedEventSource replays a fixed sequence against a ManualClock so the
  engine's transitions can be tested without real time passing
- ``stop()`` tears down both timers; a stopped source yields nothing
"""

from __future__ import annotations

import queue
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union


Clock = Callable[[], float]


@dataclass(frozen=True)
class Surrender:
    """The player gave up."""


@dataclass(frozen=True)
class PlayerInput:
    """A raw line typed by the player."""
    text: str


@dataclass(frozen=True)
class RegenTick:
    """Periodic elixir regeneration."""


@dataclass(frozen=True)
class OpponentTick:
    """Periodic opponent turn."""


BattleMessage = Union[Surrender, PlayerInput, RegenTick, OpponentTick]


def message_from_line(line: str, surrender_token: str = "0") -> BattleMessage:
    """Classify a console line as a surrender signal or a player input."""
    text = line.strip()
    if text == surrender_token:
        return Surrender()
    return PlayerInput(text)


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        self._now += seconds
        return self._now

    def set(self, now: float) -> None:
        self._now = now


class EventSource(ABC):
    """Yields the next of {surrender, input, regen tick, opponent tick}."""

    def __init__(self) -> None:
        self._started = False
        self._stopped = False

    @property
    def is_running(self) -> bool:
        return self._started and not self._stopped

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def start(self) -> None:
        self._started = True
        self._stopped = False

    def stop(self) -> None:
        """Stop both timers. Safe to call more than once."""
        self._stopped = True

    @abstractmethod
    def next_event(self) -> Optional[BattleMessage]:
        """Block until the next message is available.

        Returns:
            The next message, or None once the source is stopped or closed
        """
        pass


@dataclass(frozen=True)
class Timed:
    """A scripted message delivered at ``at`` seconds after start."""
    at: float
    message: BattleMessage


class ScriptedEventSource(EventSource):
    """Delivers a fixed message sequence, optionally moving a ManualClock."""

    def __init__(self, messages: Iterable[Union[BattleMessage, Timed]], clock: Optional[ManualClock] = None):
        super().__init__()
        self._pending: list[Union[BattleMessage, Timed]] = list(messages)
        self.clock = clock
        self._base_time = 0.0
        self.delivered: list[BattleMessage] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def start(self) -> None:
        super().start()
        if self.clock is not None:
            self._base_time = self.clock()

    def next_event(self) -> Optional[BattleMessage]:
        if self._stopped or not self._pending:
            return None

        item = self._pending.pop(0)
        if isinstance(item, Timed):
            if self.clock is not None:
                self.clock.set(self._base_time + item.at)
            item = item.message

        self.delivered.append(item)
        return item


class RealtimeEventSource(EventSource):
    """Wall-clock ticks merged with lines from a ConsoleReader queue."""

    def __init__(
        self,
        lines: "queue.Queue[Optional[str]]",
        regen_interval: float = 1.0,
        opponent_interval: float = 5.0,
        surrender_token: str = "0",
        clock: Clock = time.monotonic,
    ):
        super().__init__()
        if regen_interval <= 0 or opponent_interval <= 0:
            raise ValueError("Tick intervals must be positive")
        self.lines = lines
        self.regen_interval = regen_interval
        self.opponent_interval = opponent_interval
        self.surrender_token = surrender_token
        self.clock = clock
        self._next_regen = 0.0
        self._next_opponent = 0.0
        self._input_closed = False

    def start(self) -> None:
        super().start()
        now = self.clock()
        self._next_regen = now + self.regen_interval
        self._next_opponent = now + self.opponent_interval

    def stop(self) -> None:
        if self._input_closed and not self._stopped:
            # Hand the end-of-input marker back to the session
            self.lines.put(None)
        super().stop()

    def _reschedule(self, deadline: float, interval: float, now: float) -> float:
        # Missed ticks are dropped rather than delivered in a burst
        next_deadline = deadline + interval
        if next_deadline <= now:
            next_deadline = now + interval
        return next_deadline

    def _due_tick(self, now: float) -> Optional[BattleMessage]:
        regen_due = self._next_regen <= now
        opponent_due = self._next_opponent <= now

        if regen_due and (not opponent_due or self._next_regen <= self._next_opponent):
            self._next_regen = self._reschedule(self._next_regen, self.regen_interval, now)
            return RegenTick()
        if opponent_due:
            self._next_opponent = self._reschedule(self._next_opponent, self.opponent_interval, now)
            return OpponentTick()
        return None

    def next_event(self) -> Optional[BattleMessage]:
        if not self._started:
            self.start()

        while not self._stopped:
            now = self.clock()
            tick = self._due_tick(now)
            if tick is not None:
                return tick

            timeout = max(0.0, min(self._next_regen, self._next_opponent) - now)
            if self._input_closed:
                time.sleep(timeout)
                continue

            try:
                line = self.lines.get(timeout=timeout)
            except queue.Empty:
                continue

            if line is None:
                self._input_closed = True
                continue
            return message_from_line(line, self.surrender_token)

        return None
