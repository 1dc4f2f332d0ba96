"""Event definitions for inter-system communication.

Event Design Principles:
- Events are immutable dataclasses
- All events include an ``elapsed`` timestamp (seconds since battle start,
  0.0 outside of a battle)
- Battle events carry a BattleSnapshot instead of live state, so subscribers
  can never mutate the battle
- Events use proper enums instead of magic strings
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

from ..data import BattleOutcome, Side

if TYPE_CHECKING:
    from ..engine.battle_state import BattleSnapshot


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Battle lifecycle
    BATTLE_STARTED = auto()
    BATTLE_ENDED = auto()

    # Battle actions
    CARD_PLAYED = auto()
    OPPONENT_SKIPPED = auto()
    ELIXIR_REGENERATED = auto()
    BATTLE_NOTICE = auto()      # Rejected input, insufficient elixir, fallbacks

    # Session
    OPPONENT_SELECTED = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all events."""
    elapsed: float
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class BattleStarted(GameEvent):
    """Event emitted once the battle state is initialized."""
    player_name: str
    opponent_name: str
    snapshot: "BattleSnapshot"

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.BATTLE_STARTED)


@dataclass(frozen=True)
class CardPlayed(GameEvent):
    """Event emitted after a card's damage has been applied."""
    side: Side
    actor_name: str
    card_name: str
    card_level: int
    damage: int
    target_description: str
    card_crit: bool
    tower_crit: bool
    snapshot: "BattleSnapshot"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CARD_PLAYED)


@dataclass(frozen=True)
class OpponentSkipped(GameEvent):
    """Event emitted when the opponent policy plays nothing."""
    opponent_name: str
    reason: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.OPPONENT_SKIPPED)


@dataclass(frozen=True)
class ElixirRegenerated(GameEvent):
    """Event emitted on every regeneration tick."""
    snapshot: "BattleSnapshot"
    deck_size: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ELIXIR_REGENERATED)


@dataclass(frozen=True)
class BattleNotice(GameEvent):
    """Event emitted for recoverable conditions that change nothing."""
    message: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_NOTICE)


@dataclass(frozen=True)
class BattleEnded(GameEvent):
    """Event emitted when the battle reaches a terminal outcome."""
    outcome: BattleOutcome
    final_entry: str
    snapshot: "BattleSnapshot"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_ENDED)


@dataclass(frozen=True)
class OpponentSelected(GameEvent):
    """Event emitted when the session has picked the next opponent."""
    opponent_name: str
    rating: int
    kind_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.OPPONENT_SELECTED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event for centralized logging through the LogManager."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event for debug-only messages."""
    message: str
    source: str = "unknown"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event requesting the log buffer to be written to disk."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
