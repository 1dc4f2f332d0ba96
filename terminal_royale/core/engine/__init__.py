"""Core battle engine components.

This package contains the fundamental battle systems:
- battle_state.py: Towers, sides and the combat state owned by the engine
- event_source.py: Message types and the realtime / scripted event sources
- replay.py: Append-only replay log
"""

from .battle_state import (
    Tower,
    SideState,
    BattleState,
    BattleSnapshot,
    SideSnapshot,
    NO_TOWERS_LEFT,
)
from .event_source import (
    BattleMessage,
    Surrender,
    PlayerInput,
    RegenTick,
    OpponentTick,
    EventSource,
    ScriptedEventSource,
    RealtimeEventSource,
    ManualClock,
    Timed,
    message_from_line,
)
from .replay import ReplayLog

__all__ = [
    "Tower",
    "SideState",
    "BattleState",
    "BattleSnapshot",
    "SideSnapshot",
    "NO_TOWERS_LEFT",
    "BattleMessage",
    "Surrender",
    "PlayerInput",
    "RegenTick",
    "OpponentTick",
    "EventSource",
    "ScriptedEventSource",
    "RealtimeEventSource",
    "ManualClock",
    "Timed",
    "message_from_line",
    "ReplayLog",
]
