"""Manager systems for session coordination.

This package contains the manager classes that react to battle and session
events through the event-driven architecture.
"""

from .log_manager import LogManager, LogLevel, LogCategory
from .ui_manager import UIManager

__all__ = [
    "LogManager",
    "LogLevel",
    "LogCategory",
    "UIManager",
]
