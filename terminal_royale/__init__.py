"""Terminal Royale: a turn-free, timer-driven tower battle played in the terminal."""

__version__ = "0.1.0"
