"""Append-only replay log of a battle."""

from __future__ import annotations

from typing import Iterator


class ReplayLog:
    """Ordered, append-only record of human-readable battle events.

    Entries keep the order in which the engine resolved them and are never
    reordered or pruned. Callers receive copies, not the backing list.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def append(self, entry: str) -> int:
        """Record an entry and return its 1-based position."""
        self._entries.append(entry)
        return len(self._entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def last(self) -> str | None:
        return self._entries[-1] if self._entries else None

    def numbered(self) -> list[str]:
        """Entries formatted for the end-of-match replay listing."""
        return [f"{i}. {entry}" for i, entry in enumerate(self._entries, start=1)]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))
