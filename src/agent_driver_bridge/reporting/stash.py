"""Buffer of command reports awaiting delivery.

Classes
-------
- ReportingStash  — ordered, drain-once buffer of ``CommandReport`` entries
"""
from __future__ import annotations

from collections.abc import Iterator

from agent_driver_bridge.reporting.models import CommandReport


class ReportingStash:
    """Ordered buffer of pending command reports.

    The stash belongs to exactly one router and is not thread-safe; it is
    appended to on the command path and drained when the session stops.
    """

    def __init__(self) -> None:
        self._entries: list[CommandReport] = []

    def append(self, entry: CommandReport) -> None:
        """Add ``entry`` at the end of the buffer."""
        self._entries.append(entry)

    def drain(self) -> list[CommandReport]:
        """Remove and return every buffered entry, oldest first."""
        entries, self._entries = self._entries, []
        return entries

    @property
    def entries(self) -> list[CommandReport]:
        """Snapshot of the buffered entries."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CommandReport]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ReportingStash(entries={len(self._entries)})"
