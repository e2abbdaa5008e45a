"""Bounded in-memory history of game events for the UI."""

from collections import deque
from datetime import datetime
from typing import Iterator

from pydantic import BaseModel

from mille_bornes.models.player import Seat

DEFAULT_CAPACITY = 50


class LogEntry(BaseModel, frozen=True):
    """One human-readable event line."""

    message: str
    timestamp: datetime
    owner: Seat

    def __str__(self) -> str:
        return f"{self.timestamp:%H:%M:%S} [{self.owner.value}] {self.message}"


class EventLog:
    """Append-only log keeping only the most recent entries."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def add(self, message: str, owner: Seat) -> LogEntry:
        """Append an entry, dropping the oldest when full."""
        entry = LogEntry(message=message, timestamp=datetime.now(), owner=owner)
        self._entries.append(entry)
        return entry

    def entries(self) -> list[LogEntry]:
        """Get a snapshot of the entries, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._entries)
