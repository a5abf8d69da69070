"""Trace log for filesystem events.

The logger records structured entries for tree mutations, node
allocation, and failed commands.  It plays the part of a debug trace:
with tracing on, every inode allocation is recorded; with tracing off,
only mutations and failures are kept.

- **LogLevel**: severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry**: a single immutable record (level, message, source).
- **Logger**: an append-only buffer with a recording threshold,
  filtering, and clearing.

Levels are an ``IntEnum`` so they compare with ``<``.  ``filter``
returns a list because callers usually iterate more than once.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (``"fs"``,
            ``"shell"``).

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with a minimum recording level.

    Entries below ``min_level`` are dropped at ``log()`` time, so a
    logger created with ``LogLevel.INFO`` never holds DEBUG noise.
    """

    def __init__(self, *, min_level: LogLevel = LogLevel.DEBUG) -> None:
        """Create an empty logger that records *min_level* and above."""
        self._entries: list[LogEntry] = []
        self._min_level = min_level

    @property
    def min_level(self) -> LogLevel:
        """Return the recording threshold."""
        return self._min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all recorded entries in chronological order."""
        return list(self._entries)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Return True if an entry at *level* would be recorded."""
        return level >= self._min_level

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Record a new entry unless *level* is below the threshold.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.

        """
        if not self.is_enabled_for(level):
            return
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
