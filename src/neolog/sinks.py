"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Protocol

from .formatters import LineFormatter, LogstashFormatter
from .levels import Level

if TYPE_CHECKING:
    from redis import Redis

    from .record import LogRecord


class Formatter(Protocol):
    def format(self, record: LogRecord) -> str: ...


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    Args:
        level: Minimum level this sink writes.
        formatter: Renders a record into the sink's wire format.
    """

    def __init__(self, level: Level = Level.DEBUG, formatter: Formatter | None = None):
        self.level = level
        self.formatter: Formatter = formatter or LineFormatter()

    def handles(self, level: Level) -> bool:
        return level >= self.level

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Emit a log record to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StreamSink(BaseSink):
    """Standard stream sink (``stderr`` or ``stdout``), resolved on every write."""

    def __init__(self, name: str = "stderr", level: Level = Level.DEBUG, formatter: Formatter | None = None):
        if name not in ("stderr", "stdout"):
            raise ValueError(f"Unsupported stream: {name!r}")
        super().__init__(level, formatter)
        self.name = name

    @property
    def stream(self) -> Any:
        return getattr(sys, self.name)

    def emit(self, record: LogRecord) -> None:
        stream = self.stream
        stream.write(self.formatter.format(record))
        stream.flush()

    def close(self) -> None:
        pass


class FileSink(BaseSink):
    """Append-only local file sink. The file is opened on first write."""

    def __init__(self, path: str | Path, level: Level = Level.DEBUG, formatter: Formatter | None = None):
        super().__init__(level, formatter)
        self.path = Path(path)
        self._file: IO[str] | None = None

    def emit(self, record: LogRecord) -> None:
        if self._file is None:
            self._file = open(self.path, "a", encoding="utf-8")
        self._file.write(self.formatter.format(record))
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class RedisSink(BaseSink):
    """Pushes logstash-formatted records onto a Redis list."""

    def __init__(self, client: Redis, key: str, level: Level = Level.DEBUG, formatter: Formatter | None = None):
        super().__init__(level, formatter or LogstashFormatter(application_name="", system_name=key))
        self.client = client
        self.key = key

    def emit(self, record: LogRecord) -> None:
        self.client.rpush(self.key, self.formatter.format(record))

    def close(self) -> None:
        pass
