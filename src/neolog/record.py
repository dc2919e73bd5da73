"""
Record builder: caller location, context normalization and the structlog
processor chain that turns a level call into an immutable ``LogRecord``.
"""

from __future__ import annotations

import inspect
import itertools
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import MICROTIME_FORMAT
from .levels import Level

if TYPE_CHECKING:
    from .sinks import BaseSink

# Frames from these modules are never reported as the caller
SKIPPED_MODULES = ("neolog", "logging", "structlog")


@dataclass(frozen=True, slots=True)
class LogRecord:
    level: Level
    channel: str
    type: str
    message: Any
    logger_id: str
    datetime: datetime
    logger_time: str
    context: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    line: str | None = None

    @classmethod
    def from_event_dict(cls, event_dict: EventDict) -> LogRecord:
        return cls(
            level=event_dict["level"],
            channel=event_dict["channel"],
            type=event_dict["type"],
            message=event_dict.get("event", ""),
            logger_id=event_dict["loggerid"],
            datetime=event_dict["datetime"],
            logger_time=event_dict["loggertime"],
            context=dict(event_dict.get("context") or {}),
            extra=dict(event_dict.get("extra") or {}),
            line=event_dict.get("line"),
        )


def normalize_context(context: Any) -> dict[str, Any]:
    """Coerce arbitrary context into a fresh dict."""
    if context is None:
        return {}
    if isinstance(context, Mapping):
        return dict(context)
    if isinstance(context, (list, tuple)):
        return {str(i): v for i, v in enumerate(context)}
    return {"0": context}


# =============================================================================
# Caller Location
# =============================================================================


class CallerLocator:
    """Produces ``No.<n><relpath>:<lineno>`` for the first frame outside this package."""

    def __init__(self, path_prefix: str | None = None):
        self._path_prefix = path_prefix
        self._counter = itertools.count()

    @staticmethod
    def _is_skipped(module: str) -> bool:
        return any(module == name or module.startswith(f"{name}.") for name in SKIPPED_MODULES)

    def _caller(self) -> tuple[str, int]:
        frame = inspect.currentframe()
        try:
            while frame is not None:
                if not self._is_skipped(frame.f_globals.get("__name__", "")):
                    return frame.f_code.co_filename, frame.f_lineno
                frame = frame.f_back
        finally:
            del frame
        return "unknown", 0

    def relative(self, filename: str) -> str:
        prefix = (self._path_prefix or os.getcwd()).rstrip(os.sep) + os.sep
        if filename.startswith(prefix):
            return "/" + filename[len(prefix) :]
        return filename

    def locate(self) -> str:
        filename, lineno = self._caller()
        return f"No.{next(self._counter)}{self.relative(filename)}:{lineno}"


# =============================================================================
# Structlog Processors
# =============================================================================


def add_log_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Resolve the called method (``warn``, ``crit``...) to a Level."""
    event_dict["level"] = Level.from_name(method_name)
    return event_dict


def add_logger_id(logger: WrappedLogger, method_name: str, event_dict: EventDict, *, logger_id: str) -> EventDict:
    event_dict["loggerid"] = logger_id
    return event_dict


def add_timestamps(logger: WrappedLogger, method_name: str, event_dict: EventDict, *, tz: tzinfo) -> EventDict:
    """Add the record datetime and its microsecond string in the configured zone."""
    now = datetime.now(tz)
    event_dict["datetime"] = now
    event_dict["loggertime"] = now.strftime(MICROTIME_FORMAT)
    return event_dict


def move_line_from_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    # Copied so the caller's dict keeps `line` for the fallback entry
    context = dict(event_dict.get("context") or {})
    event_dict["line"] = context.pop("line", None)
    event_dict["context"] = context
    return event_dict


def add_extra(logger: WrappedLogger, method_name: str, event_dict: EventDict, *, host: str | None) -> EventDict:
    extra = event_dict.setdefault("extra", {})
    if host:
        extra["host"] = host
    return event_dict


class SinkRenderer:
    """Final processor: hand the built record to every sink that accepts its level.

    Raises ``DropEvent`` afterwards so the wrapped logger is never invoked.
    """

    def __init__(self, sinks: list[BaseSink]):
        self._sinks = sinks

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        record = LogRecord.from_event_dict(event_dict)
        for sink in self._sinks:
            if sink.handles(record.level):
                sink.emit(record)
        raise structlog.DropEvent
