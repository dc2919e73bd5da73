"""
Record formatters and time helpers.
"""

from __future__ import annotations

import re
import time
from collections.abc import Mapping
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from .record import LogRecord

LONG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MICROTIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

SIMPLE_FORMAT = "[%loggertime%] %channel%.%level_name% %loggerid% %message% %context% %extra% %line%\n"
PLACEHOLDER = re.compile(r"%(\w+)%")


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(
        v,
        default=default,
        option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS,
    ).decode()


def format_long_date(ts: float | None = None, tz: tzinfo | None = None) -> str:
    """Format a unix timestamp (default: now) as ``Y-m-d H:i:s`` in ``tz``."""
    return datetime.fromtimestamp(ts or time.time(), tz).strftime(LONG_DATE_FORMAT)


def format_microtime(tz: tzinfo | None = None) -> str:
    """Current time as ``Y-m-d H:i:s.uuuuuu`` in ``tz``."""
    return datetime.now(tz).strftime(MICROTIME_FORMAT)


# =============================================================================
# Line Formatter
# =============================================================================


class LineFormatter:
    """Renders a record into a single text line by ``%placeholder%`` substitution."""

    def __init__(self, fmt: str = SIMPLE_FORMAT):
        self._fmt = fmt

    @staticmethod
    def _replace_newlines(text: str) -> str:
        if "\n" not in text and "\r" not in text:
            return text
        return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")

    @classmethod
    def stringify(cls, value: Any) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return cls._replace_newlines(str(value))
        if isinstance(value, Mapping) and not value:
            return "[]"
        return cls._replace_newlines(orjson_dumps(value))

    def format(self, record: LogRecord) -> str:
        values = {
            "loggertime": record.logger_time,
            "datetime": record.datetime.strftime(LONG_DATE_FORMAT),
            "channel": record.channel,
            "level_name": record.level.name,
            "loggerid": record.logger_id,
            "message": self.stringify(record.message),
            "context": self.stringify(record.context),
            "extra": self.stringify(record.extra),
            "line": record.line or "",
        }
        return PLACEHOLDER.sub(lambda match: values.get(match.group(1), match.group(0)), self._fmt)


# =============================================================================
# Logstash Formatter (v0 layout)
# =============================================================================


class LogstashFormatter:
    """Serializes a record into a logstash v0 JSON event.

    Args:
        application_name: Written as ``@type`` (the log type).
        system_name: Written as ``@source`` (the Redis key).
        extra_prefix: Prefix for extra keys inside ``@fields``.
        context_prefix: Prefix for context keys inside ``@fields``.
        tz: Zone used for ``@loggertime``.
    """

    def __init__(
        self,
        application_name: str,
        system_name: str,
        *,
        extra_prefix: str = "",
        context_prefix: str = "",
        tz: tzinfo | None = None,
    ):
        self.application_name = application_name
        self.system_name = system_name
        self.extra_prefix = extra_prefix
        self.context_prefix = context_prefix
        self._tz = tz

    def to_dict(self, record: LogRecord) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "channel": record.channel,
            "level": int(record.level),
        }
        message: dict[str, Any] = {
            "@timestamp": record.datetime.isoformat(timespec="microseconds"),
            "@source": self.system_name,
            "@fields": fields,
            "@message": record.message,
            "@tags": [record.channel],
        }
        if self.application_name:
            message["@type"] = self.application_name

        for key, value in record.extra.items():
            fields[f"{self.extra_prefix}{key}"] = value
        for key, value in record.context.items():
            fields[f"{self.context_prefix}{key}"] = value

        message["@loggerid"] = record.logger_id
        # Stamped when the event leaves the process, not when it was built
        message["@loggertime"] = format_microtime(self._tz)
        if record.line:
            message["@fileline"] = record.line
        return message

    def format(self, record: LogRecord) -> str:
        return orjson_dumps(self.to_dict(record))
