"""
Dispatcher: the public logging entry point.

Each call resolves the enabled sinks, builds a record through a structlog
processor chain and writes it. Nothing raised while doing so reaches the
caller; failures are appended to ``<dir>/neologerror.log`` instead.
"""

from __future__ import annotations

import contextlib
import threading
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

import orjson
import redis
import structlog

from .cache import SinkCache, SinkKind
from .config import LoggerSettings, RedisSettings, settings
from .diagnostics import get_logger
from .formatters import LogstashFormatter, format_long_date, format_microtime, orjson_dumps
from .record import (
    CallerLocator,
    SinkRenderer,
    add_extra,
    add_log_level,
    add_logger_id,
    add_timestamps,
    move_line_from_context,
    normalize_context,
)
from .remote import RedisConnection
from .sinks import BaseSink, FileSink, RedisSink, StreamSink

logger = get_logger("neolog.dispatcher")

DEFAULT_TYPE = "neo"
SINGLE_FILE_MARKER = "@"
FALLBACK_FILENAME = "neologerror.log"


def utc_datestamp() -> str:
    """Today's UTC date as ``YYYYMMDD``; names the daily log files."""
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _make_dirs(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.mkdir(parents=True, exist_ok=True)


class Logger:
    """Static-style logging façade over file, Redis and stream sinks.

    Args:
        config: Sink switches, level threshold and directory. Defaults to ``settings.logger``.
        redis_config: Remote sink connection. Defaults to ``settings.redis``.
        redis_client: Optional pre-built Redis client, used instead of connecting.
    """

    def __init__(
        self,
        config: LoggerSettings | None = None,
        redis_config: RedisSettings | None = None,
        *,
        redis_client: redis.Redis | None = None,
    ):
        self.config = config or settings.logger
        self.redis_config = redis_config or settings.redis
        self.tz = ZoneInfo(self.config.timezone)
        self._redis = RedisConnection(self.redis_config, client=redis_client)
        self._locator = CallerLocator(self.config.path_prefix)
        self.sinks = SinkCache(
            {
                SinkKind.FILE: self._create_file_sink,
                SinkKind.REMOTE: self._create_redis_sink,
                SinkKind.STREAM: self._create_stream_sink,
            }
        )

    @property
    def logger_id(self) -> str:
        return self.config.id

    # =========================================================================
    # Redis
    # =========================================================================

    def set_redis(self, client: redis.Redis | None) -> None:
        """Use an externally configured Redis client for the remote sink."""
        self._redis.set(client)

    def get_redis(self) -> redis.Redis | None:
        return self._redis.get()

    # =========================================================================
    # Sink Factories
    # =========================================================================

    def _create_file_sink(self, key: str) -> BaseSink:
        return FileSink(Path(self.get_file_log_dir()) / f"{key}.log", level=self.config.level)

    def _create_stream_sink(self, name: str) -> BaseSink:
        return StreamSink(name, level=self.config.level)

    def _create_redis_sink(self, log_type: str) -> BaseSink | None:
        client = self.get_redis()
        if client is None:
            return None
        key = self.redis_config.key
        formatter = LogstashFormatter(application_name=log_type, system_name=key, tz=self.tz)
        return RedisSink(client, key, level=self.config.level, formatter=formatter)

    # =========================================================================
    # Sink Resolution
    # =========================================================================

    def file_sink(self, log_type: str) -> BaseSink | None:
        """``@name`` logs to ``<dir>/name.log``; anything else to ``<dir>/<type>/<YYYYMMDD>.log``."""
        log_dir = Path(self.get_file_log_dir())
        _make_dirs(log_dir)

        if log_type.startswith(SINGLE_FILE_MARKER):
            key = log_type[len(SINGLE_FILE_MARKER) :]
        else:
            key = f"{log_type}/{utc_datestamp()}"
            _make_dirs(log_dir / log_type)

        return self.sinks.get(SinkKind.FILE, key)

    def redis_sink(self, log_type: str) -> BaseSink | None:
        return self.sinks.get(SinkKind.REMOTE, log_type)

    def stream_sink(self, name: str = "stderr") -> BaseSink | None:
        return self.sinks.get(SinkKind.STREAM, name)

    def resolve_sinks(self, log_type: str) -> list[BaseSink]:
        """Sinks enabled by configuration that are available for this call."""
        candidates: list[BaseSink | None] = []
        if self.config.file:
            candidates.append(self.file_sink(log_type))
        if self.config.redis:
            candidates.append(self.redis_sink(log_type))
        if self.config.stderr:
            candidates.append(self.stream_sink())
        return [sink for sink in candidates if sink is not None]

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _compose(self, log_type: str, sinks: list[BaseSink]) -> Any:
        return structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[
                add_log_level,
                partial(add_logger_id, logger_id=self.logger_id),
                partial(add_timestamps, tz=self.tz),
                move_line_from_context,
                partial(add_extra, host=self.config.host),
                SinkRenderer(sinks),
            ],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
            channel=self.config.channel,
            type=log_type,
        )

    def logit(self, action: str, log_type: str, message: Any, context: Any = None) -> None:
        """Unified entry point. Never raises."""
        log_type = log_type or DEFAULT_TYPE
        try:
            sinks = self.resolve_sinks(log_type)
            if not sinks:
                return

            context = normalize_context(context)
            context["line"] = self._locator.locate()

            getattr(self._compose(log_type, sinks), action)(message, context=context)
        except Exception:
            logger.debug("dispatch_failed", action=action, type=log_type, exc_info=True)
            self._write_fallback(action, log_type, message, context)

    def _write_fallback(self, action: str, log_type: str, message: Any, context: Any) -> None:
        args = {"action": action, "type": log_type, "message": message, "context": context}
        with contextlib.suppress(OSError, TypeError, orjson.JSONEncodeError):
            entry = f"{self.format_long_date()}\t{self.logger_id}\t{orjson_dumps(args)}\n\n"
            log_dir = Path(self.get_file_log_dir())
            log_dir.mkdir(parents=True, exist_ok=True)
            with open(log_dir / FALLBACK_FILENAME, "a", encoding="utf-8") as fp:
                fp.write(entry)

    # =========================================================================
    # Level Methods
    # =========================================================================

    def debug(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("debug", log_type, message, context)

    def info(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("info", log_type, message, context)

    def notice(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("notice", log_type, message, context)

    def warn(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("warn", log_type, message, context)

    def warning(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("warning", log_type, message, context)

    def error(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("error", log_type, message, context)

    def crit(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("crit", log_type, message, context)

    def critical(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("critical", log_type, message, context)

    def alert(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("alert", log_type, message, context)

    def emerg(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("emerg", log_type, message, context)

    def emergency(self, log_type: str, message: Any, context: Any = None) -> None:
        self.logit("emergency", log_type, message, context)

    # =========================================================================
    # Helpers
    # =========================================================================

    def get_file_log_dir(self) -> str:
        return self.config.dir

    def format_long_date(self, ts: float | None = None) -> str:
        return format_long_date(ts, self.tz)

    def format_microtime(self) -> str:
        return format_microtime(self.tz)


# =============================================================================
# Process-wide Default
# =============================================================================

_default_logger: Logger | None = None
_default_lock = threading.Lock()


def get_default_logger() -> Logger:
    """Get the process-wide Logger, building it from ``settings`` on first use."""
    global _default_logger
    with _default_lock:
        if _default_logger is None:
            _default_logger = Logger()
        return _default_logger


def set_default_logger(instance: Logger | None) -> None:
    """Replace the process-wide Logger; None rebuilds it from settings on next use."""
    global _default_logger
    with _default_lock:
        _default_logger = instance
