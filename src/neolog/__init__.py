"""
NeoLog: a static logging façade.

Formats a message plus context and dispatches it to the configured sinks:

- file: ``<dir>/<type>/<YYYYMMDD>.log`` or ``<dir>/<name>.log`` for ``@name`` types
- redis: logstash JSON pushed onto a Redis list
- stderr: the same line format as the file sink

Every record carries the process log ID, the caller's file:line and a
microsecond timestamp. Logging never raises into the caller.

Usage:
    import neolog

    neolog.info("jobs", "started", {"user": "a"})
"""

from typing import Any

from .config import Settings, settings
from .dispatcher import Logger, get_default_logger, set_default_logger
from .interceptors import NeoLogHandler
from .levels import Level


def logit(action: str, log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().logit(action, log_type, message, context)


def debug(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().debug(log_type, message, context)


def info(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().info(log_type, message, context)


def notice(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().notice(log_type, message, context)


def warn(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().warn(log_type, message, context)


def warning(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().warning(log_type, message, context)


def error(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().error(log_type, message, context)


def crit(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().crit(log_type, message, context)


def critical(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().critical(log_type, message, context)


def alert(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().alert(log_type, message, context)


def emerg(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().emerg(log_type, message, context)


def emergency(log_type: str, message: Any, context: Any = None) -> None:
    get_default_logger().emergency(log_type, message, context)


__all__ = [
    "Level",
    "Logger",
    "NeoLogHandler",
    "Settings",
    "settings",
    "get_default_logger",
    "set_default_logger",
    "logit",
    "debug",
    "info",
    "notice",
    "warn",
    "warning",
    "error",
    "crit",
    "critical",
    "alert",
    "emerg",
    "emergency",
]
