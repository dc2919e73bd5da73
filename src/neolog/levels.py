"""
Log levels and action-name resolution.

Numeric values follow the syslog-style scale (RFC 5424 severities spread
over 100..600), so thresholds written for older deployments keep their
meaning.
"""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    DEBUG = 100
    INFO = 200
    NOTICE = 250
    WARNING = 300
    ERROR = 400
    CRITICAL = 500
    ALERT = 550
    EMERGENCY = 600

    @classmethod
    def from_name(cls, name: str) -> Level:
        """Resolve a level or action name (``"warn"``, ``"CRIT"``...) to a Level."""
        try:
            return ACTIONS[name.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


# Public entry point names, including the short aliases
ACTIONS: dict[str, Level] = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "notice": Level.NOTICE,
    "warn": Level.WARNING,
    "warning": Level.WARNING,
    "err": Level.ERROR,
    "error": Level.ERROR,
    "crit": Level.CRITICAL,
    "critical": Level.CRITICAL,
    "alert": Level.ALERT,
    "emerg": Level.EMERGENCY,
    "emergency": Level.EMERGENCY,
}
