"""
Bridge from the standard library ``logging`` module into the dispatcher.
"""

from __future__ import annotations

import logging

from .dispatcher import Logger, get_default_logger


class NeoLogHandler(logging.Handler):
    """
    Forward stdlib logging records to a neolog ``Logger``.

    The log type is ``log_type`` when given, otherwise the stdlib logger name.
    Records from ``neolog.*`` loggers are dropped so the library's own
    diagnostics cannot loop back into it.
    """

    _ACTIONS = (
        (logging.CRITICAL, "critical"),
        (logging.ERROR, "error"),
        (logging.WARNING, "warning"),
        (logging.INFO, "info"),
    )

    def __init__(self, log_type: str | None = None, logger: Logger | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self.log_type = log_type
        self.logger = logger

    @classmethod
    def action_for(cls, levelno: int) -> str:
        for threshold, action in cls._ACTIONS:
            if levelno >= threshold:
                return action
        return "debug"

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == "neolog" or record.name.startswith("neolog."):
            return
        try:
            context = {"logger": record.name}
            if record.exc_info:
                context["exception"] = logging.Formatter().formatException(record.exc_info)

            target = self.logger or get_default_logger()
            target.logit(
                self.action_for(record.levelno),
                self.log_type or record.name,
                record.getMessage(),
                context,
            )
        except Exception:
            self.handleError(record)
