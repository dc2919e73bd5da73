"""
Diagnostics for the library itself.

Routed through stdlib ``logging`` (loggers named ``neolog.*``) so host
applications decide where they go; unconfigured hosts only see WARNING
and above on stderr.
"""

from __future__ import annotations

import logging

import structlog


def get_logger(name: str = "neolog") -> structlog.stdlib.BoundLogger:
    """Get a structured logger bound to a stdlib logger."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
