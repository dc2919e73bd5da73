"""
Process-wide sink handle cache.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from enum import Enum

from .sinks import BaseSink


class SinkKind(str, Enum):
    FILE = "file"
    REMOTE = "remote"
    STREAM = "stream"


SinkFactory = Callable[[str], BaseSink | None]


class SinkCache:
    """At most one sink per (kind, key), built lazily by the kind's factory.

    A factory returning ``None`` means the destination is unavailable right now;
    nothing is cached so the next call tries again.
    """

    def __init__(self, factories: Mapping[SinkKind, SinkFactory]):
        self._factories = dict(factories)
        self._sinks: dict[tuple[SinkKind, str], BaseSink] = {}
        self._lock = threading.Lock()

    def get(self, kind: SinkKind, key: str) -> BaseSink | None:
        with self._lock:
            sink = self._sinks.get((kind, key))
            if sink is None:
                sink = self._factories[kind](key)
                if sink is not None:
                    self._sinks[(kind, key)] = sink
            return sink
