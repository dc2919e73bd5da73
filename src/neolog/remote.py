"""
Lazy Redis connection shared by every remote sink.
"""

from __future__ import annotations

import threading

import redis

from .config import RedisSettings
from .diagnostics import get_logger

logger = get_logger("neolog.remote")


def connect(config: RedisSettings) -> redis.Redis | None:
    """Open a client and verify it with PING. Returns None when unreachable.

    AUTH is only sent with a non-empty password and SELECT only for a
    non-zero database index.
    """
    client = redis.Redis(
        host=config.host,
        port=config.port,
        db=config.dbindex,
        password=config.password or None,
        socket_timeout=config.timeout,
        socket_connect_timeout=config.timeout,
    )
    try:
        client.ping()
    except redis.RedisError as exc:
        logger.info("remote_store_unavailable", host=config.host, port=config.port, error=str(exc))
        client.close()
        return None
    return client


class RedisConnection:
    """Holds the process-wide client; connects on first use and reuses it after."""

    def __init__(self, config: RedisSettings, client: redis.Redis | None = None):
        self.config = config
        self._client = client
        self._lock = threading.Lock()

    def set(self, client: redis.Redis | None) -> None:
        """Install an externally built client (or reset with None)."""
        with self._lock:
            self._client = client

    def get(self) -> redis.Redis | None:
        with self._lock:
            if self._client is None:
                self._client = connect(self.config)
            return self._client
