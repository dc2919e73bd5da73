from pathlib import Path

import pytest

import neolog
from neolog import Logger
from neolog.config import LoggerSettings, RedisSettings

TESTS_ROOT = Path(__file__).parent


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Keep NEOLOG_* variables from the host out of every test."""
    import os

    for name in list(os.environ):
        if name.startswith("NEOLOG_"):
            monkeypatch.delenv(name)
    yield
    neolog.set_default_logger(None)


@pytest.fixture
def log_dir(tmp_path) -> Path:
    return tmp_path / "logs"


@pytest.fixture
def make_logger(log_dir):
    """Build a Logger writing under a temporary directory."""

    def factory(*, redis_client=None, **overrides) -> Logger:
        values = {
            "dir": str(log_dir),
            "level": "debug",
            "path_prefix": str(TESTS_ROOT),
            "timezone": "UTC",
        }
        values.update(overrides)
        return Logger(LoggerSettings(**values), RedisSettings(), redis_client=redis_client)

    return factory
