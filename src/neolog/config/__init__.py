"""
NeoLog Configuration Module.

Each sub-module is an independent concern with its own environment variable prefix:

- ``NEOLOG_LOGGER_*``: sink switches, level threshold, log directory, process ID
- ``NEOLOG_REDIS_*``: connection parameters of the remote sink

Multi-Environment Support:
    Set `NEOLOG_ENV` to pick extra .env files. They are loaded in this order
    (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from neolog.config import settings

    settings.logger.file    # False
    settings.redis.host     # "127.0.0.1"
"""

from functools import cached_property
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from .logger import PROCESS_LOGGER_ID, LoggerSettings, generate_logger_id
from .redis import RedisSettings


def _get_env_files() -> tuple[str, ...]:
    """Determine which .env files to load based on NEOLOG_ENV."""
    env = os.getenv("NEOLOG_ENV", "development")
    return (
        ".env",
        ".env.local",
        f".env.{env}",
        f".env.{env}.local",
    )


class Settings(BaseSettings):
    """Composite settings aggregating the logger and redis domains."""

    model_config = SettingsConfigDict(
        env_file=_get_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logger(self) -> LoggerSettings:
        return LoggerSettings()

    @cached_property
    def redis(self) -> RedisSettings:
        return RedisSettings()

    @property
    def log_dir(self) -> str:
        return self.logger.dir

    @property
    def logger_id(self) -> str:
        return self.logger.id


# Singleton instance
settings = Settings()

__all__ = [
    "PROCESS_LOGGER_ID",
    "Settings",
    "settings",
    "LoggerSettings",
    "RedisSettings",
    "generate_logger_id",
]
