"""
Logger Configuration.

Mirrors the historical ``NEOLOG_LOGGER_*`` constants as environment variables.
"""

from __future__ import annotations

import hashlib
import secrets
import uuid

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from neolog.levels import Level

DEFAULT_LOG_DIR = "/tmp/logs"


def generate_logger_id() -> str:
    """Return a fresh random SHA-1 token."""
    seed = f"{uuid.uuid4().hex}{secrets.token_hex(32)}"
    return hashlib.sha1(seed.encode()).hexdigest()


# One ID per process, shared by every settings instance
PROCESS_LOGGER_ID = generate_logger_id()


class LoggerSettings(BaseSettings):
    """Dispatcher and sink configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NEOLOG_LOGGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Level = Field(default=Level.INFO, description="Minimum level handled by every sink")
    id: str = Field(default=PROCESS_LOGGER_ID, description="Process log ID")
    timezone: str = Field(default="Asia/Shanghai", description="IANA timezone for timestamps")

    file: bool = Field(default=False, description="Write records to files under `dir`")
    redis: bool = Field(default=False, description="Push records to the Redis list")
    stderr: bool = Field(default=False, description="Write records to standard error")

    dir: str = Field(default=DEFAULT_LOG_DIR, description="Log directory")
    channel: str = Field(default="neo", description="Channel name written into every record")
    path_prefix: str | None = Field(default=None, description="Prefix stripped from caller file paths")
    host: str | None = Field(default=None, description="Host tag added to record extras")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return int(value) if value.isdigit() else Level.from_name(value)
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _non_empty_id(cls, value: object) -> object:
        return value or PROCESS_LOGGER_ID

    @field_validator("dir", mode="before")
    @classmethod
    def _default_dir(cls, value: object) -> object:
        return str(value) if value else DEFAULT_LOG_DIR
