"""
Redis Configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Connection parameters for the remote sink."""

    model_config = SettingsConfigDict(
        env_prefix="NEOLOG_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    host: str = Field(default="127.0.0.1", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    timeout: float = Field(default=1.0, description="Connect and socket timeout, seconds")
    password: str = Field(default="", description="AUTH password, skipped when empty")
    dbindex: int = Field(default=0, description="Database index, SELECT skipped when 0")
    key: str = Field(default="neologstash", description="List key records are pushed to")
