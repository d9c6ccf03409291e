"""Environment-derived configuration for kubeseal-api."""

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings, read from environment variables or a ``.env`` file.

    Attributes:
        log_level: Log verbosity (LOG_LEVEL).
        server_host: Address to bind (SERVER_HOST).
        server_port: Port to listen on (SERVER_PORT).
        kubeseal_binary: kubeseal executable name or path (KUBESEAL_BINARY).
        kubeseal_format: Optional kubeseal output format (KUBESEAL_FORMAT).
        seal_timeout: Seconds before a kubeseal run is abandoned (SEAL_TIMEOUT).
        staging_dir: Parent directory for staged artifacts (STAGING_DIR).
        cors_allow_origins: Origins allowed by CORS (CORS_ALLOW_ORIGINS).

    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "info"
    server_host: str = "0.0.0.0"  # noqa: S104
    server_port: int = Field(default=8080, gt=0, lt=65536)
    kubeseal_binary: str = "kubeseal"
    kubeseal_format: Literal["json", "yaml"] | None = None
    seal_timeout: float | None = Field(default=None, gt=0)
    staging_dir: Path | None = None
    cors_allow_origins: list[str] = ["*"]

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level.lower()
