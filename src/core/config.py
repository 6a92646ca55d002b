"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets adapters (boto3, httpx) read the same validated settings.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_PAGE_SIZE = 1000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_user_env_file() -> Path:
    """Per-user `.env` (`~/.config/paw/.env` on Linux, the platform app dir elsewhere)."""

    return Path(typer.get_app_dir("paw")) / ".env"


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write or update variables in the per-user .env file.

    `None` values are skipped, so existing entries are kept.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings (env prefix `PAW_`)."""

    model_config = SettingsConfigDict(
        env_prefix="PAW_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (development), then the per-user file.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    aws_region: str | None = Field(
        default=None,
        description="AWS region of the Step Functions API. Falls back to boto3's own resolution.",
    )
    aws_profile: str | None = Field(
        default=None,
        description="Named AWS profile used to build the boto3 session.",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom Step Functions endpoint (LocalStack, VPC endpoint).",
    )

    page_size: int = Field(
        default=MAX_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="maxResults per ListExecutions round-trip.",
    )
    connect_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="botocore connect timeout (seconds).",
    )
    read_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="botocore read timeout (seconds).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout of the doctor reachability probe (seconds).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level of the rich log handler (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("aws_region", "aws_profile", "endpoint_url")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None
