"""Configuration via pydantic-settings — 12-factor app style."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseSettings):
    """queryfilter configuration — loaded from env vars / .env file."""

    model_config = SettingsConfigDict(env_prefix="QUERYFILTER_", env_file=".env")

    tag_field: str = Field(default="tags", description="Element field holding the tag list")
    output_format: Literal["table", "json", "count"] = Field(
        default="table", description="Default output format for `select`"
    )
    log_level: str = Field(default="WARNING", description="Root logging level")
    strict_input: bool = Field(default=False, description="Fail on undecodable input lines")

    @field_validator("output_format", mode="before")
    @classmethod
    def _lower_output_format(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            if value not in _LOG_LEVELS:
                raise ValueError(f"unknown log level {value!r}; use one of {', '.join(_LOG_LEVELS)}")
        return value


def get_settings() -> Settings:
    """Build a fresh Settings from the current environment."""
    return Settings()

