"""Typed settings management with deterministic failures."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from staff_records.core.clock import DEFAULT_TIMEZONE, validate_timezone

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(ValueError):
    """Raised when configuration is incomplete or invalid."""


class AppSettings(BaseSettings):
    """Runtime settings for the staff records tooling.

    Attributes:
        timezone: IANA zone used to decide "today" for age calculation.
        log_level: Root logger level name.
        log_file: Optional rotating log file destination.
        nic_hash_salt: Salt for hashing identity numbers in log payloads.
        metrics_namespace: Prefix for Prometheus metric names.
    """

    model_config = SettingsConfigDict(
        env_prefix="STAFF_RECORDS_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    timezone: str = Field(default=DEFAULT_TIMEZONE)
    log_level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)
    nic_hash_salt: str = Field(default="staff_records.normalization", min_length=1)
    metrics_namespace: str = Field(default="staff_records", pattern=r"^[a-zA-Z_][a-zA-Z0-9_]*$")

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        validate_timezone(value)
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    def as_safe_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation without exposing the hash salt."""

        data = self.model_dump()
        data["nic_hash_salt"] = "***"
        data["log_file"] = str(self.log_file) if self.log_file else None
        return data


def load_settings(**overrides: Any) -> AppSettings:
    """Build :class:`AppSettings`, converting validation failures to :class:`SettingsError`."""

    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        raise SettingsError(f"Invalid configuration: {exc.errors()[0]['msg']}") from exc


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return load_settings()


__all__ = ["AppSettings", "SettingsError", "get_settings", "load_settings"]
