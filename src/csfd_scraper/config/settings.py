from __future__ import annotations

import os
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from csfd_scraper.clients.csfd import (
    BASE_RETRY_DELAY,
    DEFAULT_REQUESTS_PER_SECOND,
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
)


class Settings(BaseModel):
    """Client tunables resolved from the environment (and an optional .env file)."""

    requests_per_second: float = Field(
        default=DEFAULT_REQUESTS_PER_SECOND, gt=0, alias="CSFD_REQUESTS_PER_SECOND"
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, alias="CSFD_TIMEOUT")
    max_retries: int = Field(default=MAX_RETRIES, ge=0, le=10, alias="CSFD_MAX_RETRIES")
    base_delay: float = Field(default=BASE_RETRY_DELAY, ge=0, alias="CSFD_BASE_DELAY")

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "extra": "ignore",
    }

    def client_options(self) -> dict[str, Any]:
        """Keyword arguments for ``CsfdClient``."""
        return {
            "requests_per_second": self.requests_per_second,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "base_delay": self.base_delay,
        }


class SettingsError(RuntimeError):
    """Raised when configuration cannot be resolved."""


def load_settings(*, load_env: bool = True) -> Settings:
    """Load settings from .env files and environment variables."""

    if load_env:
        load_dotenv(find_dotenv(usecwd=True))

    try:
        return Settings.model_validate(_collect_env_overrides())
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc


def _collect_env_overrides() -> dict[str, Any]:
    mapping: dict[str, str] = {
        "CSFD_REQUESTS_PER_SECOND": "requests_per_second",
        "CSFD_TIMEOUT": "timeout",
        "CSFD_MAX_RETRIES": "max_retries",
        "CSFD_BASE_DELAY": "base_delay",
    }

    result: dict[str, Any] = {}
    for env_name, field in mapping.items():
        value = os.environ.get(env_name)
        if value is None or not value.strip():
            continue
        result[field] = value.strip()
    return result


__all__ = ["Settings", "SettingsError", "load_settings"]
