"""Environment-driven settings for hamcall.

Every setting can be provided as an environment variable prefixed with
``HAMCALL_`` (``HAMCALL_API_KEY``, ``HAMCALL_LOG_LEVEL``, ...) or through a
``.env`` file in the working directory.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hamcall.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="HAMCALL_", env_file=".env", extra="ignore"
    )

    app_name: str = Field(default="Hamcall")
    api_key: Optional[str] = Field(default=None)
    log_level: str = Field(default="INFO")
    entity_table: Optional[str] = Field(
        default=None, description="Path to an alternate entity prefix JSON file"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached process-wide settings.

    Raises:
        ConfigurationError: if the environment holds an invalid setting.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
