"""Entity Configuration

This module defines the package settings the way the framework's config
modules do: a validated pydantic model whose defaults come from the
environment, a global instance and an accessor.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _env_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).lower() in ("1", "true", "yes", "on")


def _env_int(key: str) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class EntitySettings(BaseModel):
    """Collection and model settings with validation."""

    # Serialization
    json_escape_unicode: bool = Field(
        default_factory=lambda: _env_bool("ENTITY_JSON_ESCAPE_UNICODE"),
        description="Escape non-ASCII characters in JSON output"
    )
    json_indent: Optional[int] = Field(
        default_factory=lambda: _env_int("ENTITY_JSON_INDENT"),
        description="Indentation of JSON output (compact when unset)",
        ge=0
    )

    # Random sampling
    random_seed: Optional[int] = Field(
        default_factory=lambda: _env_int("ENTITY_RANDOM_SEED"),
        description="Seed used by random() and shuffle() when none is passed"
    )

    # Logging
    log_level: str = Field(
        default_factory=lambda: os.getenv("ENTITY_LOG_LEVEL", "WARNING"),
        description="Level of the package logger"
    )
    log_channel: str = Field(
        default="entity",
        description="Name of the package logger"
    )

    model_config: ConfigDict = ConfigDict(validate_assignment=True, validate_default=True)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return int(logging.getLevelName(self.log_level))


# Create global settings instance
entity_settings = EntitySettings()


def get_settings() -> EntitySettings:
    """Get entity settings instance."""
    return entity_settings


def configure(**overrides: Any) -> EntitySettings:
    """Replace the global settings with a validated copy carrying overrides."""
    global entity_settings
    entity_settings = EntitySettings(**{**entity_settings.model_dump(), **overrides})
    return entity_settings


def reset_settings() -> EntitySettings:
    """Reload settings from the environment."""
    global entity_settings
    entity_settings = EntitySettings()
    return entity_settings
