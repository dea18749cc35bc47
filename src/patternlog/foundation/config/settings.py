"""Environment-based configuration using pydantic-settings.

Example:
    >>> from patternlog.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.level
    'INFO'

    # Or with environment variables:
    # PATTERNLOG_LEVEL=DEBUG
    # PATTERNLOG_PATTERN='$level $target: $message'
    # PATTERNLOG_TARGETS='{"app.db": "TRACE"}'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LevelName = Literal["TRACE", "DEBUG", "INFO", "WARN", "ERROR"]

DEFAULT_PATTERN = (
    "$datetime $level(width = 5, alignment = '>') "
    "$target$span(prefix = '::', args, args_prefix = '{', args_suffix = '}')"
    "$fields(prefix = '{', suffix = '}'): $message"
)

_LEVEL_ALIASES = {"WARNING": "WARN", "CRITICAL": "ERROR", "FATAL": "ERROR"}


def _canonical_level(v: object) -> object:
    """Upper-case a level name and fold stdlib aliases onto ours."""
    if not isinstance(v, str):
        return v
    v = v.upper()
    return _LEVEL_ALIASES.get(v, v)


class PatternlogSettings(BaseSettings):
    """Root settings for patternlog.

    Loads configuration from environment variables with PATTERNLOG_ prefix.
    Supports .env files.
    """

    model_config = SettingsConfigDict(
        env_prefix="PATTERNLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    level: LevelName = "INFO"
    pattern: str = Field(default=DEFAULT_PATTERN, description="Pattern used by the default stream appender")
    sigil: Annotated[str, Field(min_length=1, max_length=1)] = "$"
    output: Literal["stderr", "stdout"] = "stderr"
    utc: bool = Field(default=False, description="Capture timestamps in UTC instead of local time")
    targets: dict[str, LevelName] = Field(
        default_factory=dict,
        description="Per-target minimum levels, e.g. {'app.db': 'TRACE'}",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> object:
        return _canonical_level(v)

    @field_validator("targets", mode="before")
    @classmethod
    def _normalize_targets(cls, v: object) -> object:
        if isinstance(v, dict):
            return {k: _canonical_level(lvl) for k, lvl in v.items()}
        return v

    @computed_field
    @property
    def has_overrides(self) -> bool:
        """Whether any per-target level is configured."""
        return bool(self.targets)


@lru_cache(maxsize=1)
def get_settings() -> PatternlogSettings:
    """Get the global settings instance (cached)."""
    return PatternlogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
