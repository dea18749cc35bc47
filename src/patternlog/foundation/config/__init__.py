"""Configuration management using pydantic-settings."""

from .settings import DEFAULT_PATTERN, PatternlogSettings, clear_settings_cache, get_settings

__all__ = [
    "DEFAULT_PATTERN",
    "PatternlogSettings",
    "clear_settings_cache",
    "get_settings",
]
