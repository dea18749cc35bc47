"""Foundation layer: errors and configuration shared by every other package."""

from .config import PatternlogSettings, clear_settings_cache, get_settings
from .errors import Err, ErrorCode, Ok, ParseError, PatternError, Result, traverse

__all__ = [
    "PatternlogSettings", "clear_settings_cache", "get_settings",
    "ErrorCode", "ParseError", "PatternError",
    "Result", "Ok", "Err", "traverse",
]
