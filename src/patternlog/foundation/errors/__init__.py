"""Error handling for pattern compilation.

- ErrorCode: classification of compile failures
- ParseError/PatternError: structured error and its raising wrapper
- Result/Ok/Err: non-raising results for the parser API
"""

from .errors import ErrorCode, ParseError, PatternError
from .result import Err, Ok, Result, traverse

__all__ = [
    "ErrorCode", "ParseError", "PatternError",
    "Result", "Ok", "Err", "traverse",
]
