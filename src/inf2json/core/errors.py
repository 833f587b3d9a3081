"""Exceptions raised by the conversion core.

No internal imports, only Python stdlib.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    OK = 0
    ERROR = 1
    INVALID = 2


class Inf2JsonError(Exception):
    """Base exception for inf2json."""

    pass


class ValidationError(Inf2JsonError):
    """Configuration out of range, or a strict-mode advisory."""

    pass


class LimitExceededError(Inf2JsonError):
    """Section count, file size or nesting depth over its bound."""

    def __init__(self, message: str, *, limit: Optional[int] = None) -> None:
        super().__init__(message)
        self.limit = limit


class ParseError(Inf2JsonError):
    """Malformed INF structure."""

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class EscapeError(Inf2JsonError):
    """Control character rejected in strict mode."""

    pass
