"""Convert INF/INI configuration text to JSON or comment-preserving JSONC."""

from __future__ import annotations

__version__ = "0.1.0"

from inf2json.core.engine import convert_text, run_conversion
from inf2json.core.errors import (
    EscapeError,
    Inf2JsonError,
    LimitExceededError,
    ParseError,
    ValidationError,
)
from inf2json.core.models import ConversionOptions, ConversionResult, Encoding

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "Encoding",
    "EscapeError",
    "Inf2JsonError",
    "LimitExceededError",
    "ParseError",
    "ValidationError",
    "__version__",
    "convert_text",
    "run_conversion",
]
