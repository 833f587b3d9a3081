from __future__ import annotations

from inf2json.convert.converter import TypeFlags, convert, strip_quotes
from inf2json.convert.escape import ascii_text, escape, quote

__all__ = ["TypeFlags", "ascii_text", "convert", "escape", "quote", "strip_quotes"]
