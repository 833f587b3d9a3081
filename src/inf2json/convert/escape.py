from __future__ import annotations

from typing import List

from inf2json.core.errors import EscapeError

_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def _u_escape(ch: str) -> str:
    n = ord(ch)
    if n <= 0xFFFF:
        return f"\\u{n:04x}"
    n -= 0x10000
    return f"\\u{0xD800 + (n >> 10):04x}\\u{0xDC00 + (n & 0x3FF):04x}"


def escape(text: str, *, strict: bool = False, ascii_only: bool = False) -> str:
    """
    Escape text for use inside a JSON string literal (quotes not included).

    One left-to-right pass, one output token per input character, so an
    escape produced for one character is never re-escaped by another rule.

    Control characters without a short escape become \\u00XX, or raise
    EscapeError when strict=True. With ascii_only, every non-ASCII character
    becomes \\uXXXX (a surrogate pair above U+FFFF).
    """
    out: List[str] = []
    for i, ch in enumerate(text):
        esc = _SHORT_ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif ch < " ":
            if strict:
                raise EscapeError(
                    f"Control character U+{ord(ch):04X} at offset {i} cannot be represented in strict mode"
                )
            out.append(_u_escape(ch))
        elif ascii_only and ch > "\x7f":
            out.append(_u_escape(ch))
        else:
            out.append(ch)
    return "".join(out)


def quote(text: str, *, strict: bool = False, ascii_only: bool = False) -> str:
    return f'"{escape(text, strict=strict, ascii_only=ascii_only)}"'


def ascii_text(text: str) -> str:
    """\\uXXXX-escape only the non-ASCII characters of free text such as comments."""
    return "".join(_u_escape(ch) if ch > "\x7f" else ch for ch in text)
