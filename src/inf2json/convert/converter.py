from __future__ import annotations

import math
import re
from typing import Protocol

from inf2json.core.document import TypedValue


class TypeFlags(Protocol):
    """The subset of ConversionOptions the converter reads."""
    no_type_conversion: bool
    strip_quotes: bool
    empty_as_null: bool
    yes_no_as_boolean: bool


_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")

_QUOTES = ('"', "'")


def strip_quotes(text: str) -> str:
    """
    Remove exactly one pair of matching surrounding quotes.

      "abc"   -> abc
      'abc'   -> abc
      "abc\\" -> unchanged (closing quote is escaped)
      "abc'   -> unchanged
    """
    if len(text) < 2:
        return text
    q = text[0]
    if q not in _QUOTES or text[-1] != q:
        return text

    # count backslashes before the closing quote; odd means it is escaped
    n = 0
    i = len(text) - 2
    while i >= 1 and text[i] == "\\":
        n += 1
        i -= 1
    if n % 2 == 1:
        return text
    return text[1:-1]


def convert(raw_value: str, flags: TypeFlags) -> TypedValue:
    """
    Map a raw INF value to a TypedValue. First matching rule wins:

      1. no_type_conversion -> String(raw) untouched
      2. empty_as_null + ""  -> Null
      3. yes_no_as_boolean + yes/no -> Boolean
      4. integer / float / true|false literals
      5. String

    Quote stripping is a text transform applied before rules 2-4 so that a
    quoted literal such as "Yes" can still take part in them.
    """
    if flags.no_type_conversion:
        return TypedValue.string(raw_value)

    text = raw_value
    if flags.strip_quotes:
        text = strip_quotes(text)

    if flags.empty_as_null and text == "":
        return TypedValue.null()

    lowered = text.lower()
    if flags.yes_no_as_boolean and lowered in ("yes", "no"):
        return TypedValue.boolean(lowered == "yes")

    if _INT_RE.match(text):
        try:
            return TypedValue.integer(int(text))
        except ValueError:
            # past the interpreter's int digit limit
            return TypedValue.string(text)
    if _FLOAT_RE.match(text):
        x = float(text)
        if math.isfinite(x):
            return TypedValue.float_(x)
    elif lowered in ("true", "false"):
        return TypedValue.boolean(lowered == "true")

    return TypedValue.string(text)
