from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenType(str, Enum):
    HEADER = "header"
    KEY_VALUE = "key_value"
    COMMENT = "comment"
    BLANK = "blank"


@dataclass(frozen=True)
class Token:
    """
    One classified INF line.

    For inactive HEADER / KEY_VALUE tokens (a commented-out `[Name]` or
    `key=value`), `comment` keeps the comment body as written and
    `name`/`key`/`value` hold the decoded view.
    """
    type: TokenType
    line: int
    name: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None
    comment: Optional[str] = None
    inline_comment: Optional[str] = None
    active: bool = True
