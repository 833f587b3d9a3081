from __future__ import annotations

from inf2json.parsers.inf_parser import fold, parse_inf
from inf2json.parsers.tokenizer import split_inline_comment, tokenize
from inf2json.parsers.types import Token, TokenType

__all__ = [
    "Token",
    "TokenType",
    "fold",
    "parse_inf",
    "split_inline_comment",
    "tokenize",
]
