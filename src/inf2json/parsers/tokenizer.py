from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from inf2json.core.errors import ParseError
from inf2json.parsers.types import Token, TokenType

_COMMENT_MARKERS = (";", "#")

_HEADER_RE = re.compile(r"^\[([^\]]*)\]\s*(?:[;#](.*))?$")
_COMMENTED_HEADER_RE = re.compile(r"^\[([^\]]+)\]$")
# commented-out keys must look like keys; prose such as "; set this = 1" stays a comment.
# a key with inner spaces counts only when "=" follows it directly
_COMMENTED_KV_RE = re.compile(r"^([\w.$@\-]+)\s*=(.*)$")
_COMMENTED_SPACED_KV_RE = re.compile(r"^([\w.$@\-]+(?: [\w.$@\-]+)+)=(.*)$")
_INLINE_COMMENT_RE = re.compile(r"\s[;#]")

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def split_inline_comment(value: str) -> Tuple[str, Optional[str]]:
    """
    Split `value ; note` into ("value", "note").

    The marker must follow whitespace so `color=#fff` and `a;b` stay intact;
    a leading quoted string is skipped before searching.
    """
    start = 0
    if value[:1] in ('"', "'"):
        q = value[0]
        i = 1
        while i < len(value):
            if value[i] == "\\":
                i += 2
                continue
            if value[i] == q:
                start = i + 1
                break
            i += 1

    m = _INLINE_COMMENT_RE.search(value, start)
    if not m:
        return value, None
    return value[: m.start()].rstrip(), value[m.end():].strip()


def _comment_token(body: str, line_no: int) -> Token:
    m = _COMMENTED_HEADER_RE.match(body)
    if m and m.group(1).strip():
        return Token(
            TokenType.HEADER,
            line_no,
            name=m.group(1).strip(),
            comment=body,
            active=False,
        )

    m = _COMMENTED_KV_RE.match(body) or _COMMENTED_SPACED_KV_RE.match(body)
    if m:
        value, inline = split_inline_comment(m.group(2).strip())
        return Token(
            TokenType.KEY_VALUE,
            line_no,
            key=m.group(1),
            value=value,
            comment=body,
            inline_comment=inline,
            active=False,
        )

    return Token(TokenType.COMMENT, line_no, comment=body)


def tokenize_line(raw: str, line_no: int) -> Token:
    line = raw.strip()

    if not line:
        return Token(TokenType.BLANK, line_no)

    if line[0] in _COMMENT_MARKERS:
        return _comment_token(line[1:].strip(), line_no)

    if line[0] == "[":
        m = _HEADER_RE.match(line)
        if not m:
            raise ParseError(f"Malformed section header: {line!r}", line=line_no)
        name = m.group(1).strip()
        if not name:
            raise ParseError("Section header has an empty name", line=line_no)
        inline = m.group(2).strip() if m.group(2) is not None else None
        return Token(TokenType.HEADER, line_no, name=name, inline_comment=inline)

    if "=" in line:
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            raise ParseError(f"Missing key before '=': {line!r}", line=line_no)
        value, inline = split_inline_comment(value.strip())
        return Token(TokenType.KEY_VALUE, line_no, key=key, value=value, inline_comment=inline)

    # bare key, empty value
    key, inline = split_inline_comment(line)
    return Token(TokenType.KEY_VALUE, line_no, key=key, value="", inline_comment=inline)


def tokenize(text: str) -> Iterator[Token]:
    """
    First parser pass: classify each line, lazily and in source order.

    Comment association is left to the fold in inf_parser.
    """
    for idx, raw in enumerate(split_lines(text), start=1):
        yield tokenize_line(raw, idx)
