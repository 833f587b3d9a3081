from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


# ================================
# Comments
# ================================


class CommentKind(str, Enum):
    LEADING = "leading"
    TRAILING = "trailing"
    STANDALONE_BLOCK = "standalone_block"


@dataclass(frozen=True)
class Comment:
    """A comment line with its `;` / `#` marker stripped."""
    text: str
    kind: CommentKind = CommentKind.LEADING
    line: Optional[int] = None


# ================================
# Entries + sections
# ================================


@dataclass
class Entry:
    key: str
    raw_value: str
    is_active: bool = True
    leading_comments: List[Comment] = field(default_factory=list)
    inline_comment: Optional[Comment] = None
    line: Optional[int] = None

    def __setattr__(self, name: str, value: Any) -> None:
        # raw_value is the source text; typed views are derived, never written back
        if name == "raw_value" and "raw_value" in self.__dict__:
            raise AttributeError("Entry.raw_value is immutable once parsed")
        super().__setattr__(name, value)


@dataclass
class Section:
    name: str
    entries: List[Entry] = field(default_factory=list)
    leading_comments: List[Comment] = field(default_factory=list)
    trailing_comments: List[Comment] = field(default_factory=list)
    inline_comment: Optional[Comment] = None
    is_active: bool = True
    line: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Section.name must not be empty")

    def active_entries(self) -> List[Entry]:
        return [e for e in self.entries if e.is_active]

    def inactive_entries(self) -> List[Entry]:
        return [e for e in self.entries if not e.is_active]


@dataclass
class Document:
    sections: List[Section] = field(default_factory=list)
    leading_comments: List[Comment] = field(default_factory=list)
    trailing_comments: List[Comment] = field(default_factory=list)

    def active_sections(self) -> List[Section]:
        return [s for s in self.sections if s.is_active]

    def comment_count(self) -> int:
        n = len(self.leading_comments) + len(self.trailing_comments)
        for s in self.sections:
            n += len(s.leading_comments) + len(s.trailing_comments)
            n += 1 if s.inline_comment else 0
            for e in s.entries:
                n += len(e.leading_comments) + (1 if e.inline_comment else 0)
        return n


# ================================
# Typed values
# ================================


class ValueKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class TypedValue:
    """
    Closed tagged variant produced by the type converter.

    `value` is a str / int / float / bool / None matching `kind`.
    """
    kind: ValueKind
    value: Any = None

    @classmethod
    def string(cls, text: str) -> "TypedValue":
        return cls(ValueKind.STRING, text)

    @classmethod
    def integer(cls, n: int) -> "TypedValue":
        return cls(ValueKind.INTEGER, n)

    @classmethod
    def float_(cls, x: float) -> "TypedValue":
        return cls(ValueKind.FLOAT, x)

    @classmethod
    def boolean(cls, b: bool) -> "TypedValue":
        return cls(ValueKind.BOOLEAN, b)

    @classmethod
    def null(cls) -> "TypedValue":
        return cls(ValueKind.NULL, None)
