from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ================================
# Enums
# ================================


class Encoding(str, Enum):
    UTF8 = "UTF8"
    ASCII = "ASCII"
    UNICODE = "Unicode"
    UTF7 = "UTF7"
    UTF32 = "UTF32"
    DEFAULT = "Default"

    @property
    def codec(self) -> str:
        return _CODECS[self]

    @property
    def ascii_only(self) -> bool:
        return self is Encoding.ASCII


_CODECS = {
    Encoding.UTF8: "utf-8",
    Encoding.ASCII: "ascii",
    Encoding.UNICODE: "utf-16-le",
    Encoding.UTF7: "utf-7",
    Encoding.UTF32: "utf-32",
    Encoding.DEFAULT: "utf-8",
}


class AdvisoryKind(str, Enum):
    DUPLICATE_KEY = "duplicate_key"
    EMPTY_SECTION = "empty_section"
    UNSAFE_INACTIVE = "unsafe_inactive"


# ================================
# Conversion options (defaults only)
# ================================

DEFAULT_SECTION = "_global_"
DEFAULT_MAX_SECTIONS = 10_000
DEFAULT_MAX_FILE_SIZE_MB = 100
DEFAULT_DEPTH = 10


class ConversionOptions(BaseModel):
    """
    Defaults live here.
    Repo/global/CLI overrides are merged by core/config.py.

    Bounds are not constrained at the model level: the validator re-checks
    them and raises inf2json's own ValidationError.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # type conversion
    no_type_conversion: bool = False
    strip_quotes: bool = False
    empty_as_null: bool = False
    yes_no_as_boolean: bool = False

    # output shape
    preserve_comments: bool = False
    strict_mode: bool = False
    dry_run: bool = False

    # bounds
    max_sections: int = DEFAULT_MAX_SECTIONS
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB
    depth: int = DEFAULT_DEPTH

    default_section: str = DEFAULT_SECTION
    encoding: Encoding = Encoding.UTF8

    @field_validator("encoding", mode="before")
    @classmethod
    def _encoding_case_insensitive(cls, v: object) -> object:
        if isinstance(v, str):
            for e in Encoding:
                if e.value.lower() == v.strip().lower():
                    return e
        return v


# ================================
# Results
# ================================


class Advisory(BaseModel):
    kind: AdvisoryKind
    message: str
    section: Optional[str] = None
    key: Optional[str] = None
    line: Optional[int] = None


class ConversionError(BaseModel):
    type: str
    message: str
    line: Optional[int] = None


class ConversionStats(BaseModel):
    sections: int = 0
    entries: int = 0
    inactive_entries: int = 0
    comments: int = 0
    byte_size: int = 0
    duration_ms: int = 0


class ConversionResult(BaseModel):
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    success: bool = False
    dry_run: bool = False
    output: Optional[str] = None
    error: Optional[ConversionError] = None
    warnings: List[Advisory] = Field(default_factory=list)
    stats: ConversionStats = Field(default_factory=ConversionStats)
