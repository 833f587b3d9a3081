from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Set

from inf2json.core.document import Document, Section
from inf2json.core.errors import LimitExceededError, ValidationError
from inf2json.core.models import Advisory, AdvisoryKind, ConversionOptions

if TYPE_CHECKING:
    from inf2json.parsers.types import Token

BYTES_PER_MB = 1024 * 1024


# ----------------------------
# Pre-parse
# ----------------------------

def check_options(options: ConversionOptions) -> None:
    """Re-check bounds even if the CLI already range-validated them."""
    for field_name in ("max_file_size_mb", "max_sections", "depth"):
        value = getattr(options, field_name)
        if value < 1:
            raise ValidationError(f"{field_name} must be at least 1 (got {value})")
    if not options.default_section.strip():
        raise ValidationError("default_section must not be empty")


def check_file_size(text: str, options: ConversionOptions) -> None:
    size = len(text.encode("utf-8", errors="replace"))
    limit = options.max_file_size_mb * BYTES_PER_MB
    if size > limit:
        raise LimitExceededError(
            f"File size ({size} bytes) exceeds maximum allowed ({options.max_file_size_mb} MB)",
            limit=options.max_file_size_mb,
        )


# ----------------------------
# During parse
# ----------------------------

def count_sections(tokens: Iterable["Token"], max_sections: int) -> Iterator["Token"]:
    """
    Pass tokens through, failing on the (max_sections + 1)-th active header
    before any later line is tokenized.
    """
    # parsers imports this module; resolve the token enum at call time
    from inf2json.parsers.types import TokenType

    seen = 0
    for tok in tokens:
        if tok.type == TokenType.HEADER and tok.active:
            seen += 1
            if seen > max_sections:
                raise LimitExceededError(
                    f"Number of sections exceeds maximum allowed ({max_sections})",
                    limit=max_sections,
                )
        yield tok


# ----------------------------
# Emission
# ----------------------------

def check_depth(level: int, options: ConversionOptions) -> None:
    if level > options.depth:
        raise LimitExceededError(
            f"Nesting depth {level} exceeds maximum allowed ({options.depth})",
            limit=options.depth,
        )


# ----------------------------
# Post-parse advisories
# ----------------------------

def _section_advisories(
    section: Section, active_keys: Set[str], seen: Set[str]
) -> List[Advisory]:
    out: List[Advisory] = []

    for e in section.entries:
        if e.is_active:
            if e.key in seen:
                out.append(
                    Advisory(
                        kind=AdvisoryKind.DUPLICATE_KEY,
                        message=f"Duplicate key '{e.key}' in section [{section.name}]; last value wins",
                        section=section.name,
                        key=e.key,
                        line=e.line,
                    )
                )
            seen.add(e.key)
        elif e.key in active_keys:
            out.append(
                Advisory(
                    kind=AdvisoryKind.UNSAFE_INACTIVE,
                    message=(
                        f"Commented entry '{e.key}' in section [{section.name}] "
                        "would duplicate an active key if uncommented"
                    ),
                    section=section.name,
                    key=e.key,
                    line=e.line,
                )
            )
    return out


def collect_advisories(document: Document) -> List[Advisory]:
    """
    Conditions tolerated by default and fatal in strict mode.

    Duplicate section headers are merged on output, so keys are compared
    across every part sharing a section name.
    """
    out: List[Advisory] = []

    active_keys: Dict[str, Set[str]] = {}
    for s in document.active_sections():
        active_keys.setdefault(s.name, set()).update(e.key for e in s.active_entries())

    seen_keys: Dict[str, Set[str]] = {}
    for s in document.sections:
        if s.is_active:
            if not s.entries:
                out.append(
                    Advisory(
                        kind=AdvisoryKind.EMPTY_SECTION,
                        message=f"Section [{s.name}] has no entries",
                        section=s.name,
                        line=s.line,
                    )
                )
            seen = seen_keys.setdefault(s.name, set())
            out.extend(_section_advisories(s, active_keys.get(s.name, set()), seen))
        elif s.name in active_keys:
            out.append(
                Advisory(
                    kind=AdvisoryKind.UNSAFE_INACTIVE,
                    message=f"Commented section [{s.name}] would duplicate an active section if uncommented",
                    section=s.name,
                    line=s.line,
                )
            )

    return out


def enforce_strict(advisories: List[Advisory], options: ConversionOptions) -> List[Advisory]:
    """Raise on the first advisory in strict mode, else hand them back as warnings."""
    if options.strict_mode and advisories:
        first = advisories[0]
        where = f" (line {first.line})" if first.line else ""
        raise ValidationError(f"Strict mode: {first.message}{where}")
    return advisories
