from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional

from inf2json.core.document import Document
from inf2json.core.errors import EscapeError, Inf2JsonError, ParseError
from inf2json.core.models import (
    ConversionError,
    ConversionOptions,
    ConversionResult,
    ConversionStats,
    Encoding,
)
from inf2json.core.validator import collect_advisories, enforce_strict
from inf2json.emit import serializer_for
from inf2json.parsers import parse_inf


def _stats(document: Document) -> ConversionStats:
    entries = 0
    inactive = 0
    for s in document.sections:
        for e in s.entries:
            if e.is_active and s.is_active:
                entries += 1
            else:
                inactive += 1
    return ConversionStats(
        sections=len({s.name for s in document.active_sections()}),
        entries=entries,
        inactive_entries=inactive,
        comments=document.comment_count(),
    )


def encode_output(output: str, encoding: Encoding) -> bytes:
    """Encode serialized output; characters the target cannot hold are an error, not replaced."""
    try:
        return output.encode(encoding.codec)
    except UnicodeEncodeError as e:
        raise EscapeError(
            f"Character U+{ord(e.object[e.start]):04X} at offset {e.start} cannot be encoded as {encoding.value}"
        ) from e


def _error(e: Inf2JsonError) -> ConversionError:
    line = e.line if isinstance(e, ParseError) else None
    return ConversionError(type=type(e).__name__, message=str(e), line=line)


def convert_text(text: str, options: Optional[ConversionOptions] = None) -> str:
    """
    parse -> strict checks -> serialize. Raises on any failure.
    """
    options = options or ConversionOptions()
    document = parse_inf(text, options)
    enforce_strict(collect_advisories(document), options)
    return serializer_for(options)(document, options)


def run_conversion(text: str, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """
    Run the full pipeline and describe the outcome.

    Failures are reported on the result (no output text) instead of raised.
    dry_run does not change anything here: the caller skips the write.
    """
    options = options or ConversionOptions()
    t0 = time.perf_counter()

    result = ConversionResult(
        started_at=datetime.now(timezone.utc),
        dry_run=options.dry_run,
    )

    try:
        document = parse_inf(text, options)
        advisories = enforce_strict(collect_advisories(document), options)
        output = serializer_for(options)(document, options)

        result.stats = _stats(document)
        result.stats.byte_size = len(encode_output(output, options.encoding))
        result.warnings = advisories
        result.output = output
        result.success = True
    except Inf2JsonError as e:
        result.error = _error(e)
        result.output = None
        result.success = False

    result.stats.duration_ms = int((time.perf_counter() - t0) * 1000)
    result.finished_at = datetime.now(timezone.utc)
    return result

