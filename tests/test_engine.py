"""Tests for the conversion pipeline and its result descriptor."""

import json

import pytest

from inf2json import convert_text, run_conversion
from inf2json.core.errors import LimitExceededError, ValidationError
from inf2json.core.models import ConversionOptions, Encoding

SAMPLE = "; top\n[A]\nx=1\n;y=2\n[B]\nz=hello\n"


# ---------------------------------------------------------------------------
# convert_text
# ---------------------------------------------------------------------------

def test_convert_text_plain():
    assert json.loads(convert_text(SAMPLE)) == {"A": {"x": 1}, "B": {"z": "hello"}}

def test_convert_text_preserve_comments():
    out = convert_text(SAMPLE, ConversionOptions(preserve_comments=True))
    assert '// "y": 2,' in out
    assert "// top" in out

def test_convert_text_raises():
    with pytest.raises(LimitExceededError):
        convert_text(SAMPLE, ConversionOptions(max_sections=1))

def test_convert_text_strict_raises():
    with pytest.raises(ValidationError):
        convert_text("[A]\n[B]\nk=v", ConversionOptions(strict_mode=True))


# ---------------------------------------------------------------------------
# run_conversion
# ---------------------------------------------------------------------------

def test_success_result():
    r = run_conversion(SAMPLE)
    assert r.success
    assert r.error is None
    assert json.loads(r.output) == {"A": {"x": 1}, "B": {"z": "hello"}}
    assert r.stats.sections == 2
    assert r.stats.entries == 2
    assert r.stats.inactive_entries == 1
    assert r.stats.comments == 1
    assert r.stats.byte_size == len(r.output.encode("utf-8"))
    assert r.finished_at is not None

def test_failure_result_has_no_output():
    r = run_conversion(SAMPLE, ConversionOptions(max_sections=1))
    assert not r.success
    assert r.output is None
    assert r.error.type == "LimitExceededError"
    assert "(1)" in r.error.message

def test_parse_error_result_carries_line():
    r = run_conversion("[A]\n=bad")
    assert r.error.type == "ParseError"
    assert r.error.line == 2

def test_invalid_options_result():
    r = run_conversion(SAMPLE, ConversionOptions(depth=0))
    assert r.error.type == "ValidationError"

def test_warnings_reported_when_not_strict():
    r = run_conversion("[A]\nx=1\nx=2")
    assert r.success
    assert [w.key for w in r.warnings] == ["x"]

def test_strict_turns_warning_into_failure():
    r = run_conversion("[A]\nx=1\nx=2", ConversionOptions(strict_mode=True))
    assert not r.success
    assert r.error.type == "ValidationError"

@pytest.mark.parametrize(
    "text,extra",
    [
        (SAMPLE, {}),
        (SAMPLE, {"max_sections": 1}),
        ("[A]\nx=1\nx=2", {"strict_mode": True}),
    ],
)
def test_dry_run_outcome_identical(text, extra):
    real = run_conversion(text, ConversionOptions(**extra))
    dry = run_conversion(text, ConversionOptions(dry_run=True, **extra))
    assert dry.dry_run and not real.dry_run
    assert dry.success == real.success
    assert dry.output == real.output
    assert dry.error == real.error
    assert dry.stats.byte_size == real.stats.byte_size

def test_byte_size_follows_encoding():
    r = run_conversion("[A]\nk=v", ConversionOptions(encoding=Encoding.UNICODE))
    assert r.stats.byte_size == 2 * len(r.output)

def test_encoding_accepts_any_case():
    assert ConversionOptions(encoding="unicode").encoding == Encoding.UNICODE
    assert Encoding.DEFAULT.codec == "utf-8"

def test_huge_integer_does_not_fail_the_run():
    r = run_conversion("[A]\nk=" + "1" * 5000)
    assert r.success
    assert json.loads(r.output) == {"A": {"k": "1" * 5000}}

def test_commented_entry_before_header_not_in_output():
    r = run_conversion(";Version=1\n[Main]\na=1\n")
    assert json.loads(r.output) == {"Main": {"a": 1}}
    assert r.stats.sections == 1
    assert r.stats.inactive_entries == 1


# ---------------------------------------------------------------------------
# output encoding
# ---------------------------------------------------------------------------

def test_ascii_encoding_escapes_non_ascii():
    r = run_conversion("[Café]\nname=café ✓", ConversionOptions(encoding=Encoding.ASCII))
    assert r.success
    assert '"name": "caf\\u00e9 \\u2713"' in r.output
    assert json.loads(r.output) == {"Café": {"name": "café ✓"}}
    assert r.stats.byte_size == len(r.output)

def test_ascii_encoding_escapes_comments():
    opts = ConversionOptions(encoding=Encoding.ASCII, preserve_comments=True)
    r = run_conversion("; résumé\n[A]\nk=1\n", opts)
    assert "// r\\u00e9sum\\u00e9" in r.output
    r.output.encode("ascii")

def test_utf8_keeps_non_ascii_verbatim():
    r = run_conversion("[A]\nname=café")
    assert '"name": "café"' in r.output

def test_unencodable_output_is_a_failure():
    r = run_conversion("[A]\nk=a\ud800b")
    assert not r.success
    assert r.error.type == "EscapeError"
    assert r.output is None
