"""Tests for plain JSON serialization."""

import json

import pytest

from inf2json.core.document import TypedValue
from inf2json.core.errors import EscapeError, LimitExceededError
from inf2json.core.models import ConversionOptions
from inf2json.emit import render_value, serialize
from inf2json.parsers import parse_inf


def _json(text, **kw):
    opts = ConversionOptions(**kw)
    return serialize(parse_inf(text, opts), opts)


def _load(text, **kw):
    return json.loads(_json(text, **kw))


# ---------------------------------------------------------------------------
# render_value
# ---------------------------------------------------------------------------

def test_render_value_variants():
    assert render_value(TypedValue.string('a"b')) == '"a\\"b"'
    assert render_value(TypedValue.integer(-3)) == "-3"
    assert render_value(TypedValue.float_(1.5)) == "1.5"
    assert render_value(TypedValue.boolean(False)) == "false"
    assert render_value(TypedValue.null()) == "null"


# ---------------------------------------------------------------------------
# layout
# ---------------------------------------------------------------------------

def test_global_scenario_exact_output():
    out = _json("[Global]\nDebug=Yes\nEmptyKey=\n", yes_no_as_boolean=True, empty_as_null=True)
    assert out == (
        "{\n"
        '    "Global": {\n'
        '        "Debug": true,\n'
        '        "EmptyKey": null\n'
        "    }\n"
        "}\n"
    )
    assert json.loads(out) == {"Global": {"Debug": True, "EmptyKey": None}}

def test_empty_document():
    assert _json("") == "{}\n"

def test_empty_section_renders_empty_object():
    assert _json("[A]\n[B]\nk=v") == (
        "{\n"
        '    "A": {},\n'
        '    "B": {\n'
        '        "k": "v"\n'
        "    }\n"
        "}\n"
    )

def test_empty_value_without_flag_is_empty_string():
    assert _load("[S]\nKey=") == {"S": {"Key": ""}}

def test_default_types():
    data = _load("[S]\ni=42\nf=1.50\nb=TRUE\ns=hello\nyes=Yes")
    assert data == {"S": {"i": 42, "f": 1.5, "b": True, "s": "hello", "yes": "Yes"}}


# ---------------------------------------------------------------------------
# merging
# ---------------------------------------------------------------------------

def test_duplicate_sections_merge_in_encounter_order():
    data = _load("[A]\nx=1\n[B]\ny=2\n[A]\nz=3")
    assert list(data) == ["A", "B"]
    assert list(data["A"]) == ["x", "z"]

def test_duplicate_key_keeps_first_position_last_value():
    out = _json("[A]\nx=1\ny=2\nx=3")
    assert out.count('"x"') == 1
    data = json.loads(out)
    assert list(data["A"].items()) == [("x", 3), ("y", 2)]


# ---------------------------------------------------------------------------
# commented content is dropped
# ---------------------------------------------------------------------------

def test_inactive_entries_and_sections_omitted():
    data = _load("; top\n[A]\n;x=1\ny=2 ; note\n;[B]\n;z=3")
    assert data == {"A": {"y": 2}}

def test_commented_entry_before_header_adds_no_section():
    assert _json(";Version=1\n[Main]\na=1\n") == '{\n    "Main": {\n        "a": 1\n    }\n}\n'

def test_only_commented_entries_gives_empty_object():
    assert _json(";Version=1\n") == "{}\n"

def test_only_commented_sections_gives_empty_object():
    assert _json(";[A]\n;k=1\n") == "{}\n"


# ---------------------------------------------------------------------------
# flags
# ---------------------------------------------------------------------------

def test_no_type_conversion_makes_every_value_a_string():
    text = '[S]\na=1\nb=2.5\nc=true\nd=Yes\ne=\nf="q"'
    data = _load(
        text,
        no_type_conversion=True,
        strip_quotes=True,
        empty_as_null=True,
        yes_no_as_boolean=True,
    )
    assert all(isinstance(v, str) for v in data["S"].values())
    assert data["S"]["f"] == '"q"'

def test_strip_quotes():
    assert _load('[S]\nName="Hello World"', strip_quotes=True) == {"S": {"Name": "Hello World"}}


# ---------------------------------------------------------------------------
# escaping
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value",
    ["C:\\Windows\\System32", "\\\\server\\share\\", 'say \\"hi\\"', "a\\tb"],
)
def test_backslashes_round_trip(value):
    assert _load(f"[S]\nPath={value}")["S"]["Path"] == value

def test_quotes_in_keys_and_names_escaped():
    assert _load('[Se"c]\nK"ey=v') == {'Se"c': {'K"ey': "v"}}

def test_strict_mode_rejects_raw_control_character():
    with pytest.raises(EscapeError):
        _json("[S]\nBell=a\x07b", strict_mode=True)

def test_non_strict_escapes_control_character():
    assert _load("[S]\nBell=a\x07b") == {"S": {"Bell": "a\x07b"}}


# ---------------------------------------------------------------------------
# depth
# ---------------------------------------------------------------------------

def test_depth_one_rejects_sections():
    with pytest.raises(LimitExceededError):
        _json("[S]\nk=v", depth=1)

def test_depth_one_allows_empty_document():
    assert _json("", depth=1) == "{}\n"
