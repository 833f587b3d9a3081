"""Tests for the line tokenizer (first parser pass)."""

import pytest

from inf2json.core.errors import ParseError
from inf2json.parsers.tokenizer import split_inline_comment, split_lines, tokenize, tokenize_line
from inf2json.parsers.types import TokenType


def _types(text):
    return [t.type for t in tokenize(text)]


# ---------------------------------------------------------------------------
# split_lines
# ---------------------------------------------------------------------------

def test_split_lines_mixed_endings():
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

def test_split_lines_drops_final_newline_only():
    assert split_lines("a\n\n") == ["a", ""]

def test_split_lines_strips_bom():
    assert split_lines("\ufeff[A]") == ["[A]"]


# ---------------------------------------------------------------------------
# classification
# ---------------------------------------------------------------------------

def test_token_types_in_order():
    text = "[Main]\nKey=Value\n; note\n\n# other"
    assert _types(text) == [
        TokenType.HEADER,
        TokenType.KEY_VALUE,
        TokenType.COMMENT,
        TokenType.BLANK,
        TokenType.COMMENT,
    ]

def test_header_name_trimmed():
    tok = tokenize_line("[  Main Section  ]", 1)
    assert tok.name == "Main Section"
    assert tok.active

def test_header_inline_comment():
    tok = tokenize_line("[Main] ; the main one", 1)
    assert tok.name == "Main"
    assert tok.inline_comment == "the main one"

def test_key_value_splits_on_first_equals():
    tok = tokenize_line("Cmd = a=b ", 3)
    assert (tok.key, tok.value, tok.line) == ("Cmd", "a=b", 3)

def test_bare_key_has_empty_value():
    tok = tokenize_line("Flag", 1)
    assert tok.type == TokenType.KEY_VALUE
    assert (tok.key, tok.value) == ("Flag", "")

def test_empty_right_hand_side():
    tok = tokenize_line("Key=", 1)
    assert tok.value == ""

def test_comment_marker_stripped():
    tok = tokenize_line(";   hello there", 1)
    assert tok.type == TokenType.COMMENT
    assert tok.comment == "hello there"


# ---------------------------------------------------------------------------
# commented-out structure
# ---------------------------------------------------------------------------

def test_commented_key_value_is_inactive_entry():
    tok = tokenize_line(";Name=Value", 4)
    assert tok.type == TokenType.KEY_VALUE
    assert not tok.active
    assert (tok.key, tok.value, tok.comment) == ("Name", "Value", "Name=Value")

def test_hash_commented_key_value():
    tok = tokenize_line("# Timeout = 30", 1)
    assert tok.type == TokenType.KEY_VALUE
    assert (tok.key, tok.value) == ("Timeout", "30")

def test_commented_header_is_inactive_header():
    tok = tokenize_line(";[Extra]", 1)
    assert tok.type == TokenType.HEADER
    assert not tok.active
    assert tok.name == "Extra"

def test_prose_with_equals_stays_comment():
    tok = tokenize_line("; set this = 1 to enable", 1)
    assert tok.type == TokenType.COMMENT

def test_commented_key_with_spaces():
    tok = tokenize_line(";My Key=1", 1)
    assert tok.type == TokenType.KEY_VALUE
    assert not tok.active
    assert (tok.key, tok.value) == ("My Key", "1")

def test_spaced_words_before_spaced_equals_stay_comment():
    tok = tokenize_line("; my key = 1", 1)
    assert tok.type == TokenType.COMMENT

def test_double_commented_line_stays_comment():
    tok = tokenize_line(";;Key=1", 1)
    assert tok.type == TokenType.COMMENT
    assert tok.comment == ";Key=1"


# ---------------------------------------------------------------------------
# inline comments
# ---------------------------------------------------------------------------

def test_inline_comment_after_whitespace():
    assert split_inline_comment("Value ; note") == ("Value", "note")

def test_marker_without_whitespace_is_value():
    assert split_inline_comment("#fff") == ("#fff", None)
    assert split_inline_comment("a;b") == ("a;b", None)

def test_inline_marker_inside_leading_quotes_ignored():
    assert split_inline_comment('"a ;b" # c') == ('"a ;b"', "c")

def test_inline_comment_on_entry():
    tok = tokenize_line("Key=Value ; note", 1)
    assert (tok.value, tok.inline_comment) == ("Value", "note")


# ---------------------------------------------------------------------------
# errors
# ---------------------------------------------------------------------------

def test_missing_key_is_parse_error():
    with pytest.raises(ParseError) as exc:
        tokenize_line("=value", 7)
    assert exc.value.line == 7
    assert "line 7" in str(exc.value)

def test_empty_header_is_parse_error():
    with pytest.raises(ParseError):
        tokenize_line("[   ]", 1)

def test_unterminated_header_is_parse_error():
    with pytest.raises(ParseError):
        tokenize_line("[Open", 1)

def test_tokenize_is_lazy():
    tokens = tokenize("[A]\n=bad")
    assert next(tokens).type == TokenType.HEADER
    with pytest.raises(ParseError):
        next(tokens)
