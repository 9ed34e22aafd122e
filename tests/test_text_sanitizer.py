import pytest

from swissbill.core.text_sanitizer import SanitizeMode, sanitize


SAMPLES = [
    "",
    "   ",
    "Bahnhofstrasse 1",
    "Zürich  \t Genève",
    "line one\r\nline two\nline three",
    "Müller & Söhne 🚀 GmbH",
    "\x00\x1fctrl\x7f\x85\x9fchars",
    "non breaking  space",
    "日本語 text",
    "\n\n  leading and trailing  \n\n",
    "a​b",
]


def test_keeps_latin1_letters():
    assert sanitize("Müller Genève Ñandú ß") == "Müller Genève Ñandú ß"


def test_drops_emoji_and_wide_unicode():
    assert sanitize("Müller & Söhne 🚀 GmbH") == "Müller & Söhne GmbH"
    assert sanitize("日本語 text") == "text"


def test_single_line_removes_line_breaks_and_controls():
    assert sanitize("line one\r\nline two\tend") == "line one line two end"
    assert sanitize("\x00a\x1fb\x7fc\x9fd") == "a b c d"


def test_collapses_and_trims_whitespace():
    assert sanitize("  a    b  ") == "a b"
    assert sanitize("a  b") == "a b"


def test_none_and_empty():
    assert sanitize(None) == ""
    assert sanitize("") == ""
    assert sanitize(" \t\n ") == ""


def test_multi_line_keeps_line_feeds():
    text = "Rechnung 42\r\n  Danke   für \t den Auftrag \n\nGruss"
    assert sanitize(text, SanitizeMode.MULTI_LINE) == "Rechnung 42\nDanke für den Auftrag\nGruss"


def test_multi_line_drops_other_controls():
    assert sanitize("a\x07b\nc\x1bd", SanitizeMode.MULTI_LINE) == "a b\nc d"


@pytest.mark.parametrize("mode", list(SanitizeMode))
@pytest.mark.parametrize("text", SAMPLES)
def test_sanitize_is_idempotent(text, mode):
    once = sanitize(text, mode)
    assert sanitize(once, mode) == once


@pytest.mark.parametrize("text", SAMPLES)
def test_output_stays_in_allowed_range(text):
    for ch in sanitize(text):
        code = ord(ch)
        assert 0x20 <= code <= 0x7E or 0xA0 <= code <= 0xFF
