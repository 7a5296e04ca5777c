"""Tests for output filename sanitization."""

import pytest

from utilities.filenames import output_filename, strip_invalid_chars


def test_strips_every_invalid_char():
    assert strip_invalid_chars('a*b?c\\d<e>f:g"h|i/j') == "abcdefghij"


def test_deletes_rather_than_substitutes():
    assert strip_invalid_chars("Re:Zero") == "ReZero"


@pytest.mark.parametrize("name", [
    "Plain Title",
    'What? "Really" <yes>',
    "AC/DC: Live | Remaster*",
    "",
])
def test_sanitization_is_idempotent(name):
    once = strip_invalid_chars(name)

    assert strip_invalid_chars(once) == once


def test_output_filename_uses_audio_extension():
    assert output_filename("Bar", "Foo", "/songs/1 A/a.mp3") == "Bar - Foo.mp3"
    assert output_filename("Bar", "Foo", "/songs/1 A/a.OGG") == "Bar - Foo.ogg"


def test_output_filename_sanitizes_both_parts():
    assert output_filename("A/B", "C:D?", "x.mp3") == "AB - CD.mp3"


def test_output_filename_without_extension_defaults_to_mp3():
    assert output_filename("Bar", "Foo", "/songs/audio") == "Bar - Foo.mp3"
