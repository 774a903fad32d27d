from __future__ import annotations

import pytest

from serialview.pipeline import Scrollback
from serialview.text import Colour, StreamedText

RED = Colour(170, 0, 0)
GREEN = Colour(0, 170, 0)
BLUE = Colour(0, 0, 170)


def markers(streamed: StreamedText) -> list[tuple[int, Colour]]:
    return [(m.position, m.colour) for m in streamed.colours]


def test_absorb_takes_everything_by_default() -> None:
    scrollback = Scrollback()
    source = StreamedText("abc")

    assert scrollback.absorb(source) == 3
    assert scrollback.content.text == "abc"
    assert source.text == ""


def test_trim_keeps_colour_of_first_visible_char() -> None:
    scrollback = Scrollback(5)
    source = StreamedText("abcdefgh")
    source.add_colour(0, RED)

    scrollback.absorb(source)

    assert scrollback.content.text == "defgh"
    assert markers(scrollback.content) == [(0, RED)]
    assert scrollback.trimmed_chars == 3


def test_trim_at_colour_boundary() -> None:
    scrollback = Scrollback(5)
    source = StreamedText("abcdefgh")
    source.add_colour(0, RED)
    source.add_colour(3, GREEN)

    scrollback.absorb(source)

    assert markers(scrollback.content) == [(0, GREEN)]


def test_trim_moves_new_line_markers() -> None:
    scrollback = Scrollback(4)
    source = StreamedText("ab\ncd\nef")
    source.add_new_line_marker(2)
    source.add_new_line_marker(5)

    scrollback.absorb(source)

    assert scrollback.content.text == "d\nef"
    assert scrollback.content.new_line_markers == [1]


def test_trim_keeps_pending_colour() -> None:
    scrollback = Scrollback(5)
    source = StreamedText("abcdefgh")
    source.set_pending_colour(BLUE)

    scrollback.absorb(source)

    assert scrollback.content.pending_colour == BLUE
    scrollback.absorb(StreamedText("x"))
    assert markers(scrollback.content) == [(4, BLUE)]


def test_partial_absorb_leaves_pending_colour_in_source() -> None:
    scrollback = Scrollback()
    source = StreamedText("abcd")
    source.set_pending_colour(BLUE)

    assert scrollback.absorb(source, 2) == 2

    assert scrollback.content.text == "ab"
    assert scrollback.content.pending_colour is None
    assert source.text == "cd"
    assert source.pending_colour == BLUE


def test_zero_limit_is_unbounded() -> None:
    scrollback = Scrollback(0)
    scrollback.absorb(StreamedText("x" * 50000))

    assert len(scrollback) == 50000
    assert scrollback.trimmed_chars == 0


def test_clear() -> None:
    scrollback = Scrollback()
    scrollback.absorb(StreamedText("abc"))

    scrollback.clear()

    assert len(scrollback) == 0


def test_negative_limit_rejected() -> None:
    with pytest.raises(ValueError):
        Scrollback(-1)
