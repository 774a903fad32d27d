"""Turns a ``StreamedText`` into rich ``Text`` for display."""

from __future__ import annotations

from typing import Optional

from rich.color import Color
from rich.style import Style
from rich.text import Text

from serialview.text import Colour, StreamedText

# Line structure comes from new-line markers, not from the raw characters.
_HIDDEN = str.maketrans("", "", "\r\n")


def style_for(colour: Optional[Colour]) -> Style:
    if colour is None:
        return Style()
    return Style(color=Color.from_rgb(colour.red, colour.green, colour.blue))


def render_streamed_text(streamed: StreamedText) -> Text:
    """Build coloured rich text, breaking lines before each new-line marker."""

    source = streamed.text
    breaks = sorted(m for m in streamed.new_line_markers if 0 <= m <= len(source))
    output = Text()
    pending = 0

    for run in streamed.runs():
        style = style_for(run.colour)
        cursor = run.start
        while pending < len(breaks) and breaks[pending] < run.end:
            cut = max(breaks[pending], cursor)
            output.append(source[cursor:cut].translate(_HIDDEN), style)
            output.append("\n")
            cursor = cut
            pending += 1
        output.append(source[cursor : run.end].translate(_HIDDEN), style)

    output.append("\n" * (len(breaks) - pending))
    return output


__all__ = ["render_streamed_text", "style_for"]
