"""Marks line feeds and optionally swaps control characters for visible glyphs."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from serialview.runtime import telemetry
from serialview.text import StreamedText

LINE_FEED = "\n"

VISIBLE_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "\r": "\u21b5",  # ↵
        "\n": "\u2424",  # ␤
    }
)


class AsciiControlCharParser:
    """Shifts all input into the output, recording a new-line marker per LF.

    Substitutions are one character for one, so colour and new-line marker
    positions stay valid.
    """

    def __init__(
        self,
        *,
        replace_with_visible_symbols: bool = False,
        symbols: Optional[Mapping[str, str]] = None,
    ) -> None:
        table = dict(VISIBLE_SYMBOLS if symbols is None else symbols)
        for control, glyph in table.items():
            if len(control) != 1 or len(glyph) != 1:
                raise ValueError(
                    f"Symbol mapping {control!r} -> {glyph!r} must be one character each"
                )
        self.replace_with_visible_symbols = replace_with_visible_symbols
        self.symbols: Mapping[str, str] = MappingProxyType(table)

    def parse(self, source: StreamedText, output: StreamedText) -> None:
        start = len(output.text)
        output.shift_chars_in(source, len(source.text))

        new_lines = 0
        index = output.text.find(LINE_FEED, start)
        while index != -1:
            output.add_new_line_marker(index)
            new_lines += 1
            index = output.text.find(LINE_FEED, index + 1)

        if self.replace_with_visible_symbols:
            output.substitute(start, self.symbols)

        if new_lines:
            telemetry.record_event(
                "control.new_lines",
                level="debug",
                data={"count": new_lines, "offset": start},
                logger_name="serialview.parsers",
            )


__all__ = ["AsciiControlCharParser", "VISIBLE_SYMBOLS"]
