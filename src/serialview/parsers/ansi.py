"""Incremental parser for ANSI SGR colour sequences."""

from __future__ import annotations

from typing import Mapping, Optional

from serialview.runtime import telemetry
from serialview.text import Colour, SGRPattern, SGRSequence, StreamedText
from serialview.text.debugging import convert_non_printable

NORMAL_PALETTE: Mapping[str, Colour] = {
    "30": Colour(0, 0, 0),
    "31": Colour(170, 0, 0),
    "32": Colour(0, 170, 0),
    "33": Colour(170, 85, 0),
    "34": Colour(0, 0, 170),
    "35": Colour(170, 0, 170),
    "36": Colour(0, 170, 170),
    "37": Colour(170, 170, 170),
}

BOLD_PALETTE: Mapping[str, Colour] = {
    "30": Colour(85, 85, 85),
    "31": Colour(255, 85, 85),
    "32": Colour(85, 255, 85),
    "33": Colour(255, 255, 85),
    "34": Colour(85, 85, 225),
    "35": Colour(255, 85, 255),
    "36": Colour(85, 255, 255),
    "37": Colour(255, 255, 255),
}

BOLD_CODE = "1"


def colour_for(sequence: SGRSequence) -> Optional[Colour]:
    """Resolve ``30..37`` or ``30..37;1``; anything else has no colour effect."""

    codes = sequence.codes
    if len(codes) == 1:
        return NORMAL_PALETTE.get(codes[0])
    if len(codes) == 2 and codes[1] == BOLD_CODE:
        return BOLD_PALETTE.get(codes[0])
    return None


class AnsiEscapeParser:
    """Moves text from an input buffer to an output buffer, consuming SGR sequences.

    A trailing fragment that could still become a sequence is left in the
    input buffer; the next call sees it prepended to whatever arrives next.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self.pattern = SGRPattern()
        self._logger_name = logger_name or "serialview.parsers"

    def parse(self, source: StreamedText, output: StreamedText) -> None:
        while (found := self.pattern.search(source.text)) is not None:
            start, result = found
            output.shift_chars_in(source, start)
            source.remove_chars(result.end - start)

            sequence: SGRSequence = result.value
            colour = colour_for(sequence)
            telemetry.record_event(
                "ansi.sequence",
                level="debug",
                data={"sequence": convert_non_printable(sequence.full), "colour": colour},
                logger_name=self._logger_name,
            )
            if colour is not None:
                output.set_pending_colour(colour)

        output.shift_chars_in_until_partial_match(source, self.pattern)
        if source.text:
            telemetry.record_event(
                "ansi.withheld",
                level="debug",
                data={"text": convert_non_printable(source.text)},
                logger_name=self._logger_name,
            )


__all__ = ["AnsiEscapeParser", "BOLD_PALETTE", "NORMAL_PALETTE", "colour_for"]
