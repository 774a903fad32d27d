"""Streamed text: a run of characters with aligned colour and new-line markers.

A ``StreamedText`` is the unit that flows between pipeline stages. Characters
move from one buffer to the next with ``shift_chars_in`` (the source gives
them up) or ``copy_chars_from`` (the source keeps them); both carry the
colour markers, new-line markers and pending colour along with the text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence

from serialview.runtime import telemetry

from .colour import Colour, ColourMarker, ColourRun
from .debugging import convert_non_printable
from .errors import InvalidPosition, InvariantBroken, RangeExceeded
from .patterns import Pattern

_log = telemetry.get_logger("serialview.text")


class TransferMode(Enum):
    COPY = "copy"
    SHIFT = "shift"


@dataclass(frozen=True, slots=True)
class StreamedTextView:
    """Immutable snapshot of a ``StreamedText``."""

    text: str
    colours: tuple[tuple[int, Colour], ...]
    new_line_markers: tuple[int, ...]
    pending_colour: Optional[Colour]


class StreamedText:
    """Text plus colour-change markers, new-line markers and a pending colour.

    ``new_line_markers`` hold the number of characters preceding each line
    break. ``pending_colour`` is a colour change still waiting for a
    character to land on; it becomes a ``ColourMarker`` on the next append
    or non-empty shift.
    """

    def __init__(self, text: str = "") -> None:
        self.text = ""
        self.colours: List[ColourMarker] = []
        self.new_line_markers: List[int] = []
        self.pending_colour: Optional[Colour] = None
        if text:
            self.append(text)

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        colours = ", ".join(f"({m.position}, {m.colour.hex})" for m in self.colours)
        return (
            f"StreamedText(text={convert_non_printable(self.text)!r}, "
            f"colours=[{colours}], new_line_markers={self.new_line_markers!r}, "
            f"pending_colour={self.pending_colour!r})"
        )

    def copy(self) -> "StreamedText":
        duplicate = StreamedText()
        duplicate.copy_chars_from(self, len(self.text))
        return duplicate

    def snapshot(self) -> StreamedTextView:
        return StreamedTextView(
            text=self.text,
            colours=tuple((m.position, m.colour) for m in self.colours),
            new_line_markers=tuple(self.new_line_markers),
            pending_colour=self.pending_colour,
        )

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def append(self, text: str) -> None:
        if not text:
            return
        _log.debug(f"append text={convert_non_printable(text)!r}")

        start = len(self.text)
        self.text += text
        if self.pending_colour is not None:
            self.add_colour(start, self.pending_colour)
            self.pending_colour = None

    def add_colour(self, position: int, colour: Colour) -> None:
        if position < 0 or position > len(self.text) - 1:
            raise InvalidPosition(
                f"Colour position {position} outside text of length {len(self.text)}",
                position=position,
                length=len(self.text),
            )
        if self.colours and self.colours[-1].position > position:
            raise InvalidPosition(
                f"Colour position {position} precedes last marker at "
                f"{self.colours[-1].position}",
                position=position,
            )
        self._place_colour(position, colour)
        self.check_colours_in_order()

    def set_pending_colour(self, colour: Optional[Colour]) -> None:
        self.pending_colour = colour

    def add_new_line_marker(self, index: int) -> None:
        # Markers may run ahead of the text during a transfer; the range holds
        # again once the paired text has landed.
        self.new_line_markers.append(index)

    def substitute(self, start: int, table: Mapping[str, str]) -> None:
        """Rewrite ``text[start:]`` through ``table`` one character for one."""

        if start < 0 or start > len(self.text):
            raise InvalidPosition(
                f"Substitution start {start} outside text of length {len(self.text)}",
                position=start,
                length=len(self.text),
            )
        tail = self.text[start:]
        rewritten = tail.translate(str.maketrans(dict(table)))
        if len(rewritten) != len(tail):
            raise InvariantBroken(
                "Substitution changed the character count", position=start
            )
        self.text = self.text[:start] + rewritten

    # ------------------------------------------------------------------
    # Removing
    # ------------------------------------------------------------------

    def remove_char(self, index: int) -> None:
        """Drop one character; new-line markers after it move back by one.

        Colour markers are left as they are.
        """

        if index < 0 or index >= len(self.text):
            raise InvalidPosition(
                f"Character index {index} outside text of length {len(self.text)}",
                position=index,
                length=len(self.text),
            )
        self.text = self.text[:index] + self.text[index + 1 :]
        self.new_line_markers = [
            marker - 1 if marker > index else marker
            for marker in self.new_line_markers
        ]

    def remove_chars(self, count: int) -> None:
        StreamedText().shift_chars_in(self, count)

    def clear(self) -> None:
        self.text = ""
        self.colours.clear()
        self.new_line_markers.clear()
        self.pending_colour = None

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def shift_chars_in(self, source: "StreamedText", count: int) -> None:
        self._transfer(source, count, TransferMode.SHIFT)

    def copy_chars_from(self, source: "StreamedText", count: int) -> None:
        self._transfer(source, count, TransferMode.COPY)

    def shift_chars_in_until_partial_match(
        self, source: "StreamedText", pattern: Pattern
    ) -> int:
        """Shift everything in ``source`` up to the first partial match of ``pattern``.

        Returns the number of characters shifted; the withheld tail stays in
        ``source`` until more input decides it.
        """

        start = pattern.partial_match_start(source.text)
        count = len(source.text) if start is None else start
        self.shift_chars_in(source, count)
        return count

    def _transfer(self, source: "StreamedText", count: int, mode: TransferMode) -> None:
        if count < 0 or count > len(source.text):
            raise RangeExceeded(
                f"Cannot {mode.value} {count} chars from text of length "
                f"{len(source.text)}",
                count=count,
                length=len(source.text),
            )
        shifting = mode is TransferMode.SHIFT
        offset = len(self.text)

        remaining_markers: List[int] = []
        for marker in source.new_line_markers:
            if marker <= count:
                self.add_new_line_marker(offset + marker)
            else:
                remaining_markers.append(marker - count if shifting else marker)
        if shifting:
            source.new_line_markers = remaining_markers

        if count > 0 and self.pending_colour is not None:
            self._place_colour(offset, self.pending_colour)
            self.pending_colour = None

        remaining_colours: List[ColourMarker] = []
        for marker in source.colours:
            if marker.position < count:
                self._place_colour(offset + marker.position, marker.colour)
            elif shifting:
                remaining_colours.append(
                    ColourMarker(marker.position - count, marker.colour)
                )
        if shifting:
            source.colours = remaining_colours

        self.text += source.text[:count]
        if shifting:
            source.text = source.text[count:]

        if source.pending_colour is not None:
            self.pending_colour = source.pending_colour
            if shifting:
                source.pending_colour = None

        self.check_colours_in_order()

    def _place_colour(self, position: int, colour: Colour) -> None:
        if self.colours and self.colours[-1].position == position:
            self.colours[-1].colour = colour
        else:
            self.colours.append(ColourMarker(position, colour))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_colour_at(self, index: int) -> bool:
        return any(marker.position == index for marker in self.colours)

    def colour_at(self, index: int) -> Optional[Colour]:
        """Colour in effect for the character at ``index``."""

        active = None
        for marker in self.colours:
            if marker.position > index:
                break
            active = marker.colour
        return active

    def split_at_new_lines(self) -> List[str]:
        lines = []
        start = 0
        for marker in self.new_line_markers:
            lines.append(self.text[start:marker])
            start = marker
        lines.append(self.text[start:])
        return lines

    def runs(self) -> List[ColourRun]:
        """Partition the text into maximal same-colour runs."""

        runs: List[ColourRun] = []
        boundaries: Sequence[ColourMarker] = self.colours
        if not self.text:
            return runs
        if not boundaries or boundaries[0].position > 0:
            first_end = boundaries[0].position if boundaries else len(self.text)
            runs.append(ColourRun(0, first_end, None))
        for index, marker in enumerate(boundaries):
            end = (
                boundaries[index + 1].position
                if index + 1 < len(boundaries)
                else len(self.text)
            )
            if end > marker.position:
                runs.append(ColourRun(marker.position, end, marker.colour))
        return runs

    # ------------------------------------------------------------------
    # Consistency checks
    # ------------------------------------------------------------------

    def check_colours_in_order(self) -> None:
        last = -1
        for marker in self.colours:
            if marker.position <= last:
                raise InvariantBroken(
                    f"Colour marker at {marker.position} does not follow {last}",
                    position=marker.position,
                )
            last = marker.position

    def check_new_lines_have_colours(self) -> bool:
        """True if every character following a ``\\n`` starts a colour run.

        A ``\\n`` that ends the text has nothing after it and is skipped.
        """

        for index in range(len(self.text) - 1):
            if self.text[index] != "\n":
                continue
            if not self.is_colour_at(index + 1):
                _log.debug(f"no colour on line starting at {index + 1}")
                return False
        return True


__all__ = ["StreamedText", "StreamedTextView", "TransferMode"]
