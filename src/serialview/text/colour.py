"""Colour values and the markers that bind them to text positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional


class Colour(NamedTuple):
    """An RGB triple, each channel in ``0..255``."""

    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


@dataclass(slots=True)
class ColourMarker:
    """Marks the first character a new colour applies to."""

    position: int
    colour: Colour


@dataclass(frozen=True, slots=True)
class ColourRun:
    """A maximal ``[start, end)`` run of text drawn in one colour.

    ``colour`` is ``None`` for text preceding the first marker.
    """

    start: int
    end: int
    colour: Optional[Colour]

    def __len__(self) -> int:
        return self.end - self.start


__all__ = ["Colour", "ColourMarker", "ColourRun"]
