"""Bounded history of rendered text, fed from the pipeline output."""

from __future__ import annotations

from typing import Optional

from serialview.runtime import telemetry
from serialview.text import ColourMarker, StreamedText


class Scrollback:
    """Owns the text currently on screen.

    ``max_chars`` of ``0`` disables trimming.
    """

    def __init__(self, max_chars: int = 20000) -> None:
        if max_chars < 0:
            raise ValueError("max_chars cannot be negative")
        self.max_chars = max_chars
        self.content = StreamedText()
        self.trimmed_chars = 0

    def __len__(self) -> int:
        return len(self.content.text)

    def absorb(self, source: StreamedText, max_chars: Optional[int] = None) -> int:
        """Shift up to ``max_chars`` characters out of ``source``; returns the count."""

        available = len(source.text)
        count = available if max_chars is None else min(max_chars, available)

        # A pending colour belongs after the characters left behind in source.
        held = source.pending_colour if count < available else None
        if held is not None:
            source.pending_colour = None
        self.content.shift_chars_in(source, count)
        if held is not None:
            source.pending_colour = held

        self.trim()
        return count

    def trim(self) -> int:
        excess = len(self.content.text) - self.max_chars
        if self.max_chars == 0 or excess <= 0:
            return 0

        carried = self.content.colour_at(excess)
        pending = self.content.pending_colour
        self.content.remove_chars(excess)
        if (
            carried is not None
            and self.content.text
            and not self.content.is_colour_at(0)
        ):
            self.content.colours.insert(0, ColourMarker(0, carried))
        self.content.pending_colour = pending

        self.trimmed_chars += excess
        telemetry.record_event(
            "scrollback.trim",
            level="debug",
            data={"removed": excess, "kept": len(self.content.text)},
            logger_name="serialview.pipeline",
        )
        return excess

    def clear(self) -> None:
        self.content.clear()


__all__ = ["Scrollback"]
