"""Programmer-error types raised by the streamed text layer.

None of these are recoverable: they signal an upstream bug and are allowed to
propagate out of the render loop.
"""

from __future__ import annotations


class StreamedTextError(RuntimeError):
    """Base class for broken preconditions on a ``StreamedText``."""

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        count: int | None = None,
        length: int | None = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.count = count
        self.length = length


class InvalidPosition(StreamedTextError):
    """A colour marker position is out of range or out of order."""


class RangeExceeded(StreamedTextError):
    """A shift/copy/remove count exceeds the source length."""


class InvariantBroken(StreamedTextError):
    """A post-operation consistency check failed."""


__all__ = [
    "StreamedTextError",
    "InvalidPosition",
    "RangeExceeded",
    "InvariantBroken",
]
