"""Streamed text data model shared by every pipeline stage."""

from .colour import Colour, ColourMarker, ColourRun
from .debugging import convert_non_printable
from .errors import InvalidPosition, InvariantBroken, RangeExceeded, StreamedTextError
from .patterns import MatchStatus, Pattern, PatternResult, SGRPattern, SGRSequence
from .streamed_text import StreamedText, StreamedTextView, TransferMode

__all__ = [
    "Colour",
    "ColourMarker",
    "ColourRun",
    "StreamedText",
    "StreamedTextView",
    "TransferMode",
    "Pattern",
    "PatternResult",
    "MatchStatus",
    "SGRPattern",
    "SGRSequence",
    "StreamedTextError",
    "InvalidPosition",
    "RangeExceeded",
    "InvariantBroken",
    "convert_non_printable",
]
