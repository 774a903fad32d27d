"""Incremental parsers that turn raw serial text into annotated text."""

from .ansi import BOLD_PALETTE, NORMAL_PALETTE, AnsiEscapeParser, colour_for
from .ascii_control import VISIBLE_SYMBOLS, AsciiControlCharParser

__all__ = [
    "AnsiEscapeParser",
    "AsciiControlCharParser",
    "NORMAL_PALETTE",
    "BOLD_PALETTE",
    "VISIBLE_SYMBOLS",
    "colour_for",
]
