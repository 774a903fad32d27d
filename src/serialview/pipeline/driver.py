"""Threads raw serial text through the parser chain."""

from __future__ import annotations

import codecs

from serialview.parsers import AnsiEscapeParser, AsciiControlCharParser
from serialview.runtime import telemetry
from serialview.text import StreamedText


class StreamPipeline:
    """raw_in -> AnsiEscapeParser -> after_ansi -> AsciiControlCharParser -> after_control.

    The renderer consumes ``after_control`` by shifting characters out of it;
    anything it leaves behind accumulates there.
    """

    def __init__(
        self,
        *,
        replace_control_chars_with_visible_symbols: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self.raw_in = StreamedText()
        self.after_ansi = StreamedText()
        self.after_control = StreamedText()
        self.ansi_parser = AnsiEscapeParser()
        self.control_char_parser = AsciiControlCharParser(
            replace_with_visible_symbols=replace_control_chars_with_visible_symbols
        )
        self.encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    @property
    def replace_control_chars_with_visible_symbols(self) -> bool:
        return self.control_char_parser.replace_with_visible_symbols

    @replace_control_chars_with_visible_symbols.setter
    def replace_control_chars_with_visible_symbols(self, value: bool) -> None:
        self.control_char_parser.replace_with_visible_symbols = value

    @property
    def output(self) -> StreamedText:
        return self.after_control

    @property
    def residue(self) -> str:
        """Characters withheld as a possible partial escape sequence."""

        return self.raw_in.text

    def decode(self, chunk: bytes) -> str:
        return self._decoder.decode(chunk)

    def feed(self, chunk: str | bytes) -> StreamedText:
        text = self.decode(chunk) if isinstance(chunk, bytes) else chunk
        with telemetry.span(
            "pipeline::feed",
            component="pipeline",
            metadata={"chars": len(text)},
        ) as handle:
            self.raw_in.append(text)
            self.ansi_parser.parse(self.raw_in, self.after_ansi)
            self.control_char_parser.parse(self.after_ansi, self.after_control)
            handle.add_metadata("withheld", len(self.raw_in.text))
        return self.after_control

    def reset(self) -> None:
        self.raw_in.clear()
        self.after_ansi.clear()
        self.after_control.clear()
        self._decoder.reset()


__all__ = ["StreamPipeline"]
