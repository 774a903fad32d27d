"""Character-fed patterns that can tell a full match from a partial one.

A pattern is written as a generator: every ``(yield)`` receives the next
character. Returning ``False`` rejects the input, returning any other value
accepts it. If the characters run out while the generator still wants more,
the input is a *partial* match: a prefix of something the pattern could
accept once more text arrives.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generator, NamedTuple, Optional, Tuple

PatternCheck = Generator[None, str, Any]

ESC = "\x1b"


class MatchStatus(Enum):
    MATCH = "match"
    PARTIAL = "partial"
    MISMATCH = "mismatch"


@dataclass(frozen=True, slots=True)
class PatternResult:
    status: MatchStatus
    end: int
    """Index one past the last character the pattern consumed."""
    value: Any = None


class Pattern:
    """Base class for incremental patterns.

    ``prefix`` is an optional literal every match starts with; it lets scans
    skip straight to candidate offsets.
    """

    prefix: str = ""

    def check(self) -> PatternCheck:  # pragma: no cover - abstract override
        raise NotImplementedError

    def run(self, text: str, start: int = 0) -> PatternResult:
        """Feed ``text[start:]`` to a fresh check, one character at a time."""

        checker = self.check()
        next(checker)
        for position in range(start, len(text)):
            try:
                checker.send(text[position])
            except StopIteration as stop:
                if stop.value is False:
                    return PatternResult(MatchStatus.MISMATCH, position + 1)
                return PatternResult(MatchStatus.MATCH, position + 1, stop.value)
        checker.close()
        return PatternResult(MatchStatus.PARTIAL, len(text))

    def _candidates(self, text: str, start: int):
        offset = start
        while offset < len(text):
            if self.prefix:
                offset = text.find(self.prefix[0], offset)
                if offset == -1:
                    return
            yield offset
            offset += 1

    def search(self, text: str, start: int = 0) -> Optional[Tuple[int, PatternResult]]:
        """Return ``(offset, result)`` for the first full match at or after ``start``."""

        for offset in self._candidates(text, start):
            result = self.run(text, offset)
            if result.status is MatchStatus.MATCH:
                return offset, result
        return None

    def partial_match_start(self, text: str, start: int = 0) -> Optional[int]:
        """Return the earliest offset whose tail ``text[offset:]`` is a partial match."""

        for offset in self._candidates(text, start):
            if self.run(text, offset).status is MatchStatus.PARTIAL:
                return offset
        return None


class SGRSequence(NamedTuple):
    """A complete ``ESC [ ... m`` sequence."""

    parameters: str

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(self.parameters.split(";"))

    @property
    def full(self) -> str:
        return f"{ESC}[{self.parameters}m"


class SGRPattern(Pattern):
    """Select Graphic Rendition: ``ESC '[' [0-9;]* 'm'``."""

    prefix = ESC
    PARAMETER_CHARACTERS = frozenset("0123456789;")

    def check(self) -> PatternCheck:
        if (yield) != ESC:
            return False
        if (yield) != "[":
            return False

        parameters = io.StringIO()
        while (character := (yield)) in self.PARAMETER_CHARACTERS:
            parameters.write(character)

        if character != "m":
            return False
        return SGRSequence(parameters.getvalue())


__all__ = [
    "MatchStatus",
    "Pattern",
    "PatternCheck",
    "PatternResult",
    "SGRPattern",
    "SGRSequence",
]
