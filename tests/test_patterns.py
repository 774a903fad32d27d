from __future__ import annotations

from serialview.text import MatchStatus, SGRPattern, SGRSequence


def test_complete_sequence_matches() -> None:
    result = SGRPattern().run("\x1b[31;1mrest")

    assert result.status is MatchStatus.MATCH
    assert result.end == 7
    assert result.value == SGRSequence("31;1")
    assert result.value.codes == ("31", "1")


def test_truncated_sequence_is_partial() -> None:
    pattern = SGRPattern()

    for fragment in ("\x1b", "\x1b[", "\x1b[3", "\x1b[31;"):
        assert pattern.run(fragment).status is MatchStatus.PARTIAL


def test_invalid_character_is_mismatch() -> None:
    pattern = SGRPattern()

    assert pattern.run("\x1b[3x").status is MatchStatus.MISMATCH
    assert pattern.run("\x1bX").status is MatchStatus.MISMATCH
    assert pattern.run("abc").status is MatchStatus.MISMATCH


def test_partial_match_start() -> None:
    pattern = SGRPattern()

    assert pattern.partial_match_start("abc\x1b[") == 3
    assert pattern.partial_match_start("abc") is None
    assert pattern.partial_match_start("\x1b[12;\x1b[def") is None
    assert pattern.partial_match_start("\x1b[1x\x1b") == 4


def test_search_skips_broken_sequences() -> None:
    found = SGRPattern().search("ab\x1b[1;\x1b[32mz")

    assert found is not None
    offset, result = found
    assert offset == 6
    assert result.end == 11
    assert result.value.full == "\x1b[32m"


def test_search_without_match() -> None:
    assert SGRPattern().search("plain text") is None
    assert SGRPattern().search("\x1b[20def") is None
