from __future__ import annotations

import threading

import pytest

from serialview.pipeline import InboundQueue, StreamPipeline
from serialview.text import Colour

RED = Colour(170, 0, 0)
GREEN = Colour(0, 170, 0)


def markers(pipeline: StreamPipeline) -> list[tuple[int, Colour]]:
    return [(m.position, m.colour) for m in pipeline.output.colours]


def test_colours_and_new_lines_reach_output() -> None:
    pipeline = StreamPipeline()

    pipeline.feed("one\x1b[31mred\r\n\x1b[32mgreen")

    assert pipeline.output.text == "onered\r\ngreen"
    assert markers(pipeline) == [(3, RED), (8, GREEN)]
    assert pipeline.output.new_line_markers == [7]
    assert pipeline.residue == ""


def test_visible_symbols_through_pipeline() -> None:
    pipeline = StreamPipeline(replace_control_chars_with_visible_symbols=True)

    pipeline.feed(b"abc\r\ndef")

    assert pipeline.output.text == "abc↵␤def"
    assert pipeline.output.split_at_new_lines() == ["abc↵", "␤def"]


def test_partial_sequence_is_residue() -> None:
    pipeline = StreamPipeline()

    pipeline.feed("abc\x1b[3")
    assert pipeline.output.text == "abc"
    assert pipeline.residue == "\x1b[3"

    pipeline.feed("1mx")
    assert pipeline.output.text == "abcx"
    assert markers(pipeline) == [(3, RED)]
    assert pipeline.residue == ""


def test_multibyte_character_split_across_chunks() -> None:
    pipeline = StreamPipeline()

    pipeline.feed(b"caf\xc3")
    assert pipeline.output.text == "caf"

    pipeline.feed(b"\xa9")
    assert pipeline.output.text == "café"


def test_invalid_bytes_are_replaced() -> None:
    pipeline = StreamPipeline()

    pipeline.feed(b"a\xffb")

    assert pipeline.output.text == "a�b"


def test_toggle_symbols_applies_to_later_text() -> None:
    pipeline = StreamPipeline()
    pipeline.feed("a\n")

    pipeline.replace_control_chars_with_visible_symbols = True
    pipeline.feed("b\n")

    assert pipeline.output.text == "a\nb␤"
    assert pipeline.output.new_line_markers == [1, 3]


def test_reset_discards_all_state() -> None:
    pipeline = StreamPipeline()
    pipeline.feed(b"abc\x1b[3")
    pipeline.feed(b"\xc3")

    pipeline.reset()
    pipeline.feed(b"xyz")

    assert pipeline.output.text == "xyz"
    assert pipeline.residue == ""
    assert pipeline.output.colours == []


STREAM = b"boot\x1b[32;1m ok\x1b[0m\r\n\x1b[31mfail\xc3\xa9\x1b[20;5m\r\nend\x1b["


@pytest.mark.parametrize("symbols", [False, True])
def test_byte_by_byte_matches_single_chunk(symbols: bool) -> None:
    whole = StreamPipeline(replace_control_chars_with_visible_symbols=symbols)
    whole.feed(STREAM)

    stepped = StreamPipeline(replace_control_chars_with_visible_symbols=symbols)
    for index in range(len(STREAM)):
        stepped.feed(STREAM[index : index + 1])

    assert stepped.output.snapshot() == whole.output.snapshot()
    assert stepped.residue == whole.residue == "\x1b["


def test_inbound_queue_drains_in_order() -> None:
    queue = InboundQueue()
    queue.put(b"ab")
    queue.put(b"")
    queue.put(b"cde")

    assert len(queue) == 2
    assert queue.drain() == [b"ab", b"cde"]
    assert queue.drain() == []
    assert queue.total_bytes == 5


def test_inbound_queue_across_threads() -> None:
    queue = InboundQueue()
    chunks = [bytes([index % 256]) * 3 for index in range(500)]

    def produce() -> None:
        for chunk in chunks:
            queue.put(chunk)

    producer = threading.Thread(target=produce)
    producer.start()
    received = []
    while producer.is_alive() or len(queue):
        received.extend(queue.drain())
    producer.join()
    received.extend(queue.drain())

    assert received == chunks
    assert queue.total_bytes == 1500
