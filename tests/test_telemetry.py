from __future__ import annotations

import pytest

from serialview.runtime import telemetry
from serialview.text import convert_non_printable


def test_span_reraises_and_records_failure() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", component=True, metadata={"chars": 3}) as handle:
            handle.add_metadata("stage", "ansi")
            assert handle.component_name == "test::span"
            assert handle.metadata == {"chars": "3", "stage": "ansi"}
            raise RuntimeError("boom")


def test_record_event_levels() -> None:
    telemetry.record_event("test.event", level="debug", data={"count": 2})
    telemetry.record_event("test.event", level="info")


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_logger_cache_reuses_instances() -> None:
    assert telemetry.get_logger("serialview.test") is telemetry.get_logger(
        "serialview.test"
    )


def test_convert_non_printable() -> None:
    assert convert_non_printable("a\x1b[31m\r\n\x07") == "a<ESC>[31m<CR><LF><0x07>"
