from __future__ import annotations

import pytest

from serialview.config import ViewerConfig


def test_defaults() -> None:
    config = ViewerConfig.from_env({})

    assert config == ViewerConfig()
    assert config.baudrate == 115200
    assert config.chars_per_frame is None


def test_environment_overrides() -> None:
    config = ViewerConfig.from_env(
        {
            "SERIALVIEW_PORT": "/dev/ttyACM0",
            "SERIALVIEW_BAUD": "9600",
            "SERIALVIEW_VISIBLE_SYMBOLS": "yes",
            "SERIALVIEW_MAX_SCROLLBACK": "0",
            "SERIALVIEW_CHARS_PER_FRAME": "128",
            "SERIALVIEW_FRAME_INTERVAL": "0.1",
        }
    )

    assert config.port == "/dev/ttyACM0"
    assert config.baudrate == 9600
    assert config.replace_control_chars_with_visible_symbols is True
    assert config.max_scrollback_chars == 0
    assert config.chars_per_frame == 128
    assert config.frame_interval == 0.1


def test_malformed_environment_falls_back() -> None:
    config = ViewerConfig.from_env(
        {"SERIALVIEW_BAUD": "fast", "SERIALVIEW_CHARS_PER_FRAME": "-5"}
    )

    assert config.baudrate == 115200
    assert config.chars_per_frame is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"baudrate": 0},
        {"max_scrollback_chars": -1},
        {"chars_per_frame": 0},
        {"frame_interval": 0},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        ViewerConfig(**overrides)
