"""Viewer configuration and environment loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "SERIALVIEW_"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _env_int(environ: Mapping[str, str], name: str, fallback: int) -> int:
    value = _env(environ, name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_float(environ: Mapping[str, str], name: str, fallback: float) -> float:
    value = _env(environ, name)
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


def _env_flag(environ: Mapping[str, str], name: str, fallback: bool) -> bool:
    value = _env(environ, name)
    if value is None:
        return fallback
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class ViewerConfig:
    """Knobs exposed to the host application."""

    port: Optional[str] = None
    baudrate: int = 115200
    encoding: str = "utf-8"
    replace_control_chars_with_visible_symbols: bool = False
    max_scrollback_chars: int = 20000
    chars_per_frame: Optional[int] = None
    frame_interval: float = 0.05
    replay_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.baudrate <= 0:
            raise ValueError("baudrate must be positive")
        if self.max_scrollback_chars < 0:
            raise ValueError("max_scrollback_chars cannot be negative")
        if self.chars_per_frame is not None and self.chars_per_frame <= 0:
            raise ValueError("chars_per_frame must be positive")
        if self.frame_interval <= 0:
            raise ValueError("frame_interval must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        chars_per_frame = _env_int(env, "CHARS_PER_FRAME", 0)
        return cls(
            port=_env(env, "PORT") or None,
            baudrate=_env_int(env, "BAUD", defaults.baudrate),
            encoding=_env(env, "ENCODING") or defaults.encoding,
            replace_control_chars_with_visible_symbols=_env_flag(
                env,
                "VISIBLE_SYMBOLS",
                defaults.replace_control_chars_with_visible_symbols,
            ),
            max_scrollback_chars=_env_int(
                env, "MAX_SCROLLBACK", defaults.max_scrollback_chars
            ),
            chars_per_frame=chars_per_frame if chars_per_frame > 0 else None,
            frame_interval=_env_float(env, "FRAME_INTERVAL", defaults.frame_interval),
        )


__all__ = ["ViewerConfig", "ENV_PREFIX"]
