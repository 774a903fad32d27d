"""UI-agnostic frame loop wiring the inbound queue, pipeline and scroll-back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from serialview.config import ViewerConfig
from serialview.pipeline import InboundQueue, Scrollback, StreamPipeline
from serialview.runtime import telemetry
from serialview.text import StreamedText


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class ViewerHooks:
    """Callbacks invoked by the controller to update host widgets."""

    update_view: Callable[[StreamedText], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class FrameResult:
    chunks: int
    bytes_received: int
    chars_shown: int
    chars_waiting: int


class ViewerController:
    """Runs one pipeline step per rendered frame.

    Each frame drains the inbound queue, feeds every chunk through the
    pipeline in arrival order and moves at most ``chars_per_frame``
    characters into the scroll-back. Characters not moved wait in the
    pipeline output for the next frame.
    """

    def __init__(
        self,
        pipeline: StreamPipeline,
        inbound: InboundQueue,
        scrollback: Scrollback,
        hooks: ViewerHooks,
        *,
        chars_per_frame: Optional[int] = None,
    ) -> None:
        self.pipeline = pipeline
        self.inbound = inbound
        self.scrollback = scrollback
        self.hooks = hooks
        self.chars_per_frame = chars_per_frame
        self.frames = 0

    @classmethod
    def from_config(
        cls,
        config: ViewerConfig,
        hooks: ViewerHooks,
        *,
        inbound: Optional[InboundQueue] = None,
    ) -> "ViewerController":
        pipeline = StreamPipeline(
            replace_control_chars_with_visible_symbols=(
                config.replace_control_chars_with_visible_symbols
            ),
            encoding=config.encoding,
        )
        return cls(
            pipeline,
            inbound or InboundQueue(),
            Scrollback(config.max_scrollback_chars),
            hooks,
            chars_per_frame=config.chars_per_frame,
        )

    def process_frame(self) -> FrameResult:
        chunks = self.inbound.drain()
        received = 0
        for chunk in chunks:
            received += len(chunk)
            self.pipeline.feed(chunk)

        shown = self.scrollback.absorb(self.pipeline.output, self.chars_per_frame)
        self.frames += 1
        result = FrameResult(
            chunks=len(chunks),
            bytes_received=received,
            chars_shown=shown,
            chars_waiting=len(self.pipeline.output),
        )
        if shown:
            self.hooks.update_view(self.scrollback.content)
            self._log_state("frame ->", **self._frame_fields(result))
        return result

    def toggle_visible_symbols(self) -> bool:
        enabled = not self.pipeline.replace_control_chars_with_visible_symbols
        self.pipeline.replace_control_chars_with_visible_symbols = enabled
        telemetry.record_event(
            "viewer.visible_symbols",
            data={"enabled": enabled},
            logger_name="serialview.viewer",
        )
        self.hooks.update_status(
            "visible symbols on" if enabled else "visible symbols off"
        )
        return enabled

    def clear(self) -> None:
        self.scrollback.clear()
        self.hooks.update_view(self.scrollback.content)
        self.hooks.update_status("cleared")

    def status_text(self) -> str:
        symbols = "on" if self.pipeline.replace_control_chars_with_visible_symbols else "off"
        return (
            f"rx {self.inbound.total_bytes} B | "
            f"shown {len(self.scrollback)} chars | "
            f"symbols {symbols}"
        )

    @staticmethod
    def _frame_fields(result: FrameResult) -> Dict[str, object]:
        return {
            "chunks": result.chunks,
            "bytes": result.bytes_received,
            "shown": result.chars_shown,
            "waiting": result.chars_waiting,
        }

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"frame={self.frames}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = ["ViewerController", "ViewerHooks", "FrameResult"]
