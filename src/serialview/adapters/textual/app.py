"""Executable Textual app that hosts the serial viewer."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the viewer is run
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use serialview.adapters.textual.app"
    ) from exc

from serialview.config import ENV_PREFIX, ViewerConfig
from serialview.link import ReplayReader, SerialReader, list_serial_ports
from serialview.pipeline import InboundQueue
from serialview.runtime import telemetry
from serialview.text import StreamedText, StreamedTextError

from .controller import ViewerController, ViewerHooks
from .render import render_streamed_text


class SerialViewApp(App[None]):
    """Scrolling, colour-aware view of a serial link."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#terminal-scroll {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+l", "clear_view", "Clear"),
        ("ctrl+t", "toggle_symbols", "Control symbols"),
    ]

    def __init__(self, config: ViewerConfig) -> None:
        super().__init__()
        self.config = config
        self.inbound = InboundQueue()
        self.controller: ViewerController | None = None
        self._producer: SerialReader | ReplayReader | None = None
        self._view_widget: Static | None = None
        self._scroll: VerticalScroll | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("serialview.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._view_widget = Static("", id="terminal-view")
        with VerticalScroll(id="terminal-scroll") as scroll:
            self._scroll = scroll
            yield self._view_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = ViewerHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self._logger.debug,
        )
        self.controller = ViewerController.from_config(
            self.config, hooks, inbound=self.inbound
        )
        self._producer = self._build_producer()
        if self._producer is not None:
            self._producer.start()
        else:
            self._update_status("no port selected (use --port or --replay)")
        self.set_interval(self.config.frame_interval, self._process_frame)

    def on_unmount(self) -> None:
        if self._producer is not None:
            self._producer.stop()
            self._producer = None

    def _build_producer(self) -> SerialReader | ReplayReader | None:
        if self.config.replay_path:
            return ReplayReader(
                self.inbound, self.config.replay_path, on_error=self._on_link_error
            )
        if self.config.port:
            return SerialReader(
                self.inbound,
                self.config.port,
                self.config.baudrate,
                on_error=self._on_link_error,
            )
        return None

    def _process_frame(self) -> None:
        if not self.controller:
            return
        try:
            result = self.controller.process_frame()
        except StreamedTextError as exc:
            self._logger.error(f"pipeline failure: {exc}")
            self.exit(return_code=1, message=f"serialview: pipeline failure: {exc}")
            return
        if result.chunks:
            self._update_status(self.controller.status_text())

    def _on_link_error(self, exc: BaseException) -> None:
        self.call_from_thread(self._update_status, f"link error: {exc}")

    def _update_view(self, content: StreamedText) -> None:
        if self._view_widget:
            self._view_widget.update(render_streamed_text(content))
        if self._scroll:
            self._scroll.scroll_end(animate=False)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def action_clear_view(self) -> None:
        if self.controller:
            self.controller.clear()

    def action_toggle_symbols(self) -> None:
        if self.controller:
            self.controller.toggle_visible_symbols()


def _parse_args(
    argv: Optional[Sequence[str]] = None, defaults: Optional[ViewerConfig] = None
) -> argparse.Namespace:
    base = defaults or ViewerConfig.from_env()
    parser = argparse.ArgumentParser(
        description="View a serial link with ANSI colours.",
        epilog=f"Defaults can also be set with {ENV_PREFIX}* environment variables.",
    )
    parser.add_argument(
        "--port", default=base.port, help="Serial port, e.g. COM5 or /dev/ttyACM0"
    )
    parser.add_argument(
        "--baud",
        type=int,
        default=base.baudrate,
        help="Baud rate (default: %(default)s)",
    )
    parser.add_argument(
        "--encoding", default=base.encoding, help="Text encoding of the link"
    )
    parser.add_argument(
        "--visible-symbols",
        action="store_true",
        default=base.replace_control_chars_with_visible_symbols,
        help="Show CR/LF as visible glyphs",
    )
    parser.add_argument(
        "--max-scrollback",
        type=int,
        default=base.max_scrollback_chars,
        help="Characters kept on screen, 0 for unbounded (default: %(default)s)",
    )
    parser.add_argument(
        "--chars-per-frame",
        type=int,
        default=base.chars_per_frame,
        help="Limit on characters drawn per frame",
    )
    parser.add_argument(
        "--frame-interval",
        type=float,
        default=base.frame_interval,
        help="Seconds between frames (default: %(default)s)",
    )
    parser.add_argument(
        "--replay", default=None, help="Replay a captured file instead of a port"
    )
    parser.add_argument(
        "--list-ports", action="store_true", help="List serial ports and exit"
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> ViewerConfig:
    return ViewerConfig(
        port=args.port,
        baudrate=args.baud,
        encoding=args.encoding,
        replace_control_chars_with_visible_symbols=args.visible_symbols,
        max_scrollback_chars=args.max_scrollback,
        chars_per_frame=args.chars_per_frame,
        frame_interval=args.frame_interval,
        replay_path=args.replay,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.list_ports:
        for device in list_serial_ports():
            print(device)
        return
    app = SerialViewApp(config_from_args(args))
    app.run()
    if app.return_code:
        raise SystemExit(app.return_code)


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
