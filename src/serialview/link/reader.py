"""Producer threads that push received bytes into an ``InboundQueue``."""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Any, Callable, List, Optional

import serial
from serial.tools import list_ports

from serialview.pipeline import InboundQueue
from serialview.runtime import telemetry

READ_SIZE = 1024


def _noop_error(_exc: BaseException) -> None:  # pragma: no cover - default hook
    return None


def list_serial_ports() -> List[str]:
    """Device names of the serial ports visible to pyserial."""

    return sorted(info.device for info in list_ports.comports())


class _ProducerThread:
    """Shared start/stop plumbing for the readers below."""

    thread_name = "serialview-producer"

    def __init__(
        self,
        queue: InboundQueue,
        *,
        on_error: Callable[[BaseException], None] = _noop_error,
    ) -> None:
        self.queue = queue
        self.on_error = on_error
        self.logger = telemetry.get_logger("serialview.link")
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name=self.thread_name, daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the producer to finish on its own."""

        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        try:
            self._produce()
        except Exception as exc:
            self.logger.error(f"{self.thread_name} stopped: {exc}")
            self.on_error(exc)

    def _produce(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError


class SerialReader(_ProducerThread):
    """Reads a serial port until stopped."""

    thread_name = "serialview-serial"

    def __init__(
        self,
        queue: InboundQueue,
        port: str,
        baudrate: int = 115200,
        *,
        timeout: float = 0.2,
        on_error: Callable[[BaseException], None] = _noop_error,
        serial_factory: Callable[..., Any] = serial.Serial,
    ) -> None:
        super().__init__(queue, on_error=on_error)
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial_factory = serial_factory

    def _produce(self) -> None:
        link = self._serial_factory(self.port, self.baudrate, timeout=self.timeout)
        telemetry.record_event(
            "serial.open",
            data={"port": self.port, "baudrate": self.baudrate},
            logger_name="serialview.link",
        )
        try:
            while not self._stop.is_set():
                data = link.read(READ_SIZE)
                if data:
                    self.queue.put(bytes(data))
        finally:
            link.close()
            telemetry.record_event(
                "serial.close", data={"port": self.port}, logger_name="serialview.link"
            )


class ReplayReader(_ProducerThread):
    """Feeds a captured log file as if it were arriving over a link."""

    thread_name = "serialview-replay"

    def __init__(
        self,
        queue: InboundQueue,
        path: str | Path,
        *,
        chunk_size: int = 64,
        delay: float = 0.01,
        on_error: Callable[[BaseException], None] = _noop_error,
    ) -> None:
        super().__init__(queue, on_error=on_error)
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.delay = delay

    def _produce(self) -> None:
        with self.path.open("rb") as handle:
            while not self._stop.is_set():
                data = handle.read(self.chunk_size)
                if not data:
                    break
                self.queue.put(data)
                if self.delay:
                    time.sleep(self.delay)
        telemetry.record_event(
            "replay.done", data={"path": str(self.path)}, logger_name="serialview.link"
        )


__all__ = ["SerialReader", "ReplayReader", "list_serial_ports"]
