"""Single-producer/single-consumer handoff between the I/O and render threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, List


class InboundQueue:
    """Lock-protected FIFO of byte chunks.

    The reader thread calls ``put``; the render thread calls ``drain`` once
    per frame and gets every chunk queued so far, oldest first.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: Deque[bytes] = deque()
        self._total_bytes = 0

    def put(self, chunk: bytes) -> None:
        if not chunk:
            return
        with self._lock:
            self._chunks.append(chunk)
            self._total_bytes += len(chunk)

    def drain(self) -> List[bytes]:
        with self._lock:
            chunks = list(self._chunks)
            self._chunks.clear()
        return chunks

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)

    @property
    def total_bytes(self) -> int:
        """Bytes accepted since creation."""

        return self._total_bytes


__all__ = ["InboundQueue"]
