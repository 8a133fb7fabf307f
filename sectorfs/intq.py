"""A bounded byte queue shared between producer and consumer threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Optional

INTQ_BUFSIZE = 64


class InterruptQueue:
    """Circular byte queue holding at most SIZE - 1 bytes.

    put() waits while the queue is full and get() while it is empty;
    with a timeout they raise TimeoutError instead of waiting longer.
    """

    def __init__(self, size: int = INTQ_BUFSIZE) -> None:
        if size < 2:
            raise ValueError("queue size must be at least 2")
        self.capacity = size - 1
        self._buf: deque[int] = deque()
        self._cond = threading.Condition()

    def __len__(self) -> int:
        with self._cond:
            return len(self._buf)

    def empty(self) -> bool:
        """Return True if no bytes are queued."""
        with self._cond:
            return not self._buf

    def full(self) -> bool:
        """Return True if no more bytes fit."""
        with self._cond:
            return len(self._buf) >= self.capacity

    def put(self, byte: int, timeout: Optional[float] = None) -> None:
        """Add BYTE at the end, waiting while the queue is full."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte: {byte!r}")
        with self._cond:
            if not self._cond.wait_for(
                lambda: len(self._buf) < self.capacity, timeout
            ):
                raise TimeoutError("queue stayed full")
            self._buf.append(byte)
            self._cond.notify_all()

    def get(self, timeout: Optional[float] = None) -> int:
        """Remove and return the oldest byte, waiting while empty."""
        with self._cond:
            if not self._cond.wait_for(lambda: bool(self._buf), timeout):
                raise TimeoutError("queue stayed empty")
            byte = self._buf.popleft()
            self._cond.notify_all()
            return byte