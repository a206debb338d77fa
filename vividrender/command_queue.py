"""A blocking, thread-safe FIFO queue that can be stopped."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, TypeVar

T = TypeVar("T")


class QueueStopped(Exception):
    """Raised by pop() once the queue is stopped and empty."""


class CommandQueue(Generic[T]):
    """FIFO queue whose consumers block until an item arrives or it stops."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()
        self._stopping = False

    def push(self, value: T) -> None:
        """Append a value and wake one waiting consumer."""
        with self._cond:
            self._items.append(value)
            self._cond.notify()

    def pop(self) -> T:
        """Wait for and remove the oldest value.

        Items pushed before stop() are still handed out; once the queue is
        stopped and empty, QueueStopped is raised.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._stopping)
            if not self._items:
                raise QueueStopped("command queue has been stopped")
            return self._items.popleft()

    def stop(self) -> None:
        """Stop the queue and wake every waiting consumer."""
        with self._cond:
            self._stopping = True
            self._cond.notify_all()