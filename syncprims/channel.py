"""An unbounded multi-producer, multi-consumer channel."""

import threading
from collections import deque
from typing import Any


class Channel:
    """A FIFO queue whose :meth:`recv` blocks until an item is available."""

    def __init__(self) -> None:
        self._queue: deque = deque()
        self._item_ready = threading.Condition(threading.Lock())

    def send(self, value: Any) -> None:
        """Append ``value`` and wake one waiting receiver."""
        with self._item_ready:
            self._queue.append(value)
            self._item_ready.notify()

    def recv(self) -> Any:
        """Remove and return the oldest item, waiting for one if needed."""
        with self._item_ready:
            self._item_ready.wait_for(lambda: self._queue)
            return self._queue.popleft()

    def __len__(self) -> int:
        with self._item_ready:
            return len(self._queue)