"""One-time initialisation helpers."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class LazyValue(Generic[T]):
    """A value computed on first use.

    Initialisation is optimistic: racing threads may each call ``init``, but
    only the first result is kept and every caller receives that one.
    """

    def __init__(self, init: Callable[[], T]) -> None:
        self._init = init
        self._value: Any = _UNSET
        self._lock = threading.Lock()

    def get(self) -> T:
        """Return the value, computing it if no thread has stored one yet."""
        value = self._value
        if value is not _UNSET:
            return value
        candidate = self._init()
        with self._lock:
            if self._value is _UNSET:
                self._value = candidate
            return self._value


class Once:
    """Runs a callable exactly once; later callers wait for it to finish.

    If the callable raises, the instance is poisoned and later calls raise
    :class:`RuntimeError`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False
        self._poisoned = False

    def call_once(self, func: Callable[[], Any]) -> None:
        """Run ``func`` if no call has completed yet."""
        if self._done:
            return
        with self._lock:
            if self._done:
                return
            if self._poisoned:
                raise RuntimeError("Once instance has previously been poisoned")
            try:
                func()
            except BaseException:
                self._poisoned = True
                raise
            self._done = True

    def is_completed(self) -> bool:
        """Whether a call has finished successfully."""
        return self._done


class OnceCell(Generic[T]):
    """A cell written at most once; readers block while it is being written."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Any = _UNSET

    def get(self) -> Optional[T]:
        """Return the stored value, or ``None`` if the cell is empty."""
        value = self._value
        return None if value is _UNSET else value

    def get_or_init(self, func: Callable[[], T]) -> T:
        """Return the stored value, filling the cell with ``func()`` if empty.

        If ``func`` raises, the error propagates and the cell stays empty.
        """
        value = self._value
        if value is not _UNSET:
            return value
        with self._lock:
            if self._value is _UNSET:
                self._value = func()
            return self._value