"""Fixed-width atomic integers with futex-style wait and wake."""

from __future__ import annotations

import threading
from typing import Callable, Optional, Tuple


class AtomicInt:
    """An unsigned integer of a fixed bit width with atomic operations.

    Arithmetic wraps around modulo ``2 ** bits``. Every instance can also be
    used as a wait/wake address: :meth:`wait` blocks while the value equals
    an expected value, and :meth:`wake_one` / :meth:`wake_all` release waiters.
    """

    __slots__ = ("_bits", "_mask", "_value", "_cond")

    def __init__(self, value: int = 0, bits: int = 64) -> None:
        if bits <= 0:
            raise ValueError(f"bit width must be positive, got {bits}")
        self._bits = bits
        self._mask = (1 << bits) - 1
        self._value = self._check(value)
        self._cond = threading.Condition(threading.Lock())

    def _check(self, value: int) -> int:
        if not 0 <= value <= self._mask:
            raise ValueError(f"{value} does not fit in an unsigned {self._bits}-bit integer")
        return value

    @property
    def bits(self) -> int:
        """The bit width of the integer."""
        return self._bits

    @property
    def max(self) -> int:
        """The largest value the integer can hold."""
        return self._mask

    def load(self) -> int:
        """Return the current value."""
        with self._cond:
            return self._value

    def store(self, value: int) -> None:
        """Replace the current value."""
        value = self._check(value)
        with self._cond:
            self._value = value

    def swap(self, value: int) -> int:
        """Store ``value`` and return the previous value."""
        value = self._check(value)
        with self._cond:
            previous, self._value = self._value, value
            return previous

    def compare_exchange(self, current: int, new: int) -> Tuple[bool, int]:
        """Store ``new`` if the value equals ``current``.

        Returns ``(True, previous)`` on success and ``(False, actual)`` otherwise.
        """
        new = self._check(new)
        with self._cond:
            actual = self._value
            if actual != current:
                return False, actual
            self._value = new
            return True, actual

    def fetch_add(self, value: int) -> int:
        """Add ``value`` with wrap-around and return the previous value."""
        with self._cond:
            previous = self._value
            self._value = (previous + value) & self._mask
            return previous

    def fetch_sub(self, value: int) -> int:
        """Subtract ``value`` with wrap-around and return the previous value."""
        with self._cond:
            previous = self._value
            self._value = (previous - value) & self._mask
            return previous

    def fetch_update(self, func: Callable[[int], Optional[int]]) -> Optional[int]:
        """Replace the value with ``func(value)`` unless it returns ``None``.

        Returns the previous value, or ``None`` when ``func`` declined the update.
        """
        with self._cond:
            previous = self._value
            new = func(previous)
            if new is None:
                return None
            self._value = self._check(new)
            return previous

    def wait(self, expected: int, timeout: Optional[float] = None) -> bool:
        """Block while the value equals ``expected``.

        Returns at once if the value differs. Otherwise sleeps until woken or
        until ``timeout`` seconds pass; returns ``False`` only on timeout.
        Like a futex, a return does not promise that the value has changed.
        """
        with self._cond:
            if self._value != expected:
                return True
            return self._cond.wait(timeout)

    def wake_one(self) -> None:
        """Wake at most one thread blocked in :meth:`wait`."""
        with self._cond:
            self._cond.notify(1)

    def wake_all(self) -> None:
        """Wake every thread blocked in :meth:`wait`."""
        with self._cond:
            self._cond.notify_all()

    def __repr__(self) -> str:
        return f"AtomicInt({self.load()}, bits={self._bits})"