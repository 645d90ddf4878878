"""A spin lock that guards a value."""

from __future__ import annotations

import time
from typing import Any, Generic, TypeVar

from syncprims.atomics import AtomicInt

T = TypeVar("T")


class SpinLock(Generic[T]):
    """A mutual-exclusion lock that busy-waits until it is free."""

    def __init__(self, value: T) -> None:
        self._locked = AtomicInt(0, bits=1)
        self._value = value

    def lock(self) -> SpinLockGuard[T]:
        """Spin until the lock is taken and return a guard for the value."""
        while self._locked.swap(1):
            time.sleep(0)
        return SpinLockGuard(self)

    def unlock(self) -> None:
        """Release the lock."""
        self._locked.store(0)


class SpinLockGuard(Generic[T]):
    """Access to a locked value; releases the lock when done.

    Use it as a context manager or call :meth:`release`.
    """

    def __init__(self, lock: Any) -> None:
        self._lock = lock
        self._held = True

    def _owner(self) -> Any:
        if not self._held:
            raise RuntimeError("guard already released")
        return self._lock

    @property
    def value(self) -> T:
        """The guarded value."""
        return self._owner()._value

    @value.setter
    def value(self, new: T) -> None:
        self._owner()._value = new

    def _unlock(self) -> None:
        self._lock.unlock()

    def release(self) -> None:
        """Release the lock this guard holds."""
        self._owner()
        self._held = False
        self._unlock()

    def __enter__(self) -> SpinLockGuard[T]:
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._held:
            self.release()