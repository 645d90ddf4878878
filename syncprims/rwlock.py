"""A reader-writer lock built on an atomic state word."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from syncprims.atomics import AtomicInt

T = TypeVar("T")

_STATE_BITS = 32
WRITE_LOCKED = (1 << _STATE_BITS) - 1


class RwLock(Generic[T]):
    """Many readers or one writer at a time.

    The state holds the number of readers, or :data:`WRITE_LOCKED` while a
    writer holds the lock.
    """

    def __init__(self, value: T) -> None:
        self._state = AtomicInt(0, bits=_STATE_BITS)
        self._value = value

    def read(self) -> "ReadGuard[T]":
        """Block until no writer holds the lock, then take a shared guard."""
        readers = self._state.load()
        while True:
            if readers < WRITE_LOCKED:
                if readers >= WRITE_LOCKED - 1:
                    raise OverflowError("too many readers")
                ok, actual = self._state.compare_exchange(readers, readers + 1)
                if ok:
                    return ReadGuard(self)
                readers = actual
            if readers == WRITE_LOCKED:
                self._state.wait(WRITE_LOCKED)
                readers = self._state.load()

    def write(self) -> "WriteGuard[T]":
        """Block until the lock is free, then take an exclusive guard."""
        while True:
            ok, state = self._state.compare_exchange(0, WRITE_LOCKED)
            if ok:
                return WriteGuard(self)
            self._state.wait(state)


class _Guard(Generic[T]):
    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    def _ensure_held(self) -> None:
        if not self._held:
            raise RuntimeError("guard already released")

    def _mark_released(self) -> None:
        self._ensure_held()
        self._held = False

    def __enter__(self) -> Any:
        return self


class ReadGuard(_Guard[T]):
    """Shared, read-only access to the value."""

    @property
    def value(self) -> T:
        """The guarded value."""
        self._ensure_held()
        return self._lock._value

    def release(self) -> None:
        """Give up this shared hold; the last reader wakes a waiting writer."""
        self._mark_released()
        state = self._lock._state
        if state.fetch_sub(1) == 1:
            state.wake_one()

    def __exit__(self, *exc: Any) -> None:
        if self._held:
            self.release()


class WriteGuard(_Guard[T]):
    """Exclusive access to the value."""

    @property
    def value(self) -> T:
        """The guarded value."""
        self._ensure_held()
        return self._lock._value

    @value.setter
    def value(self, new: T) -> None:
        self._ensure_held()
        self._lock._value = new

    def release(self) -> None:
        """Give up the exclusive hold and wake every waiter."""
        self._mark_released()
        state = self._lock._state
        state.store(0)
        state.wake_all()

    def __exit__(self, *exc: Any) -> None:
        if self._held:
            self.release()