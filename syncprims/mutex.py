"""Mutexes built on an atomic state word with wait and wake."""

from typing import Any

from syncprims.atomics import AtomicInt
from syncprims.spinlock import SpinLockGuard

_FREE = 0
_LOCKED = 1
_WAITED = 2
_SPIN_LIMIT = 100


class MutexGuard(SpinLockGuard):
    """Access to a locked value; releases the mutex when done.

    Use it as a context manager or call :meth:`release`.
    """

    @property
    def mutex(self) -> Any:
        """The mutex this guard was taken from."""
        return self._lock

    def release(self) -> None:
        """Unlock the mutex; the guard cannot be used afterwards."""
        super().release()

    def _unlock(self) -> None:
        self._lock._unlock()


class MMutex:
    """A two-state mutex: waiters sleep while it is locked."""

    def __init__(self, value: Any) -> None:
        self._state = AtomicInt(_FREE, bits=32)
        self._value = value

    def lock(self) -> MutexGuard:
        """Block until the mutex is taken and return a guard."""
        while True:
            while self._state.load() == _LOCKED:
                self._state.wait(_LOCKED)
            if self._state.swap(_LOCKED) == _FREE:
                return MutexGuard(self)

    def _unlock(self) -> None:
        self._state.store(_FREE)
        self._state.wake_one()


class MMutex2(MMutex):
    """A three-state mutex that only wakes a thread when one is waiting.

    The uncontended path is one compare-and-exchange; under contention it
    spins briefly before going to sleep.
    """

    def __init__(self, value: Any) -> None:
        super().__init__(value)

    def lock(self) -> MutexGuard:
        """Block until the mutex is taken and return a guard."""
        if not self._try_take():
            self._lock_contended()
        return MutexGuard(self)

    def _try_take(self) -> bool:
        return self._state.compare_exchange(_FREE, _LOCKED)[0]

    def _lock_contended(self) -> None:
        spin = 0
        while spin < _SPIN_LIMIT and self._state.load() == _LOCKED:
            spin += 1
        if self._try_take():
            return
        while self._state.swap(_WAITED) != _FREE:
            self._state.wait(_WAITED)

    def _unlock(self) -> None:
        if self._state.swap(_FREE) == _WAITED:
            self._state.wake_one()