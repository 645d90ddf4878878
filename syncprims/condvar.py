"""A condition variable for the mutexes in :mod:`syncprims.mutex`."""

from __future__ import annotations

from typing import TypeVar

from syncprims.atomics import AtomicInt
from syncprims.mutex import MutexGuard

T = TypeVar("T")


class CondVar:
    """Lets threads sleep until notified, releasing a mutex while they sleep.

    Notifications are skipped cheaply when no thread is waiting. As with
    any condition variable, waiters should re-check their condition in a loop.
    """

    def __init__(self) -> None:
        self._counter = AtomicInt(0, bits=32)
        self._num_waiters = AtomicInt(0, bits=64)

    def wait(self, guard: MutexGuard[T]) -> MutexGuard[T]:
        """Release ``guard``, sleep until notified, and return a new guard."""
        self._num_waiters.fetch_add(1)
        counter = self._counter.load()
        mutex = guard.mutex
        guard.release()
        self._counter.wait(counter)
        self._num_waiters.fetch_sub(1)
        return mutex.lock()

    def notify_one(self) -> None:
        """Wake one waiting thread, if any."""
        if self._num_waiters.load() > 0:
            self._counter.fetch_add(1)
            self._counter.wake_one()

    def notify_all(self) -> None:
        """Wake every waiting thread."""
        if self._num_waiters.load() > 0:
            self._counter.fetch_add(1)
            self._counter.wake_all()