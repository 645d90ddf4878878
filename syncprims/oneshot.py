"""Channels that carry exactly one message."""

from __future__ import annotations

import threading
from typing import Any, Generic, Optional, Tuple, TypeVar

from syncprims.atomics import AtomicInt

T = TypeVar("T")

_EMPTY = 0
_WRITING = 1
_READY = 2
_READING = 3


class ChannelError(RuntimeError):
    """Raised when a one-shot channel is used out of turn."""


class OneShot(Generic[T]):
    """A slot that one sender fills and one receiver empties.

    :meth:`send` fails if a value was already sent; :meth:`recv` waits until
    the value arrives and may be called only once.
    """

    def __init__(self) -> None:
        self._claimed = AtomicInt(0, bits=1)
        self._ready = AtomicInt(0, bits=1)
        self._taken = AtomicInt(0, bits=1)
        self._item: Any = None

    def send(self, value: T) -> None:
        """Store ``value``; raises :class:`ChannelError` on a second send."""
        if self._claimed.swap(1):
            raise ChannelError("It was already set")
        self._item = value
        self._ready.store(1)
        self._ready.wake_all()

    def recv(self) -> T:
        """Wait for the value and return it."""
        if self._taken.swap(1):
            raise ChannelError("the message was already received")
        while not self._ready.load():
            self._ready.wait(0)
        item, self._item = self._item, None
        return item


class StateChannel(Generic[T]):
    """A one-message channel driven by an explicit state machine.

    The state moves from empty to writing to ready to reading; every other
    transition is refused with :class:`ChannelError`.
    """

    def __init__(self) -> None:
        self._state = AtomicInt(_EMPTY, bits=8)
        self._value: Any = None

    def send(self, value: T) -> None:
        """Store the message; only the first send succeeds."""
        ok, _ = self._state.compare_exchange(_EMPTY, _WRITING)
        if not ok:
            raise ChannelError("can't send more than 1 message!")
        self._value = value
        self._state.store(_READY)

    def is_ready(self) -> bool:
        """Whether a message is waiting to be received."""
        return self._state.load() == _READY

    def recv(self) -> T:
        """Take the message; raises :class:`ChannelError` if none is ready."""
        ok, _ = self._state.compare_exchange(_READY, _READING)
        if not ok:
            raise ChannelError("no messages available!")
        value, self._value = self._value, None
        return value


class _Inner:
    __slots__ = ("state", "lock", "value")

    def __init__(self) -> None:
        self.state = AtomicInt(0, bits=32)
        self.lock = threading.Lock()
        self.value: Any = None


class Sender(Generic[T]):
    """The sending half of a one-shot channel; usable once."""

    def __init__(self, inner: _Inner) -> None:
        self._inner = inner
        self._used = False

    def send(self, value: T) -> None:
        """Deliver ``value`` and wake the receiver."""
        if self._used:
            raise ChannelError("sender already used")
        self._used = True
        with self._inner.lock:
            self._inner.value = value
        self._inner.state.store(1)
        self._inner.state.wake_all()


class Receiver(Generic[T]):
    """The receiving half of a one-shot channel; yields its message once."""

    def __init__(self, inner: _Inner) -> None:
        self._inner = inner
        self._used = False

    def _take(self) -> T:
        self._used = True
        with self._inner.lock:
            value, self._inner.value = self._inner.value, None
        return value

    def is_ready(self) -> bool:
        """Whether the message has arrived and not yet been taken."""
        return not self._used and self._inner.state.load() == 1

    def try_receive(self) -> Optional[T]:
        """Return the message if it has arrived, else ``None`` without waiting."""
        if self._used:
            raise ChannelError("receiver already used")
        if self._inner.state.load() != 1:
            return None
        return self._take()

    def receive(self) -> T:
        """Wait for the message and return it."""
        if self._used:
            raise ChannelError("receiver already used")
        while self._inner.state.load() == 0:
            self._inner.state.wait(0)
        return self._take()


def channel() -> Tuple[Sender[Any], Receiver[Any]]:
    """Create a connected one-shot sender and receiver."""
    inner = _Inner()
    return Sender(inner), Receiver(inner)