"""Thread-safe allocation of sequential identifiers."""

from __future__ import annotations

from syncprims.atomics import AtomicInt

_U64_MAX = (1 << 64) - 1


class IdExhaustedError(RuntimeError):
    """Raised when an allocator has handed out every identifier it may."""


class IdAllocator:
    """Hands out identifiers 0, 1, 2, ... below ``limit``, safely across threads."""

    def __init__(self, limit: int = _U64_MAX) -> None:
        if not 0 <= limit <= _U64_MAX:
            raise ValueError(f"limit must be between 0 and {_U64_MAX}, got {limit}")
        self._limit = limit
        self._next = AtomicInt(0, bits=64)

    @property
    def limit(self) -> int:
        """The exclusive upper bound on identifiers."""
        return self._limit

    def allocate(self) -> int:
        """Take the next identifier by increment, undoing it when over the limit."""
        ident = self._next.fetch_add(1)
        if ident >= self._limit:
            self._next.fetch_sub(1)
            raise IdExhaustedError("too many IDs!")
        return ident

    def allocate_optimistic(self) -> int:
        """Take the next identifier with a compare-and-exchange loop."""
        ident = self._next.load()
        while True:
            if ident >= self._limit:
                raise IdExhaustedError("too many IDs!")
            ok, actual = self._next.compare_exchange(ident, ident + 1)
            if ok:
                return ident
            ident = actual