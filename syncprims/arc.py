"""An atomically reference-counted shared pointer."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from syncprims.atomics import AtomicInt

T = TypeVar("T")

_COUNT_BITS = 64
_COUNT_LIMIT = ((1 << _COUNT_BITS) - 1) // 2


class _ArcData(Generic[T]):
    __slots__ = ("ref_count", "data", "on_drop")

    def __init__(self, value: T, on_drop: Optional[Callable[[T], Any]]) -> None:
        self.ref_count = AtomicInt(1, bits=_COUNT_BITS)
        self.data = value
        self.on_drop = on_drop


class Arc(Generic[T]):
    """A handle to a value shared between threads.

    Every :meth:`clone` adds a handle and every :meth:`drop` removes one.
    When the last handle is dropped the value is released and ``on_drop``,
    if given, is called with it. A handle that goes out of scope without an
    explicit drop is dropped when it is collected.
    """

    def __init__(self, value: T, on_drop: Optional[Callable[[T], Any]] = None) -> None:
        self._data: Optional[_ArcData[T]] = _ArcData(value, on_drop)

    def _live(self) -> _ArcData[T]:
        data = self._data
        if data is None:
            raise RuntimeError("Arc handle already dropped")
        return data

    @property
    def value(self) -> T:
        """The shared value."""
        return self._live().data

    def clone(self) -> "Arc[T]":
        """Return a new handle to the same value."""
        data = self._live()
        if data.ref_count.fetch_add(1) > _COUNT_LIMIT:
            data.ref_count.fetch_sub(1)
            raise OverflowError("reference count overflow")
        handle: Arc[T] = Arc.__new__(type(self))
        handle._data = data
        return handle

    def drop(self) -> None:
        """Give up this handle, releasing the value if it was the last one."""
        data = self._live()
        self._data = None
        if data.ref_count.fetch_sub(1) == 1:
            value, data.data = data.data, None
            if data.on_drop is not None:
                data.on_drop(value)

    def get_mut(self) -> Optional[T]:
        """Return the value if this is the only handle, else ``None``."""
        data = self._live()
        if data.ref_count.load() == 1:
            return data.data
        return None

    def strong_count(self) -> int:
        """The number of live handles to the value."""
        return self._live().ref_count.load()

    @property
    def dropped(self) -> bool:
        """Whether this handle has been dropped."""
        return self._data is None

    def __enter__(self) -> "Arc[T]":
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._data is not None:
            self.drop()

    def __del__(self) -> None:
        if getattr(self, "_data", None) is not None:
            try:
                self.drop()
            except Exception:
                pass

    def __repr__(self) -> str:
        data = self._data
        if data is None:
            return "Arc(<dropped>)"
        return f"Arc({data.data!r})"