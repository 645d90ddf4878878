"""Thread synchronisation primitives: atomic integers with wait and wake, locks, channels and lazy cells."""

__version__ = "0.1.0"

__all__ = [
    "arc",
    "atomics",
    "channel",
    "condvar",
    "ids",
    "lazy",
    "mutex",
    "oneshot",
    "rwlock",
    "spinlock",
]