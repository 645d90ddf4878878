# syncprims

Thread synchronisation building blocks for Python. Most of them are built
on `AtomicInt`, a small fixed-width integer with atomic operations and
futex-style `wait` / `wake_one` / `wake_all`.

The package has no dependencies beyond the standard library.

## Installation

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Modules

| Module               | Contents |
|----------------------|----------|
| `syncprims.atomics`  | `AtomicInt` |
| `syncprims.ids`      | `IdAllocator`, `IdExhaustedError` |
| `syncprims.lazy`     | `LazyValue`, `Once`, `OnceCell` |
| `syncprims.spinlock` | `SpinLock`, `SpinLockGuard` |
| `syncprims.channel`  | `Channel` |
| `syncprims.oneshot`  | `OneShot`, `StateChannel`, `channel()`, `Sender`, `Receiver`, `ChannelError` |
| `syncprims.arc`      | `Arc` |
| `syncprims.mutex`    | `MMutex`, `MMutex2`, `MutexGuard` |
| `syncprims.condvar`  | `CondVar` |
| `syncprims.rwlock`   | `RwLock`, `ReadGuard`, `WriteGuard`, `WRITE_LOCKED` |

### `syncprims.atomics`

`AtomicInt(value=0, bits=64)` holds an unsigned integer of the given width.
`load`, `store`, `swap`, `compare_exchange(current, new)` (returns
`(succeeded, previous_or_actual)`), `fetch_add`, `fetch_sub` (both wrap
around modulo `2 ** bits`) and `fetch_update(func)` (no update when `func`
returns `None`). Storing a value that does not fit raises `ValueError`.

`wait(expected, timeout=None)` blocks while the value equals `expected`,
returning `False` only on timeout; `wake_one()` and `wake_all()` release
waiters. As with a futex, waking up does not promise the value changed.

### `syncprims.ids`

`IdAllocator(limit)` hands out 0, 1, 2, ... below `limit` across threads.
`allocate()` increments and undoes the increment when over the limit;
`allocate_optimistic()` uses a compare-and-exchange loop. Both raise
`IdExhaustedError` once the limit is reached.

### `syncprims.lazy`

- `LazyValue(init)`: `get()` computes the value on first use. Racing threads
  may each call `init`, but all of them receive the first stored result.
- `Once`: `call_once(func)` runs `func` once; other callers wait for it.
  If `func` raises, later calls raise `RuntimeError`. `is_completed()`.
- `OnceCell`: `get()` returns the value or `None`; `get_or_init(func)` fills
  it once. If `func` raises, the cell stays empty.

### Locks and guards

`SpinLock(value).lock()` busy-waits and returns a `SpinLockGuard`.
`MMutex` (two states) and `MMutex2` (three states, spins briefly under
contention, wakes only when someone is waiting) sleep instead of spinning
and return a `MutexGuard`, whose `mutex` property names the mutex it came
from. Guards expose the guarded object as `.value` (readable and
assignable) and release the lock at the end of a `with` block or on
`release()`; using a guard after release raises `RuntimeError`.

`CondVar` works with `MutexGuard`s from `MMutex` or `MMutex2`:
`wait(guard)` releases the guard, sleeps until notified and returns a new
guard. `notify_one()` / `notify_all()` do nothing when no thread is
waiting. Re-check the condition in a loop.

`RwLock(value)`: `read()` returns a `ReadGuard` (read-only `.value`),
`write()` returns a `WriteGuard` (assignable `.value`). The state word holds
the reader count, or `WRITE_LOCKED` while written; too many readers raise
`OverflowError`.

### Channels

- `Channel`: unbounded FIFO queue; `send`, blocking `recv`, and `len()`.
- `OneShot`: one `send` (a second raises `ChannelError`); `recv()` waits
  for the value and may be called once.
- `StateChannel`: one message through the states empty, writing, ready,
  reading. `send` twice, or `recv` with no message ready, raises
  `ChannelError`; `is_ready()` tells whether a message waits.
- `channel()` returns a `Sender` and `Receiver`, each usable once.
  `Receiver.receive()` waits; `Receiver.try_receive()` returns `None` if
  nothing has arrived; `Receiver.is_ready()` checks without taking.

### `syncprims.arc`

`Arc(value, on_drop=None)` is a reference-counted handle. `clone()` adds a
handle, `drop()` removes one; on the last drop the value is released and
`on_drop(value)` is called. `get_mut()` returns the value only when this is
the sole handle, else `None`. `strong_count()` gives the handle count.
Handles may be used as context managers and are dropped when collected.

## Examples

```python
import threading
from syncprims.mutex import MMutex2
from syncprims.condvar import CondVar

m = MMutex2(0)
cv = CondVar()

def waiter():
    guard = m.lock()
    while guard.value < 100:
        guard = cv.wait(guard)
    print("reached", guard.value)
    guard.release()

t = threading.Thread(target=waiter)
t.start()
for _ in range(101):
    with m.lock() as g:
        g.value += 1
    cv.notify_all()
t.join()
```

```python
from syncprims.spinlock import SpinLock
from syncprims.rwlock import RwLock
from syncprims.channel import Channel
from syncprims.oneshot import channel
from syncprims.ids import IdAllocator
from syncprims.lazy import OnceCell

lock = SpinLock([])
with lock.lock() as guard:
    guard.value.append(1)

rw = RwLock({"hits": 0})
with rw.write() as w:
    w.value["hits"] += 1
with rw.read() as r:
    print(r.value["hits"])

ch = Channel()
ch.send(5)
assert ch.recv() == 5 and len(ch) == 0

sender, receiver = channel()
sender.send(123)
assert receiver.receive() == 123

ids = IdAllocator(limit=1000)
assert ids.allocate() == 0

cell = OnceCell()
assert cell.get() is None
assert cell.get_or_init(lambda: 123) == 123
```

## What the package does not do

- `AtomicInt` is not lock-free: each operation takes an internal
  `threading` lock, and `wait`/`wake` use a condition variable rather than
  operating-system futexes. Memory orderings are not modelled; every
  operation is fully ordered.
- There is no command-line program and no benchmark suite.