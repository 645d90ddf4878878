import threading
import time

import pytest

from syncprims.lazy import LazyValue, Once, OnceCell


def _run_threads(target, count):
    threads = [threading.Thread(target=target) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def _slow(result=None, delay=0.05):
    """Return an initialiser that sleeps, records its call and returns ``result``."""
    calls = []

    def init():
        time.sleep(delay)
        calls.append(1)
        return result() if callable(result) else result

    return init, calls


def test_lazy_value_computes_once_sequentially():
    init, calls = _slow(123, delay=0)
    lazy = LazyValue(init)
    assert [lazy.get() for _ in range(4)] == [123] * 4
    assert calls == [1]


def test_lazy_value_all_threads_see_same_value():
    lazy = LazyValue(object)
    seen = []
    _run_threads(lambda: seen.append(lazy.get()), 100)
    assert len(seen) == 100
    assert all(v is seen[0] for v in seen)
    assert lazy.get() is seen[0]


def test_once_runs_function_once_across_threads():
    once = Once()
    init, calls = _slow()
    assert once.is_completed() is False
    _run_threads(lambda: once.call_once(init), 10)
    assert calls == [1]
    assert once.is_completed() is True


def test_once_callers_wait_for_completion():
    once = Once()
    cache = {}
    observed = []

    def init():
        time.sleep(0.05)
        cache["value"] = 123

    def worker():
        once.call_once(init)
        observed.append(cache.get("value"))

    _run_threads(worker, 2)
    assert observed == [123, 123]
    assert once.is_completed() is True


def test_once_poisoned_after_failure():
    once = Once()

    def fail():
        raise ValueError("boom")

    with pytest.raises(ValueError):
        once.call_once(fail)
    with pytest.raises(RuntimeError):
        once.call_once(lambda: None)
    assert once.is_completed() is False


def test_once_cell_get_and_init():
    cell = OnceCell()
    assert cell.get() is None
    assert cell.get_or_init(lambda: 123) == 123
    assert cell.get() == 123


def test_once_cell_second_init_not_called():
    cell = OnceCell()
    cell.get_or_init(lambda: "first")
    other, calls = _slow("second", delay=0)
    assert cell.get_or_init(other) == "first"
    assert calls == []


def test_once_cell_failed_init_leaves_cell_empty():
    cell = OnceCell()

    def fail():
        raise KeyError("nope")

    with pytest.raises(KeyError):
        cell.get_or_init(fail)
    assert cell.get() is None
    assert cell.get_or_init(lambda: "ok") == "ok"


def test_once_cell_concurrent_init_runs_once():
    cell = OnceCell()
    init, calls = _slow(object, delay=0.02)
    results = []
    _run_threads(lambda: results.append(cell.get_or_init(init)), 10)
    assert calls == [1]
    assert all(r is results[0] for r in results)
    assert cell.get() is results[0]