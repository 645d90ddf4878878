import threading

import pytest

from syncprims.mutex import MMutex, MMutex2


def _increment(m, times):
    for _ in range(times):
        g = m.lock()
        g.value += 1
        g.release()


def _count_in_threads(m, times, count=2):
    threads = [threading.Thread(target=_increment, args=(m, times)) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_bench_case_two_threads_reach_million():
    m = MMutex2(0)
    _count_in_threads(m, 500_000)
    with m.lock() as g:
        assert g.value == 1_000_000
        g.value = 0
    with m.lock() as g:
        assert g.value == 0


def test_two_threads_counting():
    for m in (MMutex(0), MMutex2(0)):
        _count_in_threads(m, 100_000)
        with m.lock() as g:
            assert g.value == 200_000


def test_guard_reads_and_writes_value():
    for m in (MMutex([]), MMutex2([])):
        with m.lock() as g:
            g.value.append("a")
            assert g.mutex is m
        with m.lock() as g:
            assert g.value == ["a"]
            g.value = ["b"]
        with m.lock() as g:
            assert g.value == ["b"]


def test_released_guard_rejects_use():
    for m in (MMutex(1), MMutex2(1)):
        g = m.lock()
        assert g.value == 1
        g.release()
        with pytest.raises(RuntimeError):
            g.release()
        with pytest.raises(RuntimeError):
            g.value
        with m.lock() as again:
            assert again.value == 1


def test_lock_excludes_other_threads():
    for m in (MMutex(0), MMutex2(0)):
        acquired = threading.Event()

        def other():
            with m.lock() as g:
                g.value = 2
                acquired.set()

        held = m.lock()
        t = threading.Thread(target=other)
        t.start()
        assert not acquired.wait(0.2)
        assert held.value == 0
        held.release()
        assert acquired.wait(5)
        t.join(5)
        with m.lock() as g:
            assert g.value == 2