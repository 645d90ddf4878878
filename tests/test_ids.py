import threading

import pytest

from syncprims.ids import IdAllocator, IdExhaustedError

METHODS = ["allocate", "allocate_optimistic"]


@pytest.mark.parametrize("method", METHODS)
def test_ids_are_sequential(method):
    take = getattr(IdAllocator(), method)
    assert [take() for _ in range(3)] == [0, 1, 2]


@pytest.mark.parametrize("method", METHODS)
def test_exhaustion_raises_and_stays_exhausted(method):
    take = getattr(IdAllocator(5), method)
    assert [take() for _ in range(5)] == [0, 1, 2, 3, 4]
    with pytest.raises(IdExhaustedError, match="too many IDs!"):
        take()
    with pytest.raises(IdExhaustedError):
        take()


def test_methods_share_one_counter():
    alloc = IdAllocator(2)
    assert [alloc.allocate(), alloc.allocate_optimistic()] == [0, 1]
    for take in (alloc.allocate, alloc.allocate_optimistic):
        with pytest.raises(IdExhaustedError):
            take()


def test_failed_allocate_does_not_advance_counter():
    alloc = IdAllocator(1)
    assert alloc.allocate() == 0
    attempts = [alloc.allocate] * 10 + [alloc.allocate_optimistic]
    for take in attempts:
        with pytest.raises(IdExhaustedError):
            take()


@pytest.mark.parametrize("method", METHODS)
def test_concurrent_ids_are_unique(method):
    alloc = IdAllocator()
    take = getattr(alloc, method)
    results = []
    workers = [
        threading.Thread(target=lambda: results.extend(take() for _ in range(3)))
        for _ in range(8)
    ]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    assert sorted(results) == list(range(24))
    assert alloc.allocate() == 24


def test_default_limit_is_u64_max():
    assert IdAllocator().limit == (1 << 64) - 1


def test_zero_limit_allows_nothing():
    with pytest.raises(IdExhaustedError):
        IdAllocator(0).allocate()


@pytest.mark.parametrize("limit", [-1, 1 << 64])
def test_invalid_limit_rejected(limit):
    with pytest.raises(ValueError):
        IdAllocator(limit)