"""Unit tests for the in-memory SimpleTTLCache."""

import threading

import pytest

from keyed_throttle.utils import simple_cache
from keyed_throttle.utils.simple_cache import SimpleTTLCache


class FakeTime:
    """Deterministic clock used to test expiration logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


def test_set_and_get_updates_hit_miss_counters() -> None:
    cache: SimpleTTLCache[dict] = SimpleTTLCache(ttl_seconds=10)

    assert cache.get("missing") is None

    cache.set("key", {"v": 1})

    assert cache.get("key") == {"v": 1}

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1


def test_expired_entry_is_evicted(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_time = FakeTime()
    monkeypatch.setattr(simple_cache, "time", fake_time)

    cache: SimpleTTLCache[dict] = SimpleTTLCache(ttl_seconds=5)
    cache.set("key", {"data": True})

    fake_time.advance(6)

    assert cache.get("key") is None
    assert cache.stats()["evictions"] == 1


def test_entries_never_expire_without_ttl(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_time = FakeTime()
    monkeypatch.setattr(simple_cache, "time", fake_time)

    cache: SimpleTTLCache[int] = SimpleTTLCache()
    cache.set(("a", 1), 1)

    fake_time.advance(10 ** 9)

    assert ("a", 1) in cache
    assert cache.get(("a", 1)) == 1


def test_lru_eviction_removes_least_recently_used() -> None:
    cache: SimpleTTLCache[dict] = SimpleTTLCache(ttl_seconds=100, max_entries=2)
    cache.set("a", {"v": 1})
    cache.set("b", {"v": 2})

    # Access "a" so that "b" becomes least recently used
    assert cache.get("a") == {"v": 1}

    cache.set("c", {"v": 3})

    assert cache.get("a") == {"v": 1}
    assert cache.get("c") == {"v": 3}
    assert cache.get("b") is None


def test_get_or_set_computes_once() -> None:
    cache: SimpleTTLCache[object] = SimpleTTLCache()
    calls: list[int] = []

    def factory() -> object:
        calls.append(1)
        return object()

    first = cache.get_or_set("k", factory)
    second = cache.get_or_set("k", factory)

    assert first is second
    assert len(calls) == 1


def test_delete_and_clear() -> None:
    cache: SimpleTTLCache[dict] = SimpleTTLCache(ttl_seconds=10)
    cache.set("a", {"v": 1})
    cache.set("b", {"v": 2})
    cache.get("a")

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert len(cache) == 1

    cache.clear()

    stats = cache.stats()
    assert stats["entries"] == 0
    assert stats["hits"] == 0
    assert stats["misses"] == 0
    assert stats["evictions"] == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"ttl_seconds": 0},
        {"max_entries": 0},
    ],
)
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        SimpleTTLCache(**kwargs)


def test_get_or_set_is_atomic_under_concurrency() -> None:
    cache: SimpleTTLCache[object] = SimpleTTLCache()
    results: list[object] = []
    barrier = threading.Barrier(20)

    def _reader() -> None:
        barrier.wait()
        results.append(cache.get_or_set("shared", object))

    threads = [threading.Thread(target=_reader) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 20
    assert len({id(r) for r in results}) == 1
