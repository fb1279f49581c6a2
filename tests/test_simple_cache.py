"""Unit tests for the in-memory SimpleTTLCache."""

import threading

import pytest

from app.schemas.search import InstantAnswerResponse
from app.utils import simple_cache
from app.utils.simple_cache import SimpleTTLCache, build_cache_key


class FakeTime:
    """Deterministic clock used to test expiration logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def fake_time(monkeypatch: pytest.MonkeyPatch) -> FakeTime:
    clock = FakeTime()
    monkeypatch.setattr(simple_cache, "time", clock)
    return clock


def test_build_cache_key_prefixes_namespace() -> None:
    assert build_cache_key("ddg", "python") == "ddg:python"
    assert build_cache_key("ddg", "a b") != build_cache_key("ddg", "a  b")


def test_set_and_get_updates_hit_miss_counters() -> None:
    cache = SimpleTTLCache(ttl_seconds=10)

    assert cache.get("missing") is None

    result = InstantAnswerResponse(query="python")
    cache.set("ddg:python", result)

    assert cache.get("ddg:python") is result

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1


def test_entry_is_served_up_to_and_including_ttl(fake_time: FakeTime) -> None:
    cache = SimpleTTLCache(ttl_seconds=60)
    cache.set("key", {"data": True})

    fake_time.advance(60)

    assert cache.get("key") == {"data": True}


def test_expired_entry_is_deleted_on_lookup(fake_time: FakeTime) -> None:
    cache = SimpleTTLCache(ttl_seconds=60)
    cache.set("key", {"data": True})

    fake_time.advance(60.001)

    assert cache.get("key") is None
    assert "key" not in cache
    assert cache.stats()["evictions"] == 1


def test_expired_entries_stay_until_looked_up(fake_time: FakeTime) -> None:
    cache = SimpleTTLCache(ttl_seconds=5)
    cache.set("a", 1)
    cache.set("b", 2)

    fake_time.advance(10)
    cache.set("c", 3)

    assert len(cache) == 3


def test_set_overwrites_and_restamps(fake_time: FakeTime) -> None:
    cache = SimpleTTLCache(ttl_seconds=10)
    cache.set("key", "old")
    fake_time.advance(8)
    cache.set("key", "new")
    fake_time.advance(8)

    assert cache.get("key") == "new"


def test_clear_resets_state() -> None:
    cache = SimpleTTLCache(ttl_seconds=10)
    cache.set("a", {"v": 1})
    cache.set("b", {"v": 2})
    cache.get("a")

    cache.clear()

    stats = cache.stats()
    assert stats["entries"] == 0
    assert stats["hits"] == 0
    assert stats["misses"] == 0
    assert stats["evictions"] == 0


def test_invalid_ttl() -> None:
    with pytest.raises(ValueError):
        SimpleTTLCache(ttl_seconds=0)


def test_thread_safety_under_concurrent_sets() -> None:
    cache = SimpleTTLCache(ttl_seconds=30)
    total_keys = 50

    def _writer(idx: int) -> None:
        cache.set(f"k-{idx}", {"v": idx})

    threads = [threading.Thread(target=_writer, args=(i,)) for i in range(total_keys)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.stats()["entries"] == total_keys
    assert cache.get("k-0") == {"v": 0}
    assert cache.get("k-49") == {"v": 49}
