import pytest

from iplens import ConfigurationError, Details
from iplens.cache import LRUCache, cache_key, CACHE_KEY_VERSION


def test_cache_key_is_versioned():
    assert cache_key("8.8.8.8") == f"8.8.8.8:{CACHE_KEY_VERSION}"
    assert cache_key("8.8.8.8") != "8.8.8.8"


@pytest.mark.parametrize("capacity", [0, -1])
def test_non_positive_capacity_is_rejected(capacity):
    with pytest.raises(ConfigurationError):
        LRUCache(capacity)


def test_get_miss_returns_none():
    cache = LRUCache(2)
    assert cache.get("missing") is None


def test_inserting_past_capacity_evicts_least_recent():
    cache = LRUCache(3)
    for key in ("a", "b", "c"):
        cache.put(key, key.upper())

    cache.put("d", "D")

    assert cache.get("a") is None
    assert cache.get("b") == "B"
    assert cache.get("c") == "C"
    assert cache.get("d") == "D"
    assert len(cache) == 3


def test_get_refreshes_recency():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)

    cache.get("a")
    cache.put("c", 3)

    assert cache.get("b") is None
    assert cache.get("a") == 1


def test_put_refreshes_existing_entry():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)

    cache.put("a", 10)
    cache.put("c", 3)

    assert "b" not in cache
    assert cache.get("a") == 10
    assert cache.capacity == 2


def test_records_are_copied_in_and_out():
    cache = LRUCache(2)
    record = Details(ip="8.8.8.8", city="Mountain View")
    cache.put("k", record)

    record.city = "changed"
    first = cache.get("k")
    first.city = "also changed"

    assert cache.get("k").city == "Mountain View"


def test_clear():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.clear()
    assert len(cache) == 0
    assert "a" not in cache
