import json
import logging

from catalog_dashboard.client.cache import CacheConfig, CacheService
from catalog_dashboard.client.storage import MemoryStorage

SERVICES = "firestore_services_cache"
PRICES = "firestore_prices_cache"


def test_build_cache_key_is_order_independent():
    a = CacheService.build_cache_key(SERVICES, {"page": 1, "limit": 15, "search": ""})
    b = CacheService.build_cache_key(SERVICES, {"search": "", "limit": 15, "page": 1})
    assert a == b == "firestore_services_cache_limit=15&page=1&search="


def test_build_cache_key_without_params():
    assert CacheService.build_cache_key(SERVICES, {}) == SERVICES
    assert CacheService.build_cache_key(SERVICES, {"flag": True}) == f"{SERVICES}_flag=true"


def test_set_then_get_returns_data(cache):
    data = {"data": [{"id": "svc1", "preco": 10.5}], "pagination": {"total": 1}}
    cache.set(SERVICES, data, {"page": 1})
    assert cache.get(SERVICES, {"page": 1}) == data
    assert cache.get(SERVICES, {"page": 2}) is None


def test_stored_entry_format(cache, clock):
    cache.set(PRICES, [1, 2], {"env": "HML"})
    raw = json.loads(cache.storage.get_item(f"{PRICES}_env=HML"))
    assert raw == {"timestamp": clock.now, "data": [1, 2], "params": {"env": "HML"}}


def test_expired_entries_are_misses_and_removed(cache, clock):
    cache.set(SERVICES, "payload", {"page": 1})
    clock.advance(cache.config.ttl)
    assert cache.get(SERVICES, {"page": 1}) == "payload"

    clock.advance(1)
    assert cache.get(SERVICES, {"page": 1}) is None
    assert cache.storage.get_item(f"{SERVICES}_page=1") is None


def test_disabled_cache_stores_nothing(clock):
    cache = CacheService(MemoryStorage(), CacheConfig(enabled=False), clock=clock)
    cache.set(SERVICES, "payload")
    assert cache.get(SERVICES) is None
    assert len(cache.storage) == 0


def test_corrupted_entry_is_a_miss(cache, caplog):
    cache.storage.set_item(f"{SERVICES}_page=1", "{not json")
    with caplog.at_level(logging.WARNING):
        assert cache.get(SERVICES, {"page": 1}) is None
    assert "Error reading from storage" in caplog.text


def test_invalidate_removes_namespace_and_all_records(cache):
    cache.set(SERVICES, "p1", {"page": 1})
    cache.set(SERVICES, "p2", {"page": 2})
    cache.set("firestore_services_all_cache", "all", {"limit": 1000})
    cache.set(PRICES, "prices", {"page": 1})
    cache.storage.set_item("unrelated", "x")

    cache.invalidate("services")

    assert sorted(cache.storage.keys()) == [f"{PRICES}_page=1", "unrelated"]


def test_clear_all_keeps_foreign_keys(cache):
    cache.set(SERVICES, "a", {"page": 1})
    cache.set(PRICES, "b", {"page": 1})
    cache.storage.set_item("theme", "dark")
    cache.clear_all()
    assert cache.storage.keys() == ["theme"]


def test_clear_old_caches_removes_oldest_half(cache, clock):
    for page in range(1, 6):
        cache.set(SERVICES, page, {"page": page})
        clock.advance(10)

    assert cache.clear_old_caches() == 3
    assert sorted(cache.storage.keys()) == [f"{SERVICES}_page=4", f"{SERVICES}_page=5"]


def test_unparsable_entries_are_evicted_first(cache, clock):
    cache.set(SERVICES, "old", {"page": 1})
    clock.advance(10)
    cache.set(SERVICES, "new", {"page": 2})
    cache.storage.set_item(f"{PRICES}_page=9", "garbage")

    assert cache.clear_old_caches() == 2
    assert cache.storage.keys() == [f"{SERVICES}_page=2"]


def test_failed_write_triggers_eviction(cache, clock, caplog):
    for page in range(1, 4):
        cache.set(SERVICES, {"page": page}, {"page": page})
        clock.advance(10)
    storage = cache.storage
    storage.quota = sum(len(k) + len(storage.get_item(k)) for k in storage.keys()) + 5

    with caplog.at_level(logging.WARNING):
        cache.set(PRICES, {"rows": "x" * 100}, {"page": 1})

    assert "Error saving to storage" in caplog.text
    assert storage.keys() == [f"{SERVICES}_page=3"]


def test_get_stats(cache):
    cache.set(SERVICES, "a", {"page": 1})
    cache.set(SERVICES, "b", {"page": 2})
    cache.set(PRICES, "c", {"page": 1})
    stats = cache.get_stats()
    assert stats["services"] == 2
    assert stats["prices"] == 1
    assert stats["total_size"] == sum(len(cache.storage.get_item(k)) for k in cache.storage.keys())
    assert stats["total_size_kb"] == 0
