"""
Local cache for dashboard list responses.

Entries live in a :class:`~catalog_dashboard.client.storage.Storage`
under keys built from a namespace and the query parameters::

    firestore_services_cache_categoria=A&limit=15&page=1&search=&segmento=

Parameters are sorted by name, so the same query always maps to the
same key.  Each entry is the JSON document ``{timestamp, data, params}``
with ``timestamp`` in milliseconds.  Entries older than the TTL (five
minutes) are misses and are deleted when read.

Caching is best effort: storage failures are logged as warnings and
never raised.  When a write fails (typically because the storage quota
is exhausted) the oldest half of all cache entries is evicted.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .storage import Storage


logger = logging.getLogger(__name__)


DEFAULT_NAMESPACES = {
    "services": "firestore_services_cache",
    "prices": "firestore_prices_cache",
    "services_all": "firestore_services_all_cache",
    "prices_all": "firestore_prices_all_cache",
}


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class CacheConfig:
    keys: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_NAMESPACES))
    ttl: int = 5 * 60 * 1000  # milliseconds
    enabled: bool = True


def _format_param(value: Any) -> str:
    # Same text a query string would carry for the value.
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CacheService:
    """TTL cache over a persistent key‑value storage."""

    def __init__(
        self,
        storage: Storage,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.storage = storage
        self.config = config or CacheConfig()
        self.clock = clock

    def namespace(self, resource: str) -> str:
        """Return the key prefix of ``resource`` (or ``resource`` itself)."""
        return self.config.keys.get(resource, resource)

    @staticmethod
    def build_cache_key(base_key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        params = params or {}
        param_string = "&".join(f"{k}={_format_param(params[k])}" for k in sorted(params))
        return f"{base_key}_{param_string}" if param_string else base_key

    def set(self, key: str, data: Any, params: Optional[Mapping[str, Any]] = None) -> None:
        """Store ``data`` for ``key`` + ``params`` with the current timestamp."""
        if not self.config.enabled:
            return
        params = dict(params or {})
        cache_key = self.build_cache_key(key, params)
        try:
            entry = json.dumps({"timestamp": self.clock(), "data": data, "params": params}, default=str)
            self.storage.set_item(cache_key, entry)
            logger.debug("[Cache] Saved: %s", cache_key)
        except Exception as exc:
            logger.warning("[Cache] Error saving to storage: %s", exc)
            self.clear_old_caches()

    def get(self, key: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Return the cached data, or ``None`` on a miss or expired entry."""
        if not self.config.enabled:
            return None
        cache_key = self.build_cache_key(key, params)
        try:
            cached = self.storage.get_item(cache_key)
            if not cached:
                return None
            entry = json.loads(cached)
            age = self.clock() - entry["timestamp"]
            if age > self.config.ttl:
                logger.debug("[Cache] Expired: %s (age: %ds)", cache_key, round(age / 1000))
                self.storage.remove_item(cache_key)
                return None
            logger.debug("[Cache] Hit: %s (age: %ds)", cache_key, round(age / 1000))
            return entry.get("data")
        except Exception as exc:
            logger.warning("[Cache] Error reading from storage: %s", exc)
            return None

    def invalidate(self, collection: str) -> None:
        """Drop every entry of ``collection`` and of its "all records" namespace."""
        prefix = self.namespace(collection)
        try:
            for key in self._keys_with_prefix(prefix):
                self.storage.remove_item(key)
                logger.debug("[Cache] Invalidated: %s", key)
        except Exception as exc:
            logger.warning("[Cache] Error invalidating cache: %s", exc)
        all_key = f"{collection}_all"
        if collection in ("services", "prices") and all_key in self.config.keys:
            self.invalidate_by_prefix(self.config.keys[all_key])

    def invalidate_by_prefix(self, prefix: str) -> None:
        try:
            for key in self._keys_with_prefix(prefix):
                self.storage.remove_item(key)
        except Exception as exc:
            logger.warning("[Cache] Error invalidating by prefix: %s", exc)

    def clear_all(self) -> None:
        for prefix in self.config.keys.values():
            self.invalidate_by_prefix(prefix)
        logger.info("[Cache] All caches cleared")

    def clear_old_caches(self) -> int:
        """Evict the oldest half (rounded up) of all cache entries.

        Entries that cannot be parsed count as timestamp 0 and therefore
        go first.  Returns the number of entries removed.
        """
        try:
            entries: Dict[str, float] = {}
            for prefix in self.config.keys.values():
                for key in self._keys_with_prefix(prefix):
                    raw = self.storage.get_item(key)
                    if raw:
                        entries[key] = self._timestamp_of(raw)
            ordered: List[Tuple[str, float]] = sorted(entries.items(), key=lambda item: item[1])
            to_remove = ordered[: math.ceil(len(ordered) / 2)]
            for key, _ in to_remove:
                self.storage.remove_item(key)
            logger.info("[Cache] Cleared %d old caches", len(to_remove))
            return len(to_remove)
        except Exception as exc:
            logger.warning("[Cache] Error clearing old caches: %s", exc)
            return 0

    def get_stats(self) -> Dict[str, int]:
        """Count cached pages per resource and the total stored size."""
        stats = {"services": 0, "prices": 0, "total_size": 0}
        services_prefix = self.namespace("services")
        prices_prefix = self.namespace("prices")
        try:
            for key in self.storage.keys():
                data = self.storage.get_item(key)
                if not data:
                    continue
                stats["total_size"] += len(data)
                if key.startswith(services_prefix):
                    stats["services"] += 1
                if key.startswith(prices_prefix):
                    stats["prices"] += 1
        except Exception as exc:
            logger.warning("[Cache] Error getting stats: %s", exc)
        stats["total_size_kb"] = round(stats["total_size"] / 1024)
        return stats

    def _keys_with_prefix(self, prefix: str) -> List[str]:
        return [key for key in self.storage.keys() if key and key.startswith(prefix)]

    @staticmethod
    def _timestamp_of(raw: str) -> float:
        try:
            return float(json.loads(raw).get("timestamp") or 0)
        except (ValueError, TypeError, AttributeError):
            return 0
