"""Client side of the Catalog Dashboard.

The client talks to the dashboard API with :class:`DashboardAPI`, keeps
list responses in a TTL cache and drives the dashboard views through
:class:`DashboardController`.  ``create_controller`` wires them together
from environment variables:

* ``DASHBOARD_BASE_URL``: API location (``http://localhost:3000``).
* ``DASHBOARD_CACHE_PATH``: SQLite file for the cache; in memory when unset.
* ``LOG_LEVEL`` / ``LOG_FILE``: as for the server.
* ``CACHE_LOG_LEVEL``: level of the cache logger; ``DEBUG`` shows every
  hit, save and expiry.
"""

import os
from typing import Optional

from catalog_dashboard.app.core.logging_config import CACHE_LOGGER, setup_logging

from .api_client import APIError, DashboardAPI
from .cache import CacheConfig, CacheService
from .controller import DashboardController
from .notifications import Notifier
from .storage import MemoryStorage, SQLiteStorage


def create_controller(base_url: Optional[str] = None, cache_path: Optional[str] = None) -> DashboardController:
    """Build a controller against a running dashboard API.

    With no cache path the cache lives in memory for the lifetime of
    the process.
    """
    setup_logging(
        os.getenv("LOG_LEVEL", "INFO"),
        os.getenv("LOG_FILE") or None,
        {CACHE_LOGGER: os.getenv("CACHE_LOG_LEVEL", "")},
    )
    base_url = base_url or os.getenv("DASHBOARD_BASE_URL", "http://localhost:3000")
    cache_path = cache_path if cache_path is not None else os.getenv("DASHBOARD_CACHE_PATH", "")
    storage = SQLiteStorage(cache_path) if cache_path else MemoryStorage()
    return DashboardController(DashboardAPI(base_url=base_url), CacheService(storage, CacheConfig()), Notifier())


__all__ = [
    "APIError",
    "CacheConfig",
    "CacheService",
    "DashboardAPI",
    "DashboardController",
    "Notifier",
    "create_controller",
]
