import logging
from pathlib import Path
import subprocess
import sys

import pytest

from catalog_dashboard.app.core.logging_config import CACHE_LOGGER, level_from_name, setup_logging
from catalog_dashboard.client import create_controller
from catalog_dashboard.client.cache import CacheService
from catalog_dashboard.client.storage import MemoryStorage

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def cache_logger():
    logger = logging.getLogger(CACHE_LOGGER)
    previous = logger.level
    yield logger
    logger.setLevel(previous)


def test_level_from_name():
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name(" WARNING ") == logging.WARNING
    assert level_from_name("loud") == logging.INFO
    assert level_from_name("", logging.ERROR) == logging.ERROR


def test_logger_levels_apply_when_root_is_already_configured(cache_logger):
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        setup_logging("INFO", None, {CACHE_LOGGER: "DEBUG"})
        assert root.handlers.count(handler) == 1
        assert cache_logger.level == logging.DEBUG
    finally:
        root.removeHandler(handler)


def test_cache_log_level_setting_enables_cache_trace(monkeypatch, cache_logger, caplog):
    monkeypatch.setenv("CACHE_LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("DASHBOARD_CACHE_PATH", raising=False)
    create_controller(base_url="http://dashboard.local")
    assert cache_logger.level == logging.DEBUG

    cache = CacheService(MemoryStorage())
    with caplog.at_level(logging.DEBUG, logger=CACHE_LOGGER):
        cache.set("firestore_services_cache", {"data": []}, {"page": 1})
        cache.get("firestore_services_cache", {"page": 1})

    assert "[Cache] Saved: firestore_services_cache_page=1" in caplog.text
    assert "[Cache] Hit: firestore_services_cache_page=1" in caplog.text


def test_empty_cache_log_level_leaves_the_logger_alone(monkeypatch, cache_logger):
    cache_logger.setLevel(logging.WARNING)
    monkeypatch.setenv("CACHE_LOG_LEVEL", "")
    monkeypatch.delenv("DASHBOARD_CACHE_PATH", raising=False)
    create_controller(base_url="http://dashboard.local")
    assert cache_logger.level == logging.WARNING


def test_importing_the_client_does_not_build_the_server():
    code = (
        "import sys, catalog_dashboard.client; "
        "print('catalog_dashboard.app.main' in sys.modules)"
    )
    result = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, check=True, cwd=str(PROJECT_ROOT)
    )
    assert result.stdout.strip() == "False"
