import os

# The API must never reach for Firestore credentials under test.
os.environ.setdefault("STORE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from catalog_dashboard.app.core.db import MemoryStore, use_store
from catalog_dashboard.app.main import app
from catalog_dashboard.client.api_client import DashboardAPI
from catalog_dashboard.client.cache import CacheService
from catalog_dashboard.client.controller import DashboardController
from catalog_dashboard.client.notifications import Notifier
from catalog_dashboard.client.storage import MemoryStorage


def make_service(service_id, categoria="Drones", segmento="Agro", **extra):
    data = {
        "id": service_id,
        "codigo": 1,
        "tipo": "Assinatura",
        "servico": f"Servico {service_id}",
        "categoria": categoria,
        "segmento": segmento,
    }
    data.update(extra)
    return data


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def store():
    memory = MemoryStore()
    use_store(memory)
    yield memory
    use_store(None)


@pytest.fixture
def client(store):
    return TestClient(app)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return CacheService(MemoryStorage(), clock=clock)


@pytest.fixture
def api(client):
    return DashboardAPI(base_url="http://testserver", session=client)


@pytest.fixture
def controller(api, cache):
    return DashboardController(api, cache, Notifier(), search_debounce=5)
