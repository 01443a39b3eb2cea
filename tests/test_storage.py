import pytest

from catalog_dashboard.client.storage import MemoryStorage, SQLiteStorage, StorageFullError


@pytest.fixture(params=["memory", "sqlite"])
def storage(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return SQLiteStorage(str(tmp_path / "cache.sqlite3"))


def test_set_get_remove(storage):
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    storage.set_item("a", "3")
    assert storage.get_item("a") == "3"
    assert sorted(storage.keys()) == ["a", "b"]
    assert len(storage) == 2

    storage.remove_item("a")
    storage.remove_item("missing")
    assert storage.get_item("a") is None
    storage.clear()
    assert len(storage) == 0


def test_quota_rejects_oversized_writes(storage):
    storage.quota = 10
    storage.set_item("k", "12345")
    with pytest.raises(StorageFullError):
        storage.set_item("k2", "123456")
    # Overwriting a key does not count its old value.
    storage.set_item("k", "123456789")
    assert storage.get_item("k") == "123456789"
    assert storage.get_item("k2") is None


def test_sqlite_storage_persists_between_instances(tmp_path):
    path = str(tmp_path / "cache.sqlite3")
    SQLiteStorage(path).set_item("key", "value")
    assert SQLiteStorage(path).get_item("key") == "value"
