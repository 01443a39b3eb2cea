"""
Persistent key‑value storage for the dashboard cache.

The storage plays the part a browser's ``localStorage`` plays for a web
page: string keys, string values, a size quota and an error when a
write would exceed it.  Two backends are provided:

* ``SQLiteStorage`` keeps the entries in a SQLite file so that the
  cache survives restarts of the dashboard process.
* ``MemoryStorage`` keeps them in a dictionary.

Sizes are counted as ``len(key) + len(value)`` characters.
"""

from __future__ import annotations

import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional


class StorageError(Exception):
    """Raised when the storage cannot read or write an entry."""


class StorageFullError(StorageError):
    """Raised when a write would exceed the storage quota."""


class Storage:
    """Interface of a string key‑value store with an optional quota."""

    def __init__(self, quota: Optional[int] = None) -> None:
        self.quota = quota

    def keys(self) -> List[str]:
        raise NotImplementedError

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)

    def __len__(self) -> int:
        return len(self.keys())

    def _check_quota(self, used_without_key: int, key: str, value: str) -> None:
        if self.quota is None:
            return
        if used_without_key + len(key) + len(value) > self.quota:
            raise StorageFullError(f"Storage quota of {self.quota} exceeded while writing {key!r}")


class MemoryStorage(Storage):
    """Dictionary backed storage."""

    def __init__(self, quota: Optional[int] = None) -> None:
        super().__init__(quota)
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            used = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
            self._check_quota(used, key, value)
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)


class SQLiteStorage(Storage):
    """SQLite file backed storage.

    A new connection is opened per operation, so one instance may be
    shared between the debounce timer thread and the caller's thread.
    """

    def __init__(self, path: str, quota: Optional[int] = None) -> None:
        super().__init__(quota)
        self.path = str(Path(os.path.expanduser(path)).resolve())
        with self._cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS storage (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            conn = sqlite3.connect(self.path)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def keys(self) -> List[str]:
        with self._cursor() as cursor:
            return [row[0] for row in cursor.execute("SELECT key FROM storage ORDER BY rowid")]

    def get_item(self, key: str) -> Optional[str]:
        with self._cursor() as cursor:
            row = cursor.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._cursor() as cursor:
            if self.quota is not None:
                row = cursor.execute(
                    "SELECT COALESCE(SUM(LENGTH(key) + LENGTH(value)), 0) FROM storage WHERE key != ?",
                    (key,),
                ).fetchone()
                self._check_quota(int(row[0]), key, value)
            cursor.execute(
                "INSERT INTO storage (key, value) VALUES (?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def remove_item(self, key: str) -> None:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM storage WHERE key = ?", (key,))

    def clear(self) -> None:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM storage")
