"""
Document database integration.

The dashboard manages records kept in a document database (Cloud
Firestore).  This module hides the database SDK behind the small
``DocumentStore`` interface used by the service layer:

* ``FirestoreStore`` talks to Firestore through ``firebase_admin``.
* ``MemoryStore`` keeps collections in process memory.  It is used for
  local development and by the test suite, and mirrors Firestore's
  ``set(..., merge=True)`` semantics: nested mappings are merged key by
  key, everything else is replaced.

``init_store`` is called once at application startup and selects the
backend from ``settings.store_backend``; ``get_store`` returns it.
Errors raised by the database SDK are wrapped in ``StoreError`` so the
API layer can answer with a generic 500 response.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from .config import settings


logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the document database cannot complete an operation."""


class DocumentStore:
    """Interface implemented by every document store backend.

    Documents are plain dictionaries.  Returned documents never contain
    the ``id`` key unless it was stored as a field; callers add the
    document id themselves.
    """

    def list_collections(self) -> List[str]:
        raise NotImplementedError

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        """Return every document of ``collection`` as ``{"id": ..., **fields}``."""
        raise NotImplementedError

    def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def set_document(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        raise NotImplementedError

    def delete_document(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError

    def count_documents(self, collection: str) -> int:
        raise NotImplementedError

    def server_timestamp(self) -> Any:
        """Value that the store replaces with the write time."""
        raise NotImplementedError


def _deep_merge(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


class MemoryStore(DocumentStore):
    """In‑process document store.

    Collections are created on first write.  A collection whose last
    document was deleted disappears from ``list_collections`` just as
    it does in Firestore.
    """

    _SERVER_TIMESTAMP = object()

    def __init__(self, initial: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()
        for name, docs in (initial or {}).items():
            for doc_id, data in docs.items():
                self.set_document(name, doc_id, data)

    def list_collections(self) -> List[str]:
        with self._lock:
            return [name for name, docs in self._collections.items() if docs]

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            docs = self._collections.get(collection, {})
            return [{"id": doc_id, **copy.deepcopy(data)} for doc_id, data in docs.items()]

    def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            return copy.deepcopy(data) if data is not None else None

    def set_document(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        now = datetime.now(timezone.utc)
        resolved = self._resolve_timestamps(data, now)
        with self._lock:
            docs = self._collections.setdefault(collection, {})
            if merge and doc_id in docs:
                _deep_merge(docs[doc_id], resolved)
            else:
                docs[doc_id] = resolved

    def delete_document(self, collection: str, doc_id: str) -> None:
        # Deleting a missing document is not an error in Firestore either.
        with self._lock:
            self._collections.get(collection, {}).pop(doc_id, None)

    def count_documents(self, collection: str) -> int:
        with self._lock:
            return len(self._collections.get(collection, {}))

    def server_timestamp(self) -> Any:
        return self._SERVER_TIMESTAMP

    def _resolve_timestamps(self, value: Any, now: datetime) -> Any:
        if value is self._SERVER_TIMESTAMP:
            return now
        if isinstance(value, dict):
            return {k: self._resolve_timestamps(v, now) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve_timestamps(v, now) for v in value]
        return copy.deepcopy(value)


class FirestoreStore(DocumentStore):
    """Cloud Firestore backend using the ``firebase_admin`` SDK."""

    def __init__(self, client: Any = None) -> None:
        self._db = client or self._init_client()

    @staticmethod
    def _init_client() -> Any:
        if not firebase_admin._apps:
            if settings.firebase_credentials_json:
                cred = credentials.Certificate(json.loads(settings.firebase_credentials_json))
                firebase_admin.initialize_app(cred)
            elif settings.firebase_credentials_path and os.path.exists(settings.firebase_credentials_path):
                cred = credentials.Certificate(settings.firebase_credentials_path)
                firebase_admin.initialize_app(cred)
            else:
                # Application Default Credentials
                firebase_admin.initialize_app()
        return firestore.client()

    def list_collections(self) -> List[str]:
        try:
            return [col.id for col in self._db.collections()]
        except Exception as exc:
            raise StoreError(str(exc)) from exc

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        try:
            snapshot = self._db.collection(collection).get()
            return [{"id": doc.id, **(doc.to_dict() or {})} for doc in snapshot]
        except Exception as exc:
            raise StoreError(str(exc)) from exc

    def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self._db.collection(collection).document(doc_id).get()
        except Exception as exc:
            raise StoreError(str(exc)) from exc
        if not doc.exists:
            return None
        return doc.to_dict() or {}

    def set_document(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        try:
            self._db.collection(collection).document(doc_id).set(data, merge=merge)
        except Exception as exc:
            raise StoreError(str(exc)) from exc

    def delete_document(self, collection: str, doc_id: str) -> None:
        try:
            self._db.collection(collection).document(doc_id).delete()
        except Exception as exc:
            raise StoreError(str(exc)) from exc

    def count_documents(self, collection: str) -> int:
        try:
            result = self._db.collection(collection).count().get()
            return int(result[0][0].value)
        except Exception as exc:
            raise StoreError(str(exc)) from exc

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP


_store: Optional[DocumentStore] = None


def init_store() -> DocumentStore:
    """Create the configured store unless one is already installed."""
    global _store
    if _store is not None:
        return _store
    backend = settings.store_backend.lower()
    if backend == "memory":
        _store = MemoryStore()
    elif backend == "firestore":
        _store = FirestoreStore()
    else:
        raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend}")
    logger.info("Document store initialised (%s)", backend)
    return _store


def get_store() -> DocumentStore:
    """Return the active store, initialising it on first use."""
    return _store if _store is not None else init_store()


def use_store(store: Optional[DocumentStore]) -> None:
    """Install ``store`` as the active store (``None`` resets it)."""
    global _store
    _store = store
