"""
Shared CRUD operations on a single collection.

``DocumentService`` implements the upsert conventions used by every
managed collection:

* ``create`` writes the whole document under its user‑assigned ``id``
  and stamps ``createdAt`` and ``updatedAt`` with the server time.
* ``update`` merges the given fields into the stored document, forces
  ``id`` to the path identifier and refreshes ``updatedAt``.
* Both return the document as re‑read from the store.

Subclasses set ``collection`` and override ``apply_filters`` to
declare which fields the list endpoint searches and filters on.
Database errors propagate as :class:`StoreError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from catalog_dashboard.app.core.db import get_store
from catalog_dashboard.app.core.pagination import paginate


class DocumentService:
    """Base class for collection services."""

    collection: str = ""
    label: str = "document"

    @classmethod
    async def list_documents(cls) -> List[Dict[str, Any]]:
        """Return every document of the collection."""
        return get_store().list_documents(cls.collection)

    @classmethod
    def apply_filters(cls, records: List[Dict[str, Any]], search: str = "", **filters: str) -> List[Dict[str, Any]]:
        return records

    @classmethod
    async def list_page(cls, page: int, limit: int, search: str = "", **filters: str) -> Dict[str, Any]:
        """Load the collection, filter it in memory and cut out one page."""
        records = await cls.list_documents()
        filtered = cls.apply_filters(records, search=search, **filters)
        return paginate(filtered, page, limit)

    @classmethod
    async def get(cls, doc_id: str) -> Optional[Dict[str, Any]]:
        data = get_store().get_document(cls.collection, doc_id)
        if data is None:
            return None
        return {"id": doc_id, **data}

    @classmethod
    async def create(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Write ``data`` under ``data["id"]``, replacing any existing document."""
        logger = logging.getLogger(__name__)
        store = get_store()
        doc_id = str(data["id"])
        payload = {
            **data,
            "createdAt": store.server_timestamp(),
            "updatedAt": store.server_timestamp(),
        }
        store.set_document(cls.collection, doc_id, payload)
        logger.info("Created %s %s", cls.label, doc_id)
        return await cls.get(doc_id) or {"id": doc_id}

    @classmethod
    async def update(cls, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``data`` into the document, creating it when missing."""
        logger = logging.getLogger(__name__)
        store = get_store()
        payload = {
            **data,
            "id": doc_id,
            "updatedAt": store.server_timestamp(),
        }
        store.set_document(cls.collection, doc_id, payload, merge=True)
        logger.info("Updated %s %s", cls.label, doc_id)
        return await cls.get(doc_id) or {"id": doc_id}

    @classmethod
    async def delete(cls, doc_id: str) -> None:
        logger = logging.getLogger(__name__)
        get_store().delete_document(cls.collection, doc_id)
        logger.info("Deleted %s %s", cls.label, doc_id)

    @classmethod
    async def count(cls) -> int:
        return get_store().count_documents(cls.collection)
