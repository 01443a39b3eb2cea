"""
Generic collection browser.

Lists the root collections of the database and the documents of any
one of them.  Documents are returned untyped as ``{id, ...fields}``.
"""

from typing import Any, Dict, List

from catalog_dashboard.app.core.db import get_store


class CollectionService:
    """Read‑only access to arbitrary collections."""

    @classmethod
    async def list_collections(cls) -> List[str]:
        return get_store().list_collections()

    @classmethod
    async def list_documents(cls, collection_id: str) -> List[Dict[str, Any]]:
        return get_store().list_documents(collection_id)
