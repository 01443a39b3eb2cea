"""
Service layer for price records (the ``prices`` collection).

Listing supports a free‑text ``search`` over ``id`` and ``code``.  The
``env`` filter keeps only records that have a non‑empty price table
for that environment (``HML`` or ``PRD``).
"""

from typing import Any, Dict, List

from catalog_dashboard.app.core.pagination import filter_records
from catalog_dashboard.app.services.document_service import DocumentService


def has_environment(record: Dict[str, Any], env: str) -> bool:
    prices = record.get("prices")
    return isinstance(prices, dict) and bool(prices.get(env))


class PriceService(DocumentService):
    """CRUD and listing for price records."""

    collection = "prices"
    label = "price"
    search_fields = ("id", "code")

    @classmethod
    def apply_filters(
        cls,
        records: List[Dict[str, Any]],
        search: str = "",
        env: str = "",
        **_: str,
    ) -> List[Dict[str, Any]]:
        result = filter_records(records, search=search, search_fields=cls.search_fields)
        if env:
            result = [r for r in result if has_environment(r, env)]
        return result
