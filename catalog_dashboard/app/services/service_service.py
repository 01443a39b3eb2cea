"""
Service layer for service records (the ``services`` collection).

Listing supports a free‑text ``search`` over ``id``, ``tipo`` and
``servico`` and exact filters on ``categoria`` and ``segmento``.
"""

from typing import Any, Dict, List

from catalog_dashboard.app.core.pagination import filter_records
from catalog_dashboard.app.services.document_service import DocumentService


class ServiceService(DocumentService):
    """CRUD and listing for service records."""

    collection = "services"
    label = "service"
    search_fields = ("id", "tipo", "servico")

    @classmethod
    def apply_filters(
        cls,
        records: List[Dict[str, Any]],
        search: str = "",
        categoria: str = "",
        segmento: str = "",
        **_: str,
    ) -> List[Dict[str, Any]]:
        return filter_records(
            records,
            search=search,
            search_fields=cls.search_fields,
            exact={"categoria": categoria, "segmento": segmento},
        )
