"""
In‑memory filtering and pagination.

Firestore has no native substring search, so list endpoints load the
whole collection, filter it here and slice out the requested page.
This costs O(collection size) per request; ``settings.max_page_limit``
bounds the size of a single page but not the scan itself.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import settings


def _to_positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def parse_page_params(page: Any = None, limit: Any = None) -> Tuple[int, int]:
    """Normalise raw ``page``/``limit`` query values.

    Missing, non‑numeric and non‑positive values fall back to page 1 and
    ``settings.default_page_limit``.  ``limit`` is clamped to
    ``settings.max_page_limit``.
    """
    page_number = _to_positive_int(page, 1)
    page_limit = _to_positive_int(limit, settings.default_page_limit)
    return page_number, min(page_limit, settings.max_page_limit)


def matches_search(record: Dict[str, Any], fields: Iterable[str], term: str) -> bool:
    """Case‑insensitive substring match of ``term`` on any of ``fields``.

    Fields that are missing or hold something other than a string never
    match.
    """
    needle = term.lower()
    for field in fields:
        value = record.get(field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def matches_exact(record: Dict[str, Any], field: str, value: str) -> bool:
    return record.get(field) == value


def filter_records(
    records: List[Dict[str, Any]],
    search: str = "",
    search_fields: Iterable[str] = (),
    exact: Optional[Dict[str, str]] = None,
) -> List[Dict[str, Any]]:
    """Apply the search term and exact‑match filters; empty values are ignored."""
    result = records
    if search:
        fields = tuple(search_fields)
        result = [r for r in result if matches_search(r, fields, search)]
    for field, value in (exact or {}).items():
        if value:
            result = [r for r in result if matches_exact(r, field, value)]
    return result


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }


def paginate(records: List[Dict[str, Any]], page: int, limit: int) -> Dict[str, Any]:
    """Slice ``records`` into the requested page.

    Returns ``{"data": [...], "pagination": {...}}`` where ``total`` is
    the number of records before slicing.
    """
    offset = (page - 1) * limit
    return {
        "data": records[offset:offset + limit],
        "pagination": build_pagination(page, limit, len(records)),
    }
