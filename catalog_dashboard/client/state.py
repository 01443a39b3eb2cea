"""
Application state of the dashboard.

One :class:`AppState` instance is owned by the controller.  It is only
changed through its update methods, which keep the displayed rows and
their pagination metadata consistent: both are always replaced
together from a single response.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional


DEFAULT_LIMIT = 15
LIMIT_OPTIONS = (10, 15, 25, 50, 100)


@dataclass(frozen=True)
class PaginationState:
    """Pagination metadata of one resource list."""

    page: int = 1
    limit: int = DEFAULT_LIMIT
    total: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False

    @property
    def start_item(self) -> int:
        return (self.page - 1) * self.limit + 1

    @property
    def end_item(self) -> int:
        return min(self.page * self.limit, self.total)

    def merged_with(self, pagination: Dict[str, Any]) -> "PaginationState":
        """Return a copy updated from the server's pagination document."""
        return replace(
            self,
            page=int(pagination.get("page", self.page)),
            limit=int(pagination.get("limit", self.limit)),
            total=int(pagination.get("total", self.total)),
            total_pages=int(pagination.get("totalPages", self.total_pages)),
            has_next=bool(pagination.get("hasNext", self.has_next)),
            has_prev=bool(pagination.get("hasPrev", self.has_prev)),
        )

    def summary(self) -> Optional[Dict[str, Any]]:
        """Data for the pagination bar, or ``None`` when there is nothing to show."""
        if self.total == 0:
            return None
        return {
            "text": f"Mostrando {self.start_item}-{self.end_item} de {self.total} itens",
            "pages_text": f"Página {self.page} de {self.total_pages}",
            "limit": self.limit,
            "limit_options": LIMIT_OPTIONS,
            "can_first": self.page != 1,
            "can_prev": self.has_prev,
            "can_next": self.has_next,
            "can_last": self.page != self.total_pages,
        }


@dataclass
class ResourceState:
    """Rows, pagination and filter inputs of one resource view."""

    rows: List[Dict[str, Any]] = field(default_factory=list)
    pagination: PaginationState = field(default_factory=PaginationState)
    filters: Dict[str, str] = field(default_factory=dict)


def _services_state() -> ResourceState:
    return ResourceState(filters={"search": "", "categoria": "", "segmento": ""})


def _prices_state() -> ResourceState:
    return ResourceState(filters={"search": "", "env": ""})


@dataclass
class AppState:
    """Single state container of the dashboard."""

    services: ResourceState = field(default_factory=_services_state)
    prices: ResourceState = field(default_factory=_prices_state)
    collections: List[str] = field(default_factory=list)
    current_service: Optional[Dict[str, Any]] = None
    current_price: Optional[Dict[str, Any]] = None
    active_view: str = "dashboard"
    counts: Dict[str, int] = field(default_factory=lambda: {"services": 0, "prices": 0, "collections": 0})
    filter_options: Dict[str, List[str]] = field(default_factory=lambda: {"categoria": [], "segmento": []})
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def resource(self, name: str) -> ResourceState:
        if name == "services":
            return self.services
        if name == "prices":
            return self.prices
        raise KeyError(name)

    def apply_page(self, name: str, response: Any) -> None:
        """Replace rows and pagination of ``name`` from one response.

        A paginated ``{data, pagination}`` response is used as is.  A
        bare list is shown as a single page.
        """
        target = self.resource(name)
        if isinstance(response, dict) and "data" in response and "pagination" in response:
            rows = list(response["data"] or [])
            pagination = target.pagination.merged_with(response["pagination"] or {})
        else:
            rows = list(response) if isinstance(response, list) else []
            pagination = replace(target.pagination, total=len(rows), total_pages=1)
        with self._lock:
            target.rows = rows
            target.pagination = pagination
            self.counts[name] = pagination.total

    def reset_page(self, name: str) -> None:
        """Empty the list of ``name`` and the pagination describing it.

        ``page`` and ``limit`` are kept so that a retry asks for the
        same page.
        """
        target = self.resource(name)
        with self._lock:
            target.rows = []
            target.pagination = replace(
                target.pagination, total=0, total_pages=0, has_next=False, has_prev=False
            )

    def set_limit(self, name: str, limit: int) -> None:
        """Change the page size of ``name``; the view goes back to page 1."""
        target = self.resource(name)
        with self._lock:
            target.pagination = replace(target.pagination, limit=int(limit), page=1)

    def set_filter(self, name: str, field_name: str, value: str) -> None:
        target = self.resource(name)
        if field_name not in target.filters:
            raise KeyError(field_name)
        with self._lock:
            target.filters[field_name] = value or ""


class LoadSequencer:
    """Issues increasing load numbers; only the latest one may apply."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest
