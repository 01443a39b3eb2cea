"""
Dashboard controller.

The controller owns the application state and implements every user
action of the dashboard: loading and paging the services and prices
tables, filtering, the editors, delete confirmation, the collection
browser and the cache maintenance actions.

List loads go through the local cache unless a refresh is forced.
After any successful write the resource's cache namespace is
invalidated and the current page is reloaded with a forced refresh, so
the table shows the state just written.  When several loads of the
same resource overlap, only the most recently started one may update
the state.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .api_client import APIError, DashboardAPI
from .cache import CacheService
from .confirm import ConfirmDialog
from .debounce import Debouncer
from .forms import FormValidationError, PriceEditor, ServiceEditor
from .notifications import Notifier
from .state import AppState, LoadSequencer


logger = logging.getLogger(__name__)

ALL_RECORDS_PARAMS = {"limit": 1000}

MESSAGES = {
    "services": {
        "load_error": "Erro ao carregar serviços",
        "created": "Serviço criado com sucesso!",
        "updated": "Serviço atualizado com sucesso!",
        "save_error": "Erro ao salvar serviço",
        "confirm_delete": "Tem certeza que deseja excluir este serviço?",
        "deleted": "Serviço excluído com sucesso!",
        "delete_error": "Erro ao excluir serviço",
    },
    "prices": {
        "load_error": "Erro ao carregar preços",
        "created": "Preço criado com sucesso!",
        "updated": "Preço atualizado com sucesso!",
        "save_error": "Erro ao salvar preço",
        "confirm_delete": "Tem certeza que deseja excluir este preço?",
        "deleted": "Preço excluído com sucesso!",
        "delete_error": "Erro ao excluir preço",
    },
}


class DashboardController:
    """Top‑level controller of the dashboard."""

    def __init__(
        self,
        api: DashboardAPI,
        cache: CacheService,
        notifier: Optional[Notifier] = None,
        state: Optional[AppState] = None,
        search_debounce: float = 0.3,
    ) -> None:
        self.api = api
        self.cache = cache
        self.notifier = notifier or Notifier()
        self.state = state or AppState()
        self.service_editor = ServiceEditor()
        self.price_editor = PriceEditor()
        self.confirm_dialog = ConfirmDialog()
        self.loading = False
        self._sequencers = {"services": LoadSequencer(), "prices": LoadSequencer()}
        self._search_debouncers = {
            "services": Debouncer(lambda: self.load_services(1), search_debounce),
            "prices": Debouncer(lambda: self.load_prices(1), search_debounce),
        }
        self._editors = {"services": self.service_editor, "prices": self.price_editor}

    @property
    def debug(self) -> CacheService:
        """Cache service handle for inspection from a debug console."""
        return self.cache

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def show_view(self, view: str) -> None:
        """Switch view and load its data."""
        self.state.active_view = view
        if view == "services":
            self.load_services()
        elif view == "prices":
            self.load_prices()
        elif view == "collections":
            self.load_collections()

    def quick_add(self, resource: str) -> None:
        self.show_view(resource)
        self._editors[resource].open()

    # ------------------------------------------------------------------
    # List loading
    # ------------------------------------------------------------------
    def load_services(self, page: int = 1, force_refresh: bool = False) -> bool:
        return self._load("services", page, force_refresh)

    def load_prices(self, page: int = 1, force_refresh: bool = False) -> bool:
        return self._load("prices", page, force_refresh)

    def cache_params(self, resource: str, page: int) -> Dict[str, Any]:
        target = self.state.resource(resource)
        return {"page": page, "limit": target.pagination.limit, **target.filters}

    def _fetch_page(self, resource: str, page: int) -> Any:
        target = self.state.resource(resource)
        limit = target.pagination.limit
        if resource == "services":
            return self.api.list_services(page=page, limit=limit, **target.filters)
        return self.api.list_prices(page=page, limit=limit, **target.filters)

    def _load(self, resource: str, page: int, force_refresh: bool) -> bool:
        """Load one page of ``resource`` into the state.

        Returns ``True`` when the state was updated.
        """
        sequencer = self._sequencers[resource]
        token = sequencer.next()
        namespace = self.cache.namespace(resource)
        params = self.cache_params(resource, page)

        if not force_refresh:
            cached = self.cache.get(namespace, params)
            if cached is not None:
                if not sequencer.is_current(token):
                    return False
                self._apply(resource, cached)
                self.notifier.notify("Carregado do cache", "info")
                return True

        self.loading = True
        try:
            response = self._fetch_page(resource, page)
        except APIError as exc:
            logger.error("Loading %s page %s failed: %s", resource, page, exc.message)
            if sequencer.is_current(token):
                self.notifier.notify(MESSAGES[resource]["load_error"], "error")
                self.state.reset_page(resource)
            return False
        finally:
            self.loading = False

        self.cache.set(namespace, response, params)
        if not sequencer.is_current(token):
            logger.debug("Discarding stale %s response for page %s", resource, page)
            return False
        self._apply(resource, response)
        return True

    def _apply(self, resource: str, response: Any) -> None:
        self.state.apply_page(resource, response)
        if resource == "services":
            self.update_filters()

    def change_limit(self, resource: str, limit: int) -> bool:
        """Page‑size control: set the limit and reload from page 1."""
        self.state.set_limit(resource, limit)
        return self._load(resource, 1, False)

    def go_to_page(self, resource: str, page: int) -> bool:
        return self._load(resource, page, False)

    def set_filter(self, resource: str, name: str, value: str) -> bool:
        """Select filter (categoria, segmento, env): reload page 1 immediately."""
        self.state.set_filter(resource, name, value)
        return self._load(resource, 1, False)

    def on_search_input(self, resource: str, text: str) -> None:
        """Search box input: reload page 1 once typing pauses."""
        self.state.set_filter(resource, "search", text)
        self._search_debouncers[resource]()

    def global_search(self, text: str) -> None:
        """Forward the header search box to the active table view."""
        view = self.state.active_view
        if view in ("services", "prices"):
            self.on_search_input(view, text.lower())

    def search_debouncer(self, resource: str) -> Debouncer:
        return self._search_debouncers[resource]

    # ------------------------------------------------------------------
    # Filter options
    # ------------------------------------------------------------------
    def update_filters(self) -> None:
        """Fill the categoria/segmento options from all services.

        Uses the "all records" cache namespace when it holds a fresh
        entry and the server otherwise.  Failures leave the options as
        they are.
        """
        namespace = self.cache.namespace("services_all")
        cached = self.cache.get(namespace, ALL_RECORDS_PARAMS)
        if cached is None:
            try:
                cached = self.api.list_services(page=1, limit=ALL_RECORDS_PARAMS["limit"])
            except APIError as exc:
                logger.warning("Could not load filter options: %s", exc.message)
                return
            self.cache.set(namespace, cached, ALL_RECORDS_PARAMS)
        records = cached.get("data", []) if isinstance(cached, dict) else (cached or [])
        self.populate_filter_options(records)

    def populate_filter_options(self, services: List[Dict[str, Any]]) -> None:
        options: Dict[str, List[str]] = {}
        for name in ("categoria", "segmento"):
            values = (s.get(name) for s in services if isinstance(s, dict))
            options[name] = list(dict.fromkeys(v for v in values if v))
        self.state.filter_options = options

    # ------------------------------------------------------------------
    # Editors
    # ------------------------------------------------------------------
    def _find_row(self, resource: str, record_id: str) -> Optional[Dict[str, Any]]:
        for row in self.state.resource(resource).rows:
            if row.get("id") == record_id:
                return row
        return None

    def open_service_editor(self, service: Optional[Dict[str, Any]] = None) -> None:
        self.state.current_service = service
        self.service_editor.open(service)

    def open_price_editor(self, price: Optional[Dict[str, Any]] = None) -> None:
        self.state.current_price = price
        self.price_editor.open(price)

    def edit_service(self, service_id: str) -> bool:
        service = self._find_row("services", service_id)
        if service is None:
            return False
        self.open_service_editor(service)
        return True

    def edit_price(self, price_id: str) -> bool:
        price = self._find_row("prices", price_id)
        if price is None:
            return False
        self.open_price_editor(price)
        return True

    # Viewing a row opens the same editor.
    view_service = edit_service
    view_price = edit_price

    def close_editor(self, resource: str) -> None:
        self._editors[resource].close()
        if resource == "services":
            self.state.current_service = None
        else:
            self.state.current_price = None

    def submit_service(self) -> bool:
        return self._submit("services")

    def submit_price(self) -> bool:
        return self._submit("prices")

    def _submit(self, resource: str) -> bool:
        editor = self._editors[resource]
        messages = MESSAGES[resource]
        try:
            submission = editor.submit()
        except FormValidationError as exc:
            self.notifier.notify(str(exc), "error")
            return False

        self.loading = True
        try:
            self.api.send(submission.method, submission.endpoint, submission.payload)
        except APIError as exc:
            self.notifier.notify(exc.message or messages["save_error"], "error")
            return False
        finally:
            self.loading = False

        self.cache.invalidate(resource)
        self.notifier.notify(messages["updated" if submission.is_update else "created"], "success")
        self.close_editor(resource)
        self._load(resource, self.state.resource(resource).pagination.page, True)
        return True

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def delete_service(self, service_id: str) -> None:
        self._ask_delete("services", service_id)

    def delete_price(self, price_id: str) -> None:
        self._ask_delete("prices", price_id)

    def _ask_delete(self, resource: str, record_id: str) -> None:
        self.confirm_dialog.show(
            MESSAGES[resource]["confirm_delete"],
            lambda: self._delete(resource, record_id),
        )

    def _delete(self, resource: str, record_id: str) -> bool:
        messages = MESSAGES[resource]
        remove = self.api.delete_service if resource == "services" else self.api.delete_price
        self.loading = True
        try:
            remove(record_id)
        except APIError as exc:
            self.notifier.notify(exc.message or messages["delete_error"], "error")
            return False
        finally:
            self.loading = False
        self.cache.invalidate(resource)
        self.notifier.notify(messages["deleted"], "success")
        # Stays on the current page even if it is now empty.
        self._load(resource, self.state.resource(resource).pagination.page, True)
        return True

    # ------------------------------------------------------------------
    # Collections and dashboard
    # ------------------------------------------------------------------
    def load_collections(self) -> bool:
        self.loading = True
        try:
            data = self.api.list_collections()
        except APIError:
            self.notifier.notify("Erro ao carregar collections", "error")
            self.state.collections = []
            return False
        finally:
            self.loading = False
        self.state.collections = list(data) if isinstance(data, list) else []
        self.state.counts["collections"] = len(self.state.collections)
        return True

    def view_collection_documents(self, collection_id: str) -> Optional[List[Dict[str, Any]]]:
        self.loading = True
        try:
            docs = self.api.get_collection_documents(collection_id)
        except APIError:
            self.notifier.notify("Erro ao carregar documentos", "error")
            return None
        finally:
            self.loading = False
        self.notifier.notify(f"{len(docs)} documentos encontrados na collection {collection_id}", "info")
        return docs

    def _total_of(self, fetch: Callable[[], Any]) -> int:
        try:
            response = fetch()
        except APIError as exc:
            logger.warning("Dashboard stats request failed: %s", exc.message)
            return 0
        if isinstance(response, dict):
            return int((response.get("pagination") or {}).get("total") or 0)
        return len(response) if isinstance(response, list) else 0

    def load_dashboard_stats(self) -> Dict[str, int]:
        """Fill the three counters of the dashboard view."""
        self.state.counts["services"] = self._total_of(lambda: self.api.list_services(limit=1))
        self.state.counts["prices"] = self._total_of(lambda: self.api.list_prices(limit=1))
        try:
            collections = self.api.list_collections()
        except APIError as exc:
            logger.warning("Dashboard stats request failed: %s", exc.message)
            collections = []
        self.state.collections = list(collections) if isinstance(collections, list) else []
        self.state.counts["collections"] = len(self.state.collections)
        return dict(self.state.counts)

    # ------------------------------------------------------------------
    # Cache maintenance
    # ------------------------------------------------------------------
    def force_refresh(self, resource: str) -> bool:
        self.cache.invalidate(resource)
        return self._load(resource, 1, True)

    def clear_all_cache(self) -> None:
        self.cache.clear_all()
        self.notifier.notify("Cache limpo com sucesso!", "success")

    def get_cache_stats(self) -> Dict[str, int]:
        stats = self.cache.get_stats()
        self.notifier.notify(
            f"Cache: {stats['services']} services, {stats['prices']} prices ({stats['total_size_kb']}KB)",
            "info",
        )
        return stats
