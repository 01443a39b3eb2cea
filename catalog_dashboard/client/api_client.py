"""Catalog Dashboard API client.

Thin wrapper around the backend's REST endpoints built on the
``requests`` library.  Each method maps to one endpoint and returns the
decoded JSON body.

Every failure is raised as :class:`APIError` at this boundary.  When
the server answered with an error document its ``error`` message is
used; otherwise the message falls back to ``"Erro na requisição"``.
There is no retry: a failed call must be triggered again by the user.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Erro na requisição"


class APIError(Exception):
    """Error raised for any failed API call.

    Attributes:
        message: Message suitable for showing to the user.
        status_code: HTTP status code, or ``None`` when the request
            never produced a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _path_id(value: Any) -> str:
    return quote(str(value), safe="")


class DashboardAPI:
    """Client for the Catalog Dashboard backend."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the backend, e.g. ``http://localhost:3000``.
            session: Optional ``requests.Session`` (or compatible object).
                A new session is created when omitted.
            timeout: Optional timeout in seconds for each request.  No
                timeout is applied by default.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Any:
        """Perform an HTTP request and return the decoded JSON body.

        Raises:
            APIError: on network failures, non‑JSON bodies and 4xx/5xx
                responses.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise APIError(DEFAULT_ERROR_MESSAGE) from exc

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = None
            if response.status_code < 400:
                logger.error("API returned a non-JSON body for %s %s", method, url)
                raise APIError(DEFAULT_ERROR_MESSAGE, response.status_code)

        if response.status_code >= 400:
            message = ""
            if isinstance(data, dict):
                message = data.get("error") or data.get("detail") or data.get("message") or ""
            message = str(message) if message else DEFAULT_ERROR_MESSAGE
            logger.error("API request failed (%s): %s", response.status_code, message)
            raise APIError(message, response.status_code)
        return data

    def send(self, method: str, endpoint: str, payload: Any | None = None) -> Any:
        """Perform a call prepared elsewhere, e.g. by a submitted editor form."""
        return self._request(method.upper(), endpoint, json_body=payload)

    @staticmethod
    def _page_params(page: int, limit: int, **filters: str) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": str(page), "limit": str(limit)}
        params.update({name: value for name, value in filters.items() if value})
        return params

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------
    def list_services(
        self, page: int = 1, limit: int = 15, search: str = "", categoria: str = "", segmento: str = ""
    ) -> Dict[str, Any]:
        params = self._page_params(page, limit, search=search, categoria=categoria, segmento=segmento)
        return self._request("GET", "/services", params=params)

    def count_services(self) -> int:
        return int(self._request("GET", "/services/count")["count"])

    def get_service(self, service_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/services/{_path_id(service_id)}")

    def create_service(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/services", json_body=data)

    def update_service(self, service_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/services/{_path_id(service_id)}", json_body=data)

    def delete_service(self, service_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/services/{_path_id(service_id)}")

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------
    def list_prices(self, page: int = 1, limit: int = 15, search: str = "", env: str = "") -> Dict[str, Any]:
        params = self._page_params(page, limit, search=search, env=env)
        return self._request("GET", "/prices", params=params)

    def count_prices(self) -> int:
        return int(self._request("GET", "/prices/count")["count"])

    def get_price(self, price_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/prices/{_path_id(price_id)}")

    def create_price(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/prices", json_body=data)

    def update_price(self, price_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/prices/{_path_id(price_id)}", json_body=data)

    def delete_price(self, price_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/prices/{_path_id(price_id)}")

    # ------------------------------------------------------------------
    # Collections and jactoUsers
    # ------------------------------------------------------------------
    def list_collections(self) -> List[str]:
        return self._request("GET", "/collections")

    def get_collection_documents(self, collection_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/collections/{_path_id(collection_id)}")

    def list_jacto_users(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/jacto-users")

    def get_jacto_user(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/jacto-users/{_path_id(user_id)}")

    def update_jacto_user(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/jacto-users/{_path_id(user_id)}", json_body=data)

    def delete_jacto_user(self, user_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/jacto-users/{_path_id(user_id)}")
