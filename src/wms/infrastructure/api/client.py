"""HTTP client for the warehouse REST API.

Every response is wrapped in a ``{success, message, data}`` envelope; the
client unwraps ``data`` and turns failures into the domain exception
taxonomy so callers handle remote and local errors the same way.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from wms.application.ports import AuthGateway, AuthTokens, LoginResult, User
from wms.domain.exceptions import (
    AuthError,
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidTransitionError,
    NetworkError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_for(status_code: int, message: str) -> DomainException:
    """Map an HTTP error status onto a domain exception."""
    if status_code in (401, 403):
        return AuthError(message)
    if status_code == 404:
        return EntityNotFoundError(message)
    if status_code == 409:
        return InvalidTransitionError(message)
    if status_code in (400, 422):
        if "insufficient stock" in message.lower():
            return InsufficientStockError(message)
        return ValidationError(message)
    return NetworkError(f"Server error {status_code}: {message}")


def _drop_none(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None and v != ""}


class WmsApiClient(AuthGateway):
    """Synchronous client over the REST endpoints.

    ``token_provider`` supplies the bearer token for each request, which
    lets the session service swap tokens without rebuilding the client.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        token_provider: Callable[[], str | None] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token_provider = token_provider or (lambda: None)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )
        self._latest: dict[str, int] = {}
        self._latest_lock = threading.Lock()

    def set_token_provider(self, provider: Callable[[], str | None]) -> None:
        self._token_provider = provider

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> WmsApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # --- Auth (AuthGateway) ---------------------------------------------------

    def login(self, email: str, password: str) -> LoginResult:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._login_result(data)

    def refresh_token(self, refresh_token: str) -> LoginResult:
        data = self._request(
            "POST", "/auth/refresh_token", json={"refresh_token": refresh_token}
        )
        return self._login_result(data)

    def logout(self, refresh_token: str) -> None:
        self._request("POST", "/auth/logout", json={"refresh_token": refresh_token})

    def me(self) -> User:
        data = self._request("GET", "/auth/me")
        return User.from_dict(data.get("user", data))

    # --- Products -------------------------------------------------------------

    def list_products(self, **params: Any) -> Any:
        return self._request("GET", "/products", params=_drop_none(params))

    def create_product(self, payload: dict[str, Any]) -> dict:
        return self._request("POST", "/products", json=payload)

    def update_product(self, product_id: str, payload: dict[str, Any]) -> dict:
        return self._request("PUT", f"/products/{product_id}", json=payload)

    def delete_product(self, product_id: str) -> None:
        self._request("DELETE", f"/products/{product_id}")

    # --- Warehouses -----------------------------------------------------------

    def list_warehouses(self) -> Any:
        return self._request("GET", "/warehouses")

    def create_warehouse(self, payload: dict[str, Any]) -> dict:
        return self._request("POST", "/warehouses", json=payload)

    def update_warehouse(self, warehouse_id: str, payload: dict[str, Any]) -> dict:
        return self._request("PUT", f"/warehouses/{warehouse_id}", json=payload)

    def delete_warehouse(self, warehouse_id: str) -> None:
        self._request("DELETE", f"/warehouses/{warehouse_id}")

    # --- Orders ---------------------------------------------------------------

    def list_orders(
        self,
        page: int = 1,
        limit: int = 10,
        warehouse_id: str | None = None,
        status: str | None = None,
    ) -> Any:
        params = _drop_none(
            {"page": page, "limit": limit, "warehouse_id": warehouse_id, "status": status}
        )
        return self._request("GET", "/orders", params=params)

    def create_order(self, payload: dict[str, Any]) -> dict:
        return self._request("POST", "/orders", json=payload)

    def update_order_status(self, order_id: int | str, status: str) -> dict:
        return self._request("PUT", f"/orders/{order_id}/status", json={"status": status})

    # --- Transactions ---------------------------------------------------------

    def list_transactions(
        self,
        page: int = 1,
        limit: int = 10,
        warehouse_id: str | None = None,
        type: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> Any:
        params = _drop_none({
            "page": page,
            "limit": limit,
            "warehouseId": warehouse_id,
            "type": type,
            "dateFrom": date_from,
            "dateTo": date_to,
        })
        return self._request("GET", "/transactions", params=params)

    def create_transaction(self, payload: dict[str, Any]) -> dict:
        return self._request("POST", "/transactions", json=payload)

    # --- Dashboard ------------------------------------------------------------

    def dashboard_stats(self) -> dict:
        return self._request("GET", "/dashboard/stats")

    # --- Latest-only reads ----------------------------------------------------

    def fetch_latest(self, key: str, fn: Callable[..., T], *args, **kwargs) -> T | None:
        """Run a read; return None if a newer read with ``key`` started meanwhile.

        Only use this for reads: the request itself still completes, its
        result is just not delivered.
        """
        with self._latest_lock:
            ticket = self._latest.get(key, 0) + 1
            self._latest[key] = ticket

        result = fn(*args, **kwargs)

        with self._latest_lock:
            if self._latest.get(key) != ticket:
                logger.debug("dropping superseded %s response", key)
                return None
        return result

    # --- Internal helpers -----------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        headers = {}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._client.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"Request to {path} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}

        message = ""
        if isinstance(body, dict):
            message = body.get("message") or ""

        if response.is_error:
            logger.warning("%s %s -> %s %s", method, path, response.status_code, message)
            raise error_for(response.status_code, message or response.reason_phrase)

        if isinstance(body, dict) and "success" in body:
            if not body["success"]:
                raise error_for(400, message or "Request was not successful")
            return body.get("data")
        return body

    @staticmethod
    def _login_result(data: dict[str, Any]) -> LoginResult:
        try:
            return LoginResult(
                tokens=AuthTokens.from_dict(data["token"]),
                user=User.from_dict(data["user"]),
            )
        except (KeyError, TypeError) as exc:
            raise NetworkError(f"Malformed authentication response: {exc}") from exc
