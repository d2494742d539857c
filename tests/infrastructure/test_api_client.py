"""Tests for the REST client, using httpx.MockTransport instead of a server."""

import json

import httpx
import pytest

from wms.domain.exceptions import (
    AuthError,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidTransitionError,
    NetworkError,
    ValidationError,
)
from wms.infrastructure.api.client import WmsApiClient

BASE_URL = "http://api.test/api"

LOGIN_DATA = {
    "token": {
        "access_token": "acc",
        "refresh_token": "ref",
        "expires_in": 3600,
        "token_type": "Bearer",
    },
    "user": {"id": 7, "name": "Ana", "email": "ana@wms.id", "role": "admin", "warehouseId": "1"},
}


def _envelope(data=None, message="OK", success=True):
    return {"success": success, "message": message, "data": data}


def _client(handler, token=None) -> WmsApiClient:
    return WmsApiClient(
        BASE_URL,
        token_provider=lambda: token,
        transport=httpx.MockTransport(handler),
    )


class TestRequests:

    def test_unwraps_envelope(self):
        def handler(request):
            return httpx.Response(200, json=_envelope([{"id": "1"}]))

        assert _client(handler).list_warehouses() == [{"id": "1"}]

    def test_sends_bearer_token(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=_envelope({}))

        _client(handler, token="abc").dashboard_stats()
        assert seen["auth"] == "Bearer abc"

    def test_no_token_no_header(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=_envelope({}))

        _client(handler).dashboard_stats()
        assert seen["auth"] is None

    def test_order_filters_become_query_params(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return httpx.Response(200, json=_envelope([]))

        _client(handler).list_orders(page=2, limit=5, status="confirmed")
        assert seen["url"].path == "/api/orders"
        assert dict(seen["url"].params) == {"page": "2", "limit": "5", "status": "confirmed"}

    def test_transaction_filters_use_camel_case(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=_envelope([]))

        _client(handler).list_transactions(warehouse_id="2", date_from="2024-05-01")
        assert seen["params"] == {
            "page": "1", "limit": "10", "warehouseId": "2", "dateFrom": "2024-05-01",
        }

    def test_status_update_body(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_envelope({"id": 3, "status": "confirmed"}))

        _client(handler).update_order_status(3, "confirmed")
        assert seen == {
            "method": "PUT",
            "path": "/api/orders/3/status",
            "body": {"status": "confirmed"},
        }


    @pytest.mark.parametrize("call, method, path, body", [
        (lambda c: c.create_product({"name": "Widget"}), "POST", "/api/products", {"name": "Widget"}),
        (lambda c: c.update_product("5", {"minStock": 3}), "PUT", "/api/products/5", {"minStock": 3}),
        (lambda c: c.delete_product("5"), "DELETE", "/api/products/5", None),
        (lambda c: c.create_warehouse({"name": "Depot"}), "POST", "/api/warehouses", {"name": "Depot"}),
        (lambda c: c.update_warehouse("2", {"isActive": False}), "PUT", "/api/warehouses/2", {"isActive": False}),
        (lambda c: c.delete_warehouse("2"), "DELETE", "/api/warehouses/2", None),
        (
            lambda c: c.create_transaction({"type": "inbound", "quantity": 4}),
            "POST", "/api/transactions", {"type": "inbound", "quantity": 4},
        ),
    ])
    def test_write_endpoints(self, call, method, path, body):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content) if request.content else None
            return httpx.Response(200, json=_envelope({"id": "5"}))

        call(_client(handler, token="abc"))
        assert seen == {"method": method, "path": path, "body": body}

    def test_product_filters_pass_through(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=_envelope({"products": [], "total": 0}))

        data = _client(handler).list_products(warehouseId="1", search=None, limit=1000)
        assert seen["params"] == {"warehouseId": "1", "limit": "1000"}
        assert data == {"products": [], "total": 0}


class TestErrorMapping:

    @pytest.mark.parametrize("status, message, expected", [
        (401, "Token expired", AuthError),
        (403, "Forbidden", AuthError),
        (404, "Order not found", EntityNotFoundError),
        (409, "Cannot ship a pending order", InvalidTransitionError),
        (400, "customer_name is required", ValidationError),
        (422, "Insufficient stock for Widget", InsufficientStockError),
        (500, "boom", NetworkError),
        (503, "unavailable", NetworkError),
    ])
    def test_http_errors(self, status, message, expected):
        def handler(request):
            return httpx.Response(status, json=_envelope(message=message, success=False))

        with pytest.raises(expected):
            _client(handler).create_order({})

    def test_unsuccessful_envelope_with_200(self):
        def handler(request):
            return httpx.Response(200, json=_envelope(message="SKU taken", success=False))

        with pytest.raises(ValidationError, match="SKU taken"):
            _client(handler).create_product({})

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="failed"):
            _client(handler).list_products()

    def test_non_json_error_body(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        with pytest.raises(NetworkError, match="502"):
            _client(handler).list_products()


class TestAuthGateway:

    def test_login(self):
        def handler(request):
            assert request.url.path == "/api/auth/login"
            assert json.loads(request.content) == {"email": "ana@wms.id", "password": "pw"}
            return httpx.Response(200, json=_envelope(LOGIN_DATA))

        result = _client(handler).login("ana@wms.id", "pw")
        assert result.tokens.access_token == "acc"
        assert result.tokens.expires_in == 3600
        assert result.user.id == "7"
        assert result.user.warehouse_id == "1"

    def test_refresh_uses_refresh_token_endpoint(self):
        def handler(request):
            assert request.url.path == "/api/auth/refresh_token"
            assert json.loads(request.content) == {"refresh_token": "ref"}
            return httpx.Response(200, json=_envelope(LOGIN_DATA))

        assert _client(handler).refresh_token("ref").tokens.refresh_token == "ref"

    def test_malformed_login_response(self):
        def handler(request):
            return httpx.Response(200, json=_envelope({"user": {}}))

        with pytest.raises(NetworkError, match="Malformed"):
            _client(handler).login("ana@wms.id", "pw")


class TestFetchLatest:

    def test_superseded_read_returns_none(self):
        client = _client(lambda request: httpx.Response(200, json=_envelope([])))

        def slow_read():
            # a newer read with the same key starts while this one is in flight
            assert client.fetch_latest("products", lambda: "newer") == "newer"
            return "older"

        assert client.fetch_latest("products", slow_read) is None

    def test_other_keys_are_independent(self):
        client = _client(lambda request: httpx.Response(200, json=_envelope([])))

        def read():
            client.fetch_latest("orders", lambda: "orders")
            return "products"

        assert client.fetch_latest("products", read) == "products"

    def test_latest_read_delivers(self):
        def handler(request):
            return httpx.Response(200, json=_envelope([{"id": "1"}]))

        client = _client(handler)
        assert client.fetch_latest("products", client.list_products) == [{"id": "1"}]
