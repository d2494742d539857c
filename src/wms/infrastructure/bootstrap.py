"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Services that hold
locks are built once per process so every command shares them.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from wms.application.preferences import Preferences
from wms.application.session import AuthService
from wms.domain.service.reservation_engine import ReservationEngine
from wms.domain.service.stock_ledger import StockLedger
from wms.domain.service.transaction_log import TransactionLog
from wms.infrastructure.api.client import WmsApiClient
from wms.infrastructure.persistence.file_locks import InterProcessLocks
from wms.infrastructure.persistence.json_key_value_store import JsonKeyValueStore
from wms.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from wms.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from wms.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)
from wms.infrastructure.persistence.json_warehouse_repository import (
    JsonWarehouseRepository,
)
from wms.infrastructure.settings import get_settings


def _data_dir() -> Path:
    return Path(get_settings().DATA_DIR).expanduser()


@lru_cache(maxsize=1)
def product_repository() -> JsonProductRepository:
    return JsonProductRepository(_data_dir() / "products.json")


@lru_cache(maxsize=1)
def warehouse_repository() -> JsonWarehouseRepository:
    return JsonWarehouseRepository(_data_dir() / "warehouses.json")


@lru_cache(maxsize=1)
def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(_data_dir() / "orders.json")


@lru_cache(maxsize=1)
def transaction_log() -> TransactionLog:
    return TransactionLog(JsonTransactionRepository(_data_dir() / "transactions.json"))


@lru_cache(maxsize=1)
def ledger_locks() -> InterProcessLocks:
    """Product and order locks, shared with every other process on the data dir."""
    return InterProcessLocks.in_directory(_data_dir())


@lru_cache(maxsize=1)
def stock_ledger() -> StockLedger:
    return StockLedger(
        product_repository(),
        warehouse_repository(),
        transaction_log(),
        locks=ledger_locks(),
    )


@lru_cache(maxsize=1)
def reservation_engine() -> ReservationEngine:
    return ReservationEngine(stock_ledger(), order_locks=ledger_locks())


@lru_cache(maxsize=1)
def client_storage() -> JsonKeyValueStore:
    return JsonKeyValueStore(_data_dir() / "session.json")


def preferences() -> Preferences:
    return Preferences(client_storage())


@lru_cache(maxsize=1)
def api_client() -> WmsApiClient:
    settings = get_settings()
    return WmsApiClient(settings.API_URL, timeout=settings.HTTP_TIMEOUT)


@lru_cache(maxsize=1)
def auth_service() -> AuthService:
    client = api_client()
    service = AuthService(
        client,
        client_storage(),
        refresh_lead_seconds=get_settings().TOKEN_REFRESH_LEAD_SECONDS,
    )
    client.set_token_provider(lambda: service.access_token)
    return service


def reset() -> None:
    """Drop every cached service, e.g. after the data directory changes."""
    for factory in (
        product_repository,
        warehouse_repository,
        order_repository,
        transaction_log,
        ledger_locks,
        stock_ledger,
        reservation_engine,
        client_storage,
        api_client,
        auth_service,
    ):
        factory.cache_clear()
