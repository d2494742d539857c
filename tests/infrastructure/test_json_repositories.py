"""Tests for the JSON-file repositories against a temporary directory."""

import json
from datetime import datetime, timedelta, timezone

from wms.domain.model.order import Order, OrderLineItem, OrderStatus
from wms.domain.model.product import Product
from wms.domain.model.transaction import Transaction, TransactionType
from wms.domain.model.value_objects import Money, Quantity
from wms.domain.model.warehouse import Warehouse
from wms.infrastructure.persistence.json_key_value_store import JsonKeyValueStore
from wms.infrastructure.persistence.json_order_repository import JsonOrderRepository
from wms.infrastructure.persistence.json_product_repository import JsonProductRepository
from wms.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)
from wms.infrastructure.persistence.json_warehouse_repository import (
    JsonWarehouseRepository,
)

NOW = datetime(2024, 5, 1, 9, 30, 0, tzinfo=timezone.utc)


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonProductRepository(tmp_path / "data" / "products.json")
        assert json.loads((tmp_path / "data" / "products.json").read_text()) == []

    def test_save_and_reload(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(
            id=repo.next_id(), name="Widget", sku="WID-001", price=Money.of("10000.50"),
            warehouse_id="1", stock=100, reserved_stock=30, min_stock=10,
        ))

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id("1")
        assert loaded.price == Money.of("10000.50")
        assert (loaded.stock, loaded.reserved_stock, loaded.available_stock) == (100, 30, 70)

    def test_sku_lookup_is_per_warehouse(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(id="1", name="W", sku="WID-001", price=Money.of(1), warehouse_id="1"))
        assert repo.get_by_sku("wid-001", "1").id == "1"
        assert repo.get_by_sku("WID-001", "2") is None
        assert repo.next_id() == "2"

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(id="1", name="W", sku="W", price=Money.of(1), warehouse_id="1"))
        repo.delete("1")
        assert repo.list_all() == []


class TestJsonWarehouseRepository:

    def test_round_trip_keeps_flags(self, tmp_path):
        repo = JsonWarehouseRepository(tmp_path / "warehouses.json")
        repo.save(Warehouse(id="1", name="Depot", is_active=False, capacity=500, code="DPT"))
        loaded = repo.get_by_id("1")
        assert loaded.is_active is False
        assert loaded.capacity == 500


class TestJsonOrderRepository:

    def _order(self) -> Order:
        return Order.create(
            order_number="ORD20240501093000",
            customer_id="C-1",
            customer_name="Alice",
            warehouse_id="1",
            items=[OrderLineItem("1", "Widget", "WID-001", Quantity(2), Money.of("10000"))],
            created_at=NOW,
            expires_in=timedelta(hours=1),
        )

    def test_save_assigns_id_and_reloads(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        repo.save(order)
        assert order.id == 1

        loaded = repo.get_by_order_number("ORD20240501093000")
        assert loaded.status == OrderStatus.PENDING_PAYMENT
        assert loaded.expires_at == NOW + timedelta(hours=1)
        assert loaded.total_amount == Money.of("20000")
        assert loaded.updated_at is None

    def test_upsert(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        repo.save(order)
        order.transition_to(OrderStatus.CONFIRMED, NOW)
        repo.save(order)
        assert len(repo.list_all()) == 1
        assert repo.get_by_id(1).status == OrderStatus.CONFIRMED

    def test_delete(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        repo.save(order)
        repo.delete(order.id)
        repo.delete(99)
        assert repo.list_all() == []


class TestJsonTransactionRepository:

    def test_append_assigns_sequential_ids(self, tmp_path):
        repo = JsonTransactionRepository(tmp_path / "transactions.json")
        entry = Transaction(
            id=None, type=TransactionType.TRANSFER, product_id="1", quantity=5,
            warehouse_id="1", to_warehouse_id="2", created_by="system", created_at=NOW,
        )
        assert repo.append(entry).id == 1
        assert repo.append(entry).id == 2
        loaded = repo.list_all()
        assert [t.id for t in loaded] == [1, 2]
        assert loaded[0].to_warehouse_id == "2"
        assert loaded[0].created_at == NOW

    def test_append_all_writes_batch(self, tmp_path):
        repo = JsonTransactionRepository(tmp_path / "transactions.json")
        entries = [
            Transaction(
                id=None, type=TransactionType.CHECKOUT, product_id=pid, quantity=1,
                warehouse_id="1", reference_number="ORD-1", created_by="system",
                created_at=NOW,
            )
            for pid in ("1", "2")
        ]
        stored = repo.append_all(entries)
        assert [(t.id, t.product_id) for t in stored] == [(1, "1"), (2, "2")]
        assert len(JsonTransactionRepository(tmp_path / "transactions.json").list_all()) == 2


class TestJsonKeyValueStore:

    def test_set_get_remove(self, tmp_path):
        store = JsonKeyValueStore(tmp_path / "session.json")
        store.set("theme", "dark")
        assert JsonKeyValueStore(tmp_path / "session.json").get("theme") == "dark"
        store.remove("theme")
        store.remove("missing")
        assert store.get("theme") is None
