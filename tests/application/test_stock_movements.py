"""Integration tests for inbound, outbound and transfer use cases."""

from datetime import date

import pytest

from tests.world import build_world, make_product
from wms.application.list_transactions import ListTransactionsHandler
from wms.application.record_inbound import RecordInboundHandler
from wms.application.record_outbound import RecordOutboundHandler
from wms.application.transfer_stock import TransferStockHandler
from wms.domain.exceptions import InsufficientStockError, ValidationError


class TestRecordInbound:

    def test_adds_stock_and_logs_supplier(self):
        world = build_world([make_product("1", stock=10)])
        dto = RecordInboundHandler(world.ledger).handle(
            "1", 40, "PT Sumber Makmur", reference_number="PO-001", notes="pallet 3"
        )
        assert (dto.stock, dto.available_stock) == (50, 50)
        entry = world.transactions.list_all()[0]
        assert entry.type.value == "inbound"
        assert entry.notes == "supplier: PT Sumber Makmur; pallet 3"

    def test_supplier_required(self):
        world = build_world()
        with pytest.raises(ValidationError, match="Supplier name is required"):
            RecordInboundHandler(world.ledger).handle("1", 5, "  ")
        assert world.log.count() == 0

    def test_inactive_warehouse_rejected(self):
        world = build_world([make_product("1", warehouse_id="3")])
        with pytest.raises(ValidationError, match="inactive"):
            RecordInboundHandler(world.ledger).handle("1", 5, "Supplier")


class TestRecordOutbound:

    @pytest.mark.parametrize("destination_type", ["customer", "return", "transfer", "disposal"])
    def test_accepted_destination_types(self, destination_type):
        world = build_world([make_product("1", stock=10)])
        dto = RecordOutboundHandler(world.ledger).handle("1", 4, destination_type, "Toko Budi")
        assert dto.stock == 6

    def test_unknown_destination_type(self):
        world = build_world()
        with pytest.raises(ValidationError, match="Unknown destination type"):
            RecordOutboundHandler(world.ledger).handle("1", 1, "warehouse", "X")

    def test_reserved_units_cannot_be_shipped(self):
        world = build_world([make_product("1", stock=10, reserved_stock=8)])
        with pytest.raises(InsufficientStockError):
            RecordOutboundHandler(world.ledger).handle("1", 3, "customer", "Toko Budi")
        assert world.counters("1") == (10, 8, 2)


class TestTransferStock:

    def test_moves_stock_between_warehouses(self):
        world = build_world([make_product("1", warehouse_id="1", stock=50)])
        result = TransferStockHandler(world.ledger).handle("1", "2", 20, reference_number="TRF-9")
        assert result.source.stock == 30
        assert result.destination.stock == 20
        assert result.destination.warehouse_id == "2"
        assert world.log.count() == 1


class TestListTransactions:

    def _world_with_history(self):
        world = build_world([make_product("1", warehouse_id="1", stock=50)])
        RecordInboundHandler(world.ledger).handle("1", 10, "Supplier")
        world.clock.advance(minutes=1)
        TransferStockHandler(world.ledger).handle("1", "2", 5)
        world.clock.advance(minutes=1)
        RecordOutboundHandler(world.ledger).handle("1", 2, "customer", "Toko Budi")
        return world

    def test_newest_first(self):
        world = self._world_with_history()
        page = ListTransactionsHandler(world.log).handle()
        assert [t.type for t in page.items] == ["outbound", "transfer", "inbound"]

    def test_filter_by_destination_warehouse(self):
        world = self._world_with_history()
        page = ListTransactionsHandler(world.log).handle(warehouse_id="2")
        assert [t.type for t in page.items] == ["transfer"]
        assert page.items[0].to_warehouse_id == "2"

    def test_filter_by_type_string(self):
        world = self._world_with_history()
        page = ListTransactionsHandler(world.log).handle(type="inbound")
        assert page.total == 1

    def test_date_range(self):
        world = self._world_with_history()
        handler = ListTransactionsHandler(world.log)
        assert handler.handle(date_from=date(2024, 5, 1), date_to=date(2024, 5, 1)).total == 3
        assert handler.handle(date_from=date(2024, 5, 2)).total == 0

    def test_unknown_type_rejected(self):
        world = build_world()
        with pytest.raises(ValidationError, match="Unknown transaction type"):
            ListTransactionsHandler(world.log).handle(type="refund")

    def test_inverted_range_rejected(self):
        world = build_world()
        with pytest.raises(ValidationError, match="Start date"):
            ListTransactionsHandler(world.log).handle(
                date_from=date(2024, 5, 2), date_to=date(2024, 5, 1)
            )
