"""Tests for the TransactionLog: validation, filtering and ordering."""

from datetime import date, datetime, timedelta, timezone

import pytest

from tests.fakes import FakeTransactionRepository
from wms.domain.exceptions import ValidationError
from wms.domain.model.transaction import Transaction, TransactionType
from wms.domain.service.transaction_log import TransactionFilter, TransactionLog

BASE = datetime(2024, 5, 1, 8, 0, 0, tzinfo=timezone.utc)


def _entry(type=TransactionType.INBOUND, warehouse_id="1", to_warehouse_id=None,
           at=BASE, quantity=5) -> Transaction:
    return Transaction(
        id=None,
        type=type,
        product_id="1",
        quantity=quantity,
        warehouse_id=warehouse_id,
        to_warehouse_id=to_warehouse_id,
        created_by="system",
        created_at=at,
    )


@pytest.fixture
def log() -> TransactionLog:
    return TransactionLog(FakeTransactionRepository())


class TestAppend:

    def test_assigns_ids(self, log):
        first = log.append(_entry())
        second = log.append(_entry())
        assert (first.id, second.id) == (1, 2)

    def test_zero_quantity_rejected(self, log):
        with pytest.raises(ValidationError, match="quantity must be positive"):
            log.append(_entry(quantity=0))

    def test_transfer_needs_destination(self, log):
        with pytest.raises(ValidationError, match="destination warehouse"):
            log.append(_entry(type=TransactionType.TRANSFER))


class TestQuery:

    def test_newest_first(self, log):
        log.append(_entry(at=BASE))
        log.append(_entry(at=BASE + timedelta(hours=2)))
        log.append(_entry(at=BASE + timedelta(hours=1)))
        page = log.query()
        assert [t.id for t in page.items] == [2, 3, 1]

    def test_ties_broken_by_id(self, log):
        for _ in range(3):
            log.append(_entry(at=BASE))
        assert [t.id for t in log.query().items] == [3, 2, 1]

    def test_filter_by_type(self, log):
        log.append(_entry(type=TransactionType.INBOUND))
        log.append(_entry(type=TransactionType.CHECKOUT))
        page = log.query(TransactionFilter(type=TransactionType.CHECKOUT))
        assert [t.type for t in page.items] == [TransactionType.CHECKOUT]

    def test_warehouse_filter_matches_transfer_destination(self, log):
        log.append(_entry(warehouse_id="1"))
        log.append(_entry(type=TransactionType.TRANSFER, warehouse_id="1", to_warehouse_id="2"))
        log.append(_entry(warehouse_id="3"))
        page = log.query(TransactionFilter(warehouse_id="2"))
        assert [t.id for t in page.items] == [2]

    def test_bare_date_to_covers_whole_day(self, log):
        log.append(_entry(at=datetime(2024, 5, 1, 23, 59, tzinfo=timezone.utc)))
        log.append(_entry(at=datetime(2024, 5, 2, 0, 1, tzinfo=timezone.utc)))
        page = log.query(TransactionFilter(date_from=date(2024, 5, 1), date_to=date(2024, 5, 1)))
        assert [t.id for t in page.items] == [1]

    def test_paging(self, log):
        for i in range(12):
            log.append(_entry(at=BASE + timedelta(minutes=i)))
        page = log.query(page=2, limit=5)
        assert [t.id for t in page.items] == [7, 6, 5, 4, 3]
        assert page.total == 12
        assert page.total_pages == 3

    def test_recent(self, log):
        for i in range(8):
            log.append(_entry(at=BASE + timedelta(minutes=i)))
        assert [t.id for t in log.recent()] == [8, 7, 6, 5, 4]
