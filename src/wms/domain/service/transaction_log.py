"""Domain service: Transaction Log.

Append-only audit trail of every stock-affecting event, with the filtered,
newest-first paging used by the transactions view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from wms.domain.exceptions import ValidationError
from wms.domain.model.page import DEFAULT_LIMIT, Page, paginate
from wms.domain.model.transaction import Transaction, TransactionType
from wms.domain.repository.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionFilter:
    type: TransactionType | None = None
    warehouse_id: str | None = None
    date_from: date | datetime | None = None
    date_to: date | datetime | None = None


def _lower_bound(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _upper_bound(value: date | datetime) -> datetime:
    # A bare date covers the whole day.
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.max, tzinfo=timezone.utc)


class TransactionLog:

    def __init__(self, repo: TransactionRepository) -> None:
        self._repo = repo

    def append(self, entry: Transaction) -> Transaction:
        """Insert an entry; only required fields are checked."""
        return self.append_all([entry])[0]

    def append_all(self, entries: list[Transaction]) -> list[Transaction]:
        """Insert several entries in one write, all or none."""
        for entry in entries:
            self._check(entry)
        stored = self._repo.append_all(entries)
        for entry in stored:
            logger.info(
                "transaction #%s %s product=%s qty=%s warehouse=%s ref=%s",
                entry.id, entry.type.value, entry.product_id, entry.quantity,
                entry.warehouse_id, entry.reference_number or "-",
            )
        return stored

    @staticmethod
    def _check(entry: Transaction) -> None:
        if not entry.product_id:
            raise ValidationError("Transaction product is required")
        if not entry.warehouse_id:
            raise ValidationError("Transaction warehouse is required")
        if entry.quantity <= 0:
            raise ValidationError("Transaction quantity must be positive")
        if not entry.created_by:
            raise ValidationError("Transaction author is required")
        if entry.type == TransactionType.TRANSFER and not entry.to_warehouse_id:
            raise ValidationError("Transfer destination warehouse is required")

    def query(
        self,
        filters: TransactionFilter | None = None,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
    ) -> Page[Transaction]:
        """Return a newest-first page; ties are broken by ID, newest first."""
        filters = filters or TransactionFilter()
        rows = self._repo.list_all()

        if filters.type is not None:
            rows = [t for t in rows if t.type == filters.type]
        if filters.warehouse_id:
            rows = [
                t for t in rows
                if filters.warehouse_id in (t.warehouse_id, t.to_warehouse_id)
            ]
        if filters.date_from is not None:
            lower = _lower_bound(filters.date_from)
            rows = [t for t in rows if t.created_at >= lower]
        if filters.date_to is not None:
            upper = _upper_bound(filters.date_to)
            rows = [t for t in rows if t.created_at <= upper]

        rows.sort(key=lambda t: (t.created_at, t.id or 0), reverse=True)
        return paginate(rows, page, limit)

    def recent(self, count: int = 5) -> list[Transaction]:
        return self.query(page=1, limit=count).items

    def count(self) -> int:
        return len(self._repo.list_all())
