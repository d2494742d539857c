"""Transaction — an append-only audit entry for one stock movement."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TransactionType(Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"
    TRANSFER = "transfer"
    CHECKOUT = "checkout"
    RELEASE = "release"


@dataclass(frozen=True)
class Transaction:
    """One ledger mutation.

    A transfer is a single entry carrying both ``warehouse_id`` (source)
    and ``to_warehouse_id`` (destination).  ``id`` is None until the log
    assigns one.
    """

    id: int | None
    type: TransactionType
    product_id: str
    quantity: int
    warehouse_id: str
    created_by: str
    created_at: datetime
    to_warehouse_id: str | None = None
    reference_number: str = ""
    notes: str = ""
