"""Product aggregate — a catalog entry and its stock ledger in one warehouse.

Product records are keyed by warehouse: the same SKU stocked in two
warehouses is two Product records, each with its own counters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from wms.domain.exceptions import (
    InsufficientStockError,
    InvalidStateError,
    ValidationError,
)
from wms.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """Aggregate root for a stocked product.

    Invariants:
    - ``reserved_stock`` can never exceed ``stock``
    - ``available_stock`` is always ``stock - reserved_stock`` and >= 0

    Stock counters only change through the ledger methods below; the
    ``StockLedger`` domain service wraps them with locking and audit entries.
    """

    id: str
    name: str
    sku: str
    price: Money
    warehouse_id: str
    stock: int = 0
    reserved_stock: int = 0
    min_stock: int = 0
    description: str = ""
    category: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.stock < 0 or self.reserved_stock < 0:
            raise ValidationError("Stock counters cannot be negative")
        if self.reserved_stock > self.stock:
            raise ValidationError(
                f"Reserved stock {self.reserved_stock} exceeds stock {self.stock} "
                f"for {self.sku}"
            )

    @property
    def available_stock(self) -> int:
        return self.stock - self.reserved_stock

    @property
    def is_low_stock(self) -> bool:
        return self.available_stock <= self.min_stock

    # --- Ledger operations ----------------------------------------------------

    def reserve(self, quantity: int) -> None:
        """Hold stock against a pending order; physical stock is unchanged."""
        qty = Quantity(quantity).value
        if qty > self.available_stock:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {qty}, have {self.available_stock} available)"
            )
        self.reserved_stock += qty
        self._touch()

    def release(self, quantity: int) -> None:
        """Reverse a reservation (cancel or expiry)."""
        qty = Quantity(quantity).value
        if qty > self.reserved_stock:
            raise InvalidStateError(
                f"Cannot release {qty} of {self.name}: "
                f"only {self.reserved_stock} currently reserved"
            )
        self.reserved_stock -= qty
        self._touch()

    def ship_out(self, quantity: int) -> None:
        """Turn a reservation into a physical decrement.

        ``available_stock`` does not move: it already dropped at reserve time.
        """
        qty = Quantity(quantity).value
        if qty > self.reserved_stock:
            raise InvalidStateError(
                f"Cannot ship {qty} of {self.name}: "
                f"only {self.reserved_stock} currently reserved"
            )
        self.reserved_stock -= qty
        self.stock -= qty
        self._touch()

    def dispatch(self, quantity: int) -> None:
        """Ship unreserved stock directly (outbound not backed by an order)."""
        qty = Quantity(quantity).value
        if qty > self.available_stock:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {qty}, have {self.available_stock} available)"
            )
        self.stock -= qty
        self._touch()

    def receive_in(self, quantity: int) -> None:
        qty = Quantity(quantity).value
        self.stock += qty
        self._touch()

    def transfer_out(self, quantity: int) -> None:
        """Send stock to another warehouse; reserved units never leave."""
        qty = Quantity(quantity).value
        if qty > self.available_stock:
            raise InsufficientStockError(
                f"Cannot transfer {qty} of {self.name} "
                f"(have {self.available_stock} available)"
            )
        self.stock -= qty
        self._touch()

    def transfer_in(self, quantity: int) -> None:
        qty = Quantity(quantity).value
        self.stock += qty
        self._touch()

    # --- Catalog updates ------------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        price: Money | None = None,
        min_stock: int | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> None:
        """Change catalog fields.

        Existing orders keep the price they captured at creation time.
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if price is not None:
            self.price = price
        if min_stock is not None:
            if min_stock < 0:
                raise ValidationError("Minimum stock cannot be negative")
            self.min_stock = min_stock
        if description is not None:
            self.description = description
        if category is not None:
            self.category = category
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _utcnow()
