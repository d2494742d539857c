"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and its status
state machine.  Stock effects of a transition are applied by the
``ReservationEngine``; the aggregate only decides whether a transition is
allowed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from wms.domain.exceptions import InvalidTransitionError, ValidationError
from wms.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING_PAYMENT = "pending_payment"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


TERMINAL_STATUSES = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.EXPIRED}
)

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING_PAYMENT: frozenset(
        {OrderStatus.CONFIRMED, OrderStatus.CANCELLED, OrderStatus.EXPIRED}
    ),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
}

MAX_LINE_ITEMS = 50
DEFAULT_EXPIRY_WINDOW = timedelta(hours=1)


def generate_order_number(moment: datetime) -> str:
    """``ORD`` followed by the creation time as ``YYYYMMDDHHMMSS``."""
    return "ORD" + moment.strftime("%Y%m%d%H%M%S")


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price of a product at order-creation time."""

    product_id: str
    product_name: str
    sku: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    customer_id: str
    customer_name: str
    warehouse_id: str
    items: list[OrderLineItem]
    expires_at: datetime
    status: OrderStatus = OrderStatus.PENDING_PAYMENT
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        customer_id: str,
        customer_name: str,
        warehouse_id: str,
        items: list[OrderLineItem],
        created_at: datetime,
        expires_in: timedelta,
        notes: str = "",
    ) -> Order:
        """Create a new order in ``pending_payment``, enforcing all invariants."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not warehouse_id:
            raise ValidationError("Warehouse is required")
        if not items:
            raise ValidationError("Order must contain at least one item")
        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")
        if expires_in <= timedelta(0):
            raise ValidationError("Order expiry window must be positive")

        product_ids = [item.product_id for item in items]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError("Each product may appear only once per order")

        return Order(
            id=None,
            order_number=order_number,
            customer_id=customer_id.strip(),
            customer_name=customer_name.strip(),
            warehouse_id=warehouse_id,
            items=list(items),
            expires_at=created_at + expires_in,
            notes=notes.strip(),
            created_at=created_at,
        )

    # --- State machine --------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS.get(self.status, frozenset())

    def ensure_can_transition(self, target: OrderStatus, now: datetime) -> None:
        """Raise InvalidTransitionError unless ``target`` is reachable now."""
        if not self.can_transition_to(target):
            raise InvalidTransitionError(
                f"Cannot move order {self.order_number} from "
                f"{self.status.value} to {target.value}"
            )
        if target == OrderStatus.EXPIRED and not self.is_past_deadline(now):
            raise InvalidTransitionError(
                f"Order {self.order_number} has not reached its expiry deadline"
            )

    def transition_to(self, target: OrderStatus, now: datetime) -> None:
        self.ensure_can_transition(target, now)
        self.status = target
        self.updated_at = now

    def is_past_deadline(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_due_for_expiry(self, now: datetime) -> bool:
        return self.status == OrderStatus.PENDING_PAYMENT and self.is_past_deadline(now)

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency) if self.items else Money.zero()
        for item in self.items:
            result = result + item.total_price
        return result
