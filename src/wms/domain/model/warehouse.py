"""Warehouse aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from wms.domain.exceptions import ValidationError


@dataclass
class Warehouse:
    """A physical site that houses product records.

    Only active warehouses may take part in new stock operations: new
    orders, outbound shipments, inbound receipts and transfers.
    """

    id: str
    name: str
    is_active: bool = True
    capacity: int = 0
    code: str = ""
    address: str = ""
    manager: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def ensure_active(self) -> None:
        if not self.is_active:
            raise ValidationError(
                f"Warehouse '{self.name}' is inactive and cannot be used "
                f"for new stock operations"
            )

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Warehouse name is required")
        self.name = name.strip()

    def set_capacity(self, capacity: int) -> None:
        if capacity < 0:
            raise ValidationError("Warehouse capacity cannot be negative")
        self.capacity = capacity
