"""Application service: Record Outbound use case.

Ships unreserved stock out of an active warehouse, outside any order.
"""

from __future__ import annotations

from enum import Enum

from wms.application.dto import ProductDTO, product_to_dto
from wms.application.record_inbound import join_notes
from wms.domain.exceptions import ValidationError
from wms.domain.service.stock_ledger import SYSTEM_USER, StockLedger


class DestinationType(Enum):
    CUSTOMER = "customer"
    RETURN = "return"
    TRANSFER = "transfer"
    DISPOSAL = "disposal"


class RecordOutboundHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        quantity: int,
        destination_type: str,
        destination_name: str,
        reference_number: str = "",
        notes: str = "",
        created_by: str = SYSTEM_USER,
    ) -> ProductDTO:
        try:
            destination = DestinationType(destination_type)
        except ValueError:
            allowed = ", ".join(d.value for d in DestinationType)
            raise ValidationError(
                f"Unknown destination type '{destination_type}'. Expected one of: {allowed}"
            ) from None
        if not destination_name or not destination_name.strip():
            raise ValidationError("Destination name is required")

        product = self._ledger.dispatch(
            product_id,
            quantity,
            reference=reference_number,
            created_by=created_by,
            notes=join_notes(f"{destination.value}: {destination_name.strip()}", notes),
        )
        return product_to_dto(product)
