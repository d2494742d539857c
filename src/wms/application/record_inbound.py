"""Application service: Record Inbound use case.

Stock received from a supplier into an active warehouse.
"""

from __future__ import annotations

from wms.application.dto import ProductDTO, product_to_dto
from wms.domain.exceptions import ValidationError
from wms.domain.service.stock_ledger import SYSTEM_USER, StockLedger


class RecordInboundHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        quantity: int,
        supplier_name: str,
        reference_number: str = "",
        notes: str = "",
        created_by: str = SYSTEM_USER,
    ) -> ProductDTO:
        if not supplier_name or not supplier_name.strip():
            raise ValidationError("Supplier name is required")

        product = self._ledger.receive_in(
            product_id,
            quantity,
            reference=reference_number,
            created_by=created_by,
            notes=join_notes(f"supplier: {supplier_name.strip()}", notes),
        )
        return product_to_dto(product)


def join_notes(*parts: str) -> str:
    return "; ".join(p.strip() for p in parts if p and p.strip())
