"""Application service: Transfer Stock use case."""

from __future__ import annotations

from dataclasses import dataclass

from wms.application.dto import ProductDTO, product_to_dto
from wms.domain.service.stock_ledger import SYSTEM_USER, StockLedger


@dataclass(frozen=True)
class TransferResultDTO:
    source: ProductDTO
    destination: ProductDTO


class TransferStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        to_warehouse_id: str,
        quantity: int,
        reference_number: str = "",
        notes: str = "Stock transfer",
        created_by: str = SYSTEM_USER,
    ) -> TransferResultDTO:
        source, destination = self._ledger.transfer(
            product_id,
            to_warehouse_id,
            quantity,
            reference=reference_number,
            created_by=created_by,
            notes=notes,
        )
        return TransferResultDTO(
            source=product_to_dto(source),
            destination=product_to_dto(destination),
        )
