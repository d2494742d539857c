"""Application service: List Transactions use case (query)."""

from __future__ import annotations

from datetime import date

from wms.application.dto import TransactionDTO, transaction_to_dto
from wms.domain.exceptions import ValidationError
from wms.domain.model.page import DEFAULT_LIMIT, Page
from wms.domain.model.transaction import TransactionType
from wms.domain.service.transaction_log import TransactionFilter, TransactionLog


class ListTransactionsHandler:

    def __init__(self, log: TransactionLog) -> None:
        self._log = log

    def handle(
        self,
        type: str | None = None,
        warehouse_id: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
    ) -> Page[TransactionDTO]:
        tx_type = None
        if type and type != "all":
            try:
                tx_type = TransactionType(type)
            except ValueError:
                raise ValidationError(f"Unknown transaction type '{type}'") from None
        if date_from and date_to and date_from > date_to:
            raise ValidationError("Start date must not be after end date")

        result = self._log.query(
            TransactionFilter(
                type=tx_type,
                warehouse_id=warehouse_id,
                date_from=date_from,
                date_to=date_to,
            ),
            page=page,
            limit=limit,
        )
        return Page(
            items=[transaction_to_dto(t) for t in result.items],
            page=result.page,
            limit=result.limit,
            total=result.total,
        )
