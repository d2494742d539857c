"""Application service: List Orders use case (query)."""

from __future__ import annotations

from wms.application.dto import OrderDTO, order_to_dto
from wms.application.expire_orders import ExpireOrdersHandler
from wms.application.update_order_status import parse_status
from wms.domain.model.page import DEFAULT_LIMIT, Page, paginate
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.service.reservation_engine import ReservationEngine


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, engine: ReservationEngine) -> None:
        self._order_repo = order_repo
        self._expiry = ExpireOrdersHandler(order_repo, engine)

    def handle(
        self,
        search: str | None = None,
        status: str | None = None,
        warehouse_id: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
    ) -> Page[OrderDTO]:
        """Newest orders first, after expiring any that are past due."""
        self._expiry.handle()
        orders = self._order_repo.list_all()

        if search:
            needle = search.lower()
            orders = [
                o for o in orders
                if needle in o.order_number.lower() or needle in o.customer_name.lower()
            ]
        if status:
            wanted = parse_status(status)
            orders = [o for o in orders if o.status == wanted]
        if warehouse_id:
            orders = [o for o in orders if o.warehouse_id == warehouse_id]

        orders.sort(key=lambda o: (o.created_at, o.id or 0), reverse=True)
        result = paginate(orders, page, limit)
        return Page(
            items=[order_to_dto(o) for o in result.items],
            page=result.page,
            limit=result.limit,
            total=result.total,
        )
