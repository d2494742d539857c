"""Application service: Dashboard Stats use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from wms.application.dto import (
    ProductDTO,
    TransactionDTO,
    product_to_dto,
    transaction_to_dto,
)
from wms.application.expire_orders import ExpireOrdersHandler
from wms.domain.model.order import OrderStatus
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository
from wms.domain.service.reservation_engine import ReservationEngine
from wms.domain.service.transaction_log import TransactionLog

RECENT_COUNT = 5


@dataclass(frozen=True)
class DashboardStatsDTO:
    total_products: int
    total_warehouses: int
    total_orders: int
    total_transactions: int
    active_warehouses: int
    pending_orders: int
    transaction_histories: list[TransactionDTO]
    low_stock_products: list[ProductDTO]


class DashboardStatsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
        order_repo: OrderRepository,
        log: TransactionLog,
        engine: ReservationEngine,
    ) -> None:
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo
        self._order_repo = order_repo
        self._log = log
        self._expiry = ExpireOrdersHandler(order_repo, engine)

    def handle(self) -> DashboardStatsDTO:
        self._expiry.handle()

        products = self._product_repo.list_all()
        warehouses = self._warehouse_repo.list_all()
        orders = self._order_repo.list_all()

        low_stock = sorted(
            (p for p in products if p.is_low_stock),
            key=lambda p: (p.available_stock, p.id),
        )[:RECENT_COUNT]

        return DashboardStatsDTO(
            total_products=len(products),
            total_warehouses=len(warehouses),
            total_orders=len(orders),
            total_transactions=self._log.count(),
            active_warehouses=sum(1 for w in warehouses if w.is_active),
            pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING_PAYMENT),
            transaction_histories=[transaction_to_dto(t) for t in self._log.recent(RECENT_COUNT)],
            low_stock_products=[product_to_dto(p) for p in low_stock],
        )
