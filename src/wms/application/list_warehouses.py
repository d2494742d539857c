"""Application service: List Warehouses use case (query)."""

from __future__ import annotations

from wms.application.dto import WarehouseDTO, warehouse_to_dto
from wms.domain.model.product import Product
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository


def utilization_of(warehouse_id: str, products: list[Product]) -> int:
    """Physical stock units housed in a warehouse."""
    return sum(p.stock for p in products if p.warehouse_id == warehouse_id)


class ListWarehousesHandler:

    def __init__(
        self,
        warehouse_repo: WarehouseRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._warehouse_repo = warehouse_repo
        self._product_repo = product_repo

    def handle(self, active_only: bool = False) -> list[WarehouseDTO]:
        products = self._product_repo.list_all()
        warehouses = self._warehouse_repo.list_all()
        if active_only:
            warehouses = [w for w in warehouses if w.is_active]
        return [warehouse_to_dto(w, utilization_of(w.id, products)) for w in warehouses]
