"""Application service: Delete Warehouse use case."""

from __future__ import annotations

from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository


class DeleteWarehouseHandler:

    def __init__(
        self,
        warehouse_repo: WarehouseRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._warehouse_repo = warehouse_repo
        self._product_repo = product_repo

    def handle(self, warehouse_id: str) -> None:
        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise EntityNotFoundError(f"Warehouse with ID '{warehouse_id}' not found")

        housed = [p for p in self._product_repo.list_all() if p.warehouse_id == warehouse_id]
        if housed:
            raise ValidationError(
                f"Cannot delete warehouse '{warehouse.name}': "
                f"it still houses {len(housed)} product record(s)"
            )
        self._warehouse_repo.delete(warehouse_id)
