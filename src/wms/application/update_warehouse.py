"""Application service: Update Warehouse use case.

Deactivating a warehouse does not touch open orders: they can still be
confirmed, shipped or cancelled.  It only blocks new stock operations.
"""

from __future__ import annotations

from wms.application.dto import WarehouseDTO, warehouse_to_dto
from wms.application.list_warehouses import utilization_of
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository


class UpdateWarehouseHandler:

    def __init__(
        self,
        warehouse_repo: WarehouseRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._warehouse_repo = warehouse_repo
        self._product_repo = product_repo

    def handle(
        self,
        warehouse_id: str,
        name: str | None = None,
        capacity: int | None = None,
        is_active: bool | None = None,
        address: str | None = None,
        manager: str | None = None,
    ) -> WarehouseDTO:
        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise EntityNotFoundError(f"Warehouse with ID '{warehouse_id}' not found")

        if name is not None:
            warehouse.rename(name)
        if capacity is not None:
            warehouse.set_capacity(capacity)
        if is_active is True:
            warehouse.activate()
        elif is_active is False:
            warehouse.deactivate()
        if address is not None:
            warehouse.address = address
        if manager is not None:
            warehouse.manager = manager

        self._warehouse_repo.save(warehouse)
        return warehouse_to_dto(
            warehouse, utilization_of(warehouse.id, self._product_repo.list_all())
        )
