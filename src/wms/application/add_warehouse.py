"""Application service: Add Warehouse use case."""

from __future__ import annotations

from wms.application.dto import WarehouseDTO, warehouse_to_dto
from wms.domain.exceptions import ValidationError
from wms.domain.model.warehouse import Warehouse
from wms.domain.repository.warehouse_repository import WarehouseRepository


class AddWarehouseHandler:

    def __init__(self, warehouse_repo: WarehouseRepository) -> None:
        self._warehouse_repo = warehouse_repo

    def handle(
        self,
        name: str,
        capacity: int = 0,
        is_active: bool = True,
        code: str = "",
        address: str = "",
        manager: str = "",
    ) -> WarehouseDTO:
        if not name or not name.strip():
            raise ValidationError("Warehouse name is required")
        if capacity < 0:
            raise ValidationError("Warehouse capacity cannot be negative")

        warehouse = Warehouse(
            id=self._warehouse_repo.next_id(),
            name=name.strip(),
            is_active=is_active,
            capacity=capacity,
            code=code,
            address=address,
            manager=manager,
        )
        self._warehouse_repo.save(warehouse)
        return warehouse_to_dto(warehouse, current_utilization=0)
