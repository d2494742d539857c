"""JSON-file-backed implementation of WarehouseRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from wms.domain.model.warehouse import Warehouse
from wms.domain.repository.warehouse_repository import WarehouseRepository
from wms.infrastructure.persistence.json_file import JsonFile, next_string_id


class JsonWarehouseRepository(WarehouseRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> str:
        with self._file.lock:
            return next_string_id(self._file.load())

    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        for raw in self._file.load():
            if raw["id"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Warehouse]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, warehouse: Warehouse) -> None:
        with self._file.lock:
            warehouses = self._file.load()
            for i, raw in enumerate(warehouses):
                if raw["id"] == warehouse.id:
                    warehouses[i] = self._to_raw(warehouse)
                    break
            else:
                warehouses.append(self._to_raw(warehouse))
            self._file.persist(warehouses)

    def delete(self, warehouse_id: str) -> None:
        with self._file.lock:
            warehouses = self._file.load()
            self._file.persist([raw for raw in warehouses if raw["id"] != warehouse_id])

    @staticmethod
    def _to_raw(warehouse: Warehouse) -> dict:
        return {
            "id": warehouse.id,
            "name": warehouse.name,
            "is_active": warehouse.is_active,
            "capacity": warehouse.capacity,
            "code": warehouse.code,
            "address": warehouse.address,
            "manager": warehouse.manager,
            "created_at": warehouse.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Warehouse:
        return Warehouse(
            id=raw["id"],
            name=raw["name"],
            is_active=raw.get("is_active", True),
            capacity=raw.get("capacity", 0),
            code=raw.get("code", ""),
            address=raw.get("address", ""),
            manager=raw.get("manager", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
