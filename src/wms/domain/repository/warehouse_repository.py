"""Abstract repository for Warehouse aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.warehouse import Warehouse


class WarehouseRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique warehouse ID."""

    @abstractmethod
    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Return every warehouse."""

    @abstractmethod
    def save(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse."""

    @abstractmethod
    def delete(self, warehouse_id: str) -> None:
        """Remove a warehouse permanently."""
