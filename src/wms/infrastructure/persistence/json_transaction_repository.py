"""JSON-file-backed, append-only implementation of TransactionRepository."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from pathlib import Path

from wms.domain.model.transaction import Transaction, TransactionType
from wms.domain.repository.transaction_repository import TransactionRepository
from wms.infrastructure.persistence.json_file import JsonFile


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def append_all(self, entries: list[Transaction]) -> list[Transaction]:
        with self._file.lock:
            rows = self._file.load()
            next_id = max((r["id"] for r in rows), default=0) + 1
            stored = [
                dataclasses.replace(entry, id=next_id + offset)
                for offset, entry in enumerate(entries)
            ]
            rows.extend(self._to_raw(entry) for entry in stored)
            self._file.persist(rows)
        return stored

    def list_all(self) -> list[Transaction]:
        return [self._to_domain(raw) for raw in self._file.load()]

    @staticmethod
    def _to_raw(entry: Transaction) -> dict:
        return {
            "id": entry.id,
            "type": entry.type.value,
            "product_id": entry.product_id,
            "quantity": entry.quantity,
            "warehouse_id": entry.warehouse_id,
            "to_warehouse_id": entry.to_warehouse_id,
            "reference_number": entry.reference_number,
            "notes": entry.notes,
            "created_by": entry.created_by,
            "created_at": entry.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Transaction:
        return Transaction(
            id=raw["id"],
            type=TransactionType(raw["type"]),
            product_id=raw["product_id"],
            quantity=raw["quantity"],
            warehouse_id=raw["warehouse_id"],
            to_warehouse_id=raw.get("to_warehouse_id"),
            reference_number=raw.get("reference_number", ""),
            notes=raw.get("notes", ""),
            created_by=raw["created_by"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
