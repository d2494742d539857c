"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from wms.domain.model.product import Product
from wms.domain.model.value_objects import DEFAULT_CURRENCY, Money
from wms.domain.repository.product_repository import ProductRepository
from wms.infrastructure.persistence.json_file import JsonFile, next_string_id


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        with self._file.lock:
            return next_string_id(self._file.load())

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str, warehouse_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["sku"].upper() == sku.upper() and raw["warehouse_id"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.lock:
            products = self._file.load()
            for i, raw in enumerate(products):
                if raw["id"] == product.id:
                    products[i] = self._to_raw(product)
                    break
            else:
                products.append(self._to_raw(product))
            self._file.persist(products)

    def delete(self, product_id: str) -> None:
        with self._file.lock:
            products = self._file.load()
            self._file.persist([raw for raw in products if raw["id"] != product_id])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "warehouse_id": product.warehouse_id,
            "stock": product.stock,
            "reserved_stock": product.reserved_stock,
            "min_stock": product.min_stock,
            "description": product.description,
            "category": product.category,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw["sku"],
            price=Money(Decimal(raw["price"]), raw.get("currency", DEFAULT_CURRENCY)),
            warehouse_id=raw["warehouse_id"],
            stock=raw.get("stock", 0),
            reserved_stock=raw.get("reserved_stock", 0),
            min_stock=raw.get("min_stock", 0),
            description=raw.get("description", ""),
            category=raw.get("category", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
