"""Application service: Add Product use case."""

from __future__ import annotations

from wms.application.dto import ProductDTO, product_to_dto
from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.model.product import Product
from wms.domain.model.value_objects import Money
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
    ) -> None:
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo

    def handle(
        self,
        name: str,
        sku: str,
        price: str,
        warehouse_id: str,
        stock: int = 0,
        min_stock: int = 0,
        description: str = "",
        category: str = "",
    ) -> ProductDTO:
        """Add a product record to a warehouse's catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")
        if stock < 0:
            raise ValidationError("Initial stock cannot be negative")
        if min_stock < 0:
            raise ValidationError("Minimum stock cannot be negative")

        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise EntityNotFoundError(f"Warehouse with ID '{warehouse_id}' not found")
        warehouse.ensure_active()

        sku = sku.strip().upper()
        if self._product_repo.get_by_sku(sku, warehouse_id) is not None:
            raise ValidationError(
                f"SKU '{sku}' already exists in warehouse '{warehouse.name}'"
            )

        product = Product(
            id=self._product_repo.next_id(),
            name=name.strip(),
            sku=sku,
            price=Money.of(price),
            warehouse_id=warehouse_id,
            stock=stock,
            min_stock=min_stock,
            description=description,
            category=category,
        )
        self._product_repo.save(product)
        return product_to_dto(product)
