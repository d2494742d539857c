"""Application service: Update Product use case."""

from __future__ import annotations

from wms.application.dto import ProductDTO, product_to_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.value_objects import Money
from wms.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        min_stock: int | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> ProductDTO:
        """Update catalog fields of a product.

        Stock counters are not editable here; they only move through the
        stock ledger.  Existing orders keep the price they captured.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.update_details(
            name=name,
            price=Money.of(price) if price is not None else None,
            min_stock=min_stock,
            description=description,
            category=category,
        )
        self._product_repo.save(product)
        return product_to_dto(product)
