"""Application service: Delete Product use case."""

from __future__ import annotations

from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if product.reserved_stock > 0:
            raise ValidationError(
                f"Cannot delete {product.name}: {product.reserved_stock} units "
                f"are reserved by open orders"
            )
        self._product_repo.delete(product_id)
