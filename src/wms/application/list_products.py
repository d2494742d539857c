"""Application service: List Products use case (query)."""

from __future__ import annotations

from wms.application.dto import ProductDTO, product_to_dto
from wms.domain.model.page import DEFAULT_LIMIT, Page, paginate
from wms.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        search: str | None = None,
        warehouse_id: str | None = None,
        category: str | None = None,
        low_stock_only: bool = False,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
    ) -> Page[ProductDTO]:
        products = self._product_repo.list_all()

        if search:
            needle = search.lower()
            products = [
                p for p in products
                if needle in p.name.lower() or needle in p.sku.lower()
            ]
        if warehouse_id:
            products = [p for p in products if p.warehouse_id == warehouse_id]
        if category:
            products = [p for p in products if p.category == category]
        if low_stock_only:
            products = [p for p in products if p.is_low_stock]

        result = paginate(products, page, limit)
        return Page(
            items=[product_to_dto(p) for p in result.items],
            page=result.page,
            limit=result.limit,
            total=result.total,
        )
