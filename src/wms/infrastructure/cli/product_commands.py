"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from wms.application.add_product import AddProductHandler
from wms.application.delete_product import DeleteProductHandler
from wms.application.list_products import ListProductsHandler
from wms.application.update_product import UpdateProductHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import product_repository, warehouse_repository
from wms.infrastructure.cli.common import echo_page_footer


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock keeping unit, unique per warehouse.")
@click.option("--price", required=True, help="Unit price (e.g. 15000).")
@click.option("--warehouse", "warehouse_id", required=True, help="Owning warehouse ID.")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@click.option("--min-stock", default=0, show_default=True, type=int, help="Reorder threshold.")
@click.option("--category", default="", help="Category label.")
@click.option("--description", default="", help="Free-text description.")
def product_add(
    name: str,
    sku: str,
    price: str,
    warehouse_id: str,
    stock: int,
    min_stock: int,
    category: str,
    description: str,
) -> None:
    """Add a new product to a warehouse."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        warehouse_repo=warehouse_repository(),
    )

    try:
        product = handler.handle(
            name=name,
            sku=sku,
            price=price,
            warehouse_id=warehouse_id,
            stock=stock,
            min_stock=min_stock,
            description=description,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' ({product.sku}) added at {product.price}"
    )


@click.command("list")
@click.option("--search", default=None, help="Match name or SKU.")
@click.option("--warehouse", "warehouse_id", default=None, help="Filter by warehouse ID.")
@click.option("--category", default=None, help="Filter by category.")
@click.option("--low-stock", is_flag=True, default=False, help="Only products at or below min stock.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def product_list(
    search: str | None,
    warehouse_id: str | None,
    category: str | None,
    low_stock: bool,
    page: int,
    limit: int,
) -> None:
    """List products with their stock counters."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        result = handler.handle(
            search=search,
            warehouse_id=warehouse_id,
            category=category,
            low_stock_only=low_stock,
            page=page,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<6} {'SKU':<12} {'Name':<20} {'WH':<6} "
        f"{'Stock':>6} {'Rsvd':>6} {'Avail':>6} {'Price':>18}"
    )
    click.echo("-" * 86)
    for p in result.items:
        flag = " !" if p.is_low_stock else ""
        click.echo(
            f"{p.id:<6} {p.sku:<12} {p.name:<20} {p.warehouse_id:<6} "
            f"{p.stock:>6} {p.reserved_stock:>6} {p.available_stock:>6} {p.price:>18}{flag}"
        )
    echo_page_footer(result)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New unit price.")
@click.option("--min-stock", default=None, type=int, help="New reorder threshold.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description.")
def product_update(
    product_id: str,
    name: str | None,
    price: str | None,
    min_stock: int | None,
    category: str | None,
    description: str | None,
) -> None:
    """Update a product's catalog details (not its stock)."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            price=price,
            min_stock=min_stock,
            description=description,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated: {product.name} at {product.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product that has no reserved stock."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
