"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from wms.application.create_order import CreateOrderHandler
from wms.application.dto import OrderDTO
from wms.application.expire_orders import ExpireOrdersHandler
from wms.application.list_orders import ListOrdersHandler
from wms.application.show_order import ShowOrderHandler
from wms.application.update_order_status import UpdateOrderStatusHandler
from wms.domain.exceptions import DomainException
from wms.domain.model.order import OrderStatus
from wms.infrastructure.bootstrap import (
    order_repository,
    product_repository,
    reservation_engine,
    warehouse_repository,
)
from wms.infrastructure.cli.common import current_actor, echo_page_footer, parse_items
from wms.infrastructure.settings import get_settings


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status})")
    click.echo(f"Customer:  {dto.customer_name} ({dto.customer_id})")
    click.echo(f"Warehouse: {dto.warehouse_id}")
    click.echo(f"Created:   {dto.created_at}")
    click.echo(f"Expires:   {dto.expires_at}")
    if dto.notes:
        click.echo(f"Notes:     {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'SKU':<12} {'Qty':>5} {'Price':>18} {'Total':>18}")
    click.echo(f"  {'-'*77}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.sku:<12} {item.quantity:>5} "
            f"{item.unit_price:>18} {item.total_price:>18}"
        )
    click.echo(f"  {'-'*77}")
    click.echo(f"  {'Order Total':<39} {dto.total_amount:>38}")


@click.command("create")
@click.option("--customer-id", required=True, help="Customer ID.")
@click.option("--customer", "customer_name", required=True, help="Customer name.")
@click.option("--warehouse", "warehouse_id", required=True, help="Fulfilling warehouse ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--notes", default="", help="Order notes.")
def order_create(
    customer_id: str, customer_name: str, warehouse_id: str, items: str, notes: str
) -> None:
    """Create an order and reserve its stock."""
    specs = parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        warehouse_repo=warehouse_repository(),
        engine=reservation_engine(),
        expires_in=get_settings().order_expiry,
    )

    try:
        dto = handler.handle(
            customer_id=customer_id,
            customer_name=customer_name,
            warehouse_id=warehouse_id,
            item_specs=specs,
            notes=notes,
            created_by=current_actor(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created — stock reserved.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(), engine=reservation_engine())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--search", default=None, help="Match order number or customer name.")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus]),
    help="Filter by status.",
)
@click.option("--warehouse", "warehouse_id", default=None, help="Filter by warehouse ID.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def order_list(
    search: str | None,
    status: str | None,
    warehouse_id: str | None,
    page: int,
    limit: int,
) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository(), engine=reservation_engine())

    try:
        result = handler.handle(
            search=search, status=status, warehouse_id=warehouse_id, page=page, limit=limit
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<5} {'Number':<20} {'Customer':<20} {'Status':<16} {'Total':>18}")
    click.echo("-" * 83)
    for o in result.items:
        click.echo(
            f"{o.id:<5} {o.order_number:<20} {o.customer_name:<20} "
            f"{o.status:<16} {o.total_amount:>18}"
        )
    echo_page_footer(result)


def _transition(order_id: int, status: OrderStatus) -> OrderDTO:
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(), engine=reservation_engine()
    )
    try:
        return handler.handle(order_id, status, created_by=current_actor())
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.argument("status", type=click.Choice([s.value for s in OrderStatus]))
def order_status(order_id: int, status: str) -> None:
    """Move an order to STATUS."""
    dto = _transition(order_id, OrderStatus(status))
    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("confirm")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to confirm.")
def order_confirm(order_id: int) -> None:
    """Confirm payment of a pending order."""
    _transition(order_id, OrderStatus.CONFIRMED)
    click.echo(f"Order #{order_id} confirmed.")


@click.command("ship")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to ship.")
def order_ship(order_id: int) -> None:
    """Ship a processing order (deducts reserved stock)."""
    _transition(order_id, OrderStatus.SHIPPED)
    click.echo(f"Order #{order_id} shipped — stock deducted.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (releases its reserved stock)."""
    _transition(order_id, OrderStatus.CANCELLED)
    click.echo(f"Order #{order_id} cancelled — reserved stock released.")


@click.command("expire")
def order_expire() -> None:
    """Expire every pending order past its deadline."""
    handler = ExpireOrdersHandler(order_repo=order_repository(), engine=reservation_engine())

    try:
        expired = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not expired:
        click.echo("No orders due for expiry.")
        return
    click.echo(f"Expired {len(expired)} order(s): {', '.join(expired)}")
