"""CLI commands that work against the warehouse REST API.

The other command groups act on the local data files; these send the same
operations to the server, using the session stored by ``wms auth login``.
Every call goes through ``AuthService.call_authorized`` so an expired
access token is refreshed once before the command gives up.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import click

from wms.application.checkout import CheckoutForm, build_order_payload, cart_total
from wms.application.session import AuthService
from wms.domain.exceptions import DomainException
from wms.infrastructure.api.client import WmsApiClient
from wms.infrastructure.bootstrap import api_client, auth_service
from wms.infrastructure.cli.common import parse_items
from wms.infrastructure.settings import get_settings

TRANSACTION_TYPES = ("inbound", "outbound", "transfer")


def _session() -> tuple[WmsApiClient, AuthService]:
    service = auth_service()
    if not service.restore():
        raise click.ClickException("Not signed in. Run 'wms auth login' first.")
    return api_client(), service


def _call(service: AuthService, fn: Callable[..., Any], *args, **kwargs) -> Any:
    try:
        return service.call_authorized(fn, *args, **kwargs)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _read(
    client: WmsApiClient,
    service: AuthService,
    key: str,
    fn: Callable[..., Any],
    **params: Any,
) -> Any:
    """Latest-only read; a superseded response is reported, not shown."""
    try:
        data = client.fetch_latest(key, service.call_authorized, fn, **params)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if data is None:
        raise click.ClickException(f"The {key} listing was superseded by a newer request.")
    return data


def _rows(data: Any, key: str) -> list[dict]:
    """List payloads come either bare or wrapped as ``{key: [...], total: n}``."""
    if isinstance(data, dict):
        return data.get(key) or []
    return data or []


def _echo_total(data: Any) -> None:
    if isinstance(data, dict) and "total" in data:
        click.echo(f"({data['total']} total)")


def _changes(**fields: Any) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


# --- Products -----------------------------------------------------------------


@click.command("products")
@click.option("--search", default=None, help="Match name or SKU.")
@click.option("--warehouse", "warehouse_id", default=None, help="Filter by warehouse ID.")
@click.option("--category", default=None, help="Filter by category.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def remote_products(
    search: str | None, warehouse_id: str | None, category: str | None, page: int, limit: int
) -> None:
    """List products on the server."""
    client, service = _session()
    data = _read(
        client, service, "products", client.list_products,
        page=page, limit=limit, search=search, warehouseId=warehouse_id, category=category,
    )
    rows = _rows(data, "products")
    if not rows:
        click.echo("No products found.")
        return
    click.echo(f"{'ID':<6} {'SKU':<12} {'Name':<22} {'WH':<5} {'Stock':>6} {'Rsv':>5} {'Avail':>6}")
    click.echo("-" * 68)
    for p in rows:
        click.echo(
            f"{p['id']!s:<6} {p.get('sku', ''):<12} {p.get('name', ''):<22} "
            f"{p.get('warehouseId', '')!s:<5} {p.get('stock', 0):>6} "
            f"{p.get('reservedStock', 0):>5} {p.get('availableStock', 0):>6}"
        )
    _echo_total(data)


@click.command("product-add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock keeping unit.")
@click.option("--price", required=True, type=float, help="Unit price.")
@click.option("--warehouse", "warehouse_id", required=True, help="Owning warehouse ID.")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@click.option("--min-stock", default=0, show_default=True, type=int, help="Reorder threshold.")
@click.option("--category", default="", help="Category label.")
@click.option("--description", default="", help="Free-text description.")
def remote_product_add(
    name: str,
    sku: str,
    price: float,
    warehouse_id: str,
    stock: int,
    min_stock: int,
    category: str,
    description: str,
) -> None:
    """Create a product on the server."""
    client, service = _session()
    created = _call(service, client.create_product, {
        "name": name,
        "sku": sku,
        "description": description,
        "price": price,
        "stock": stock,
        "warehouseId": warehouse_id,
        "category": category,
        "minStock": min_stock,
    })
    click.echo(f"Product #{(created or {}).get('id', '?')} '{name}' created.")


@click.command("product-update")
@click.argument("product_id")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, type=float, help="New unit price.")
@click.option("--min-stock", default=None, type=int, help="New reorder threshold.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description.")
def remote_product_update(
    product_id: str,
    name: str | None,
    price: float | None,
    min_stock: int | None,
    category: str | None,
    description: str | None,
) -> None:
    """Update catalog fields of a product on the server."""
    changes = _changes(
        name=name, price=price, minStock=min_stock, category=category, description=description,
    )
    if not changes:
        raise click.UsageError("Nothing to update.")
    client, service = _session()
    _call(service, client.update_product, product_id, changes)
    click.echo(f"Product #{product_id} updated.")


@click.command("product-delete")
@click.argument("product_id")
def remote_product_delete(product_id: str) -> None:
    """Delete a product on the server."""
    client, service = _session()
    _call(service, client.delete_product, product_id)
    click.echo(f"Product #{product_id} deleted.")


# --- Warehouses ---------------------------------------------------------------


@click.command("warehouses")
def remote_warehouses() -> None:
    """List warehouses on the server."""
    client, service = _session()
    rows = _rows(_read(client, service, "warehouses", client.list_warehouses), "warehouses")
    if not rows:
        click.echo("No warehouses found.")
        return
    for w in rows:
        state = "active" if w.get("isActive", True) else "inactive"
        click.echo(
            f"#{w['id']} {w.get('name', '')} ({state}) "
            f"{w.get('currentUtilization', 0)}/{w.get('capacity', 0)}"
        )


@click.command("warehouse-add")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--address", required=True, help="Street address.")
@click.option("--capacity", required=True, type=int, help="Capacity in units.")
@click.option("--manager", required=True, help="Manager name.")
def remote_warehouse_add(name: str, address: str, capacity: int, manager: str) -> None:
    """Create a warehouse on the server."""
    client, service = _session()
    created = _call(service, client.create_warehouse, {
        "name": name,
        "address": address,
        "isActive": True,
        "capacity": capacity,
        "manager": manager,
    })
    click.echo(f"Warehouse #{(created or {}).get('id', '?')} '{name}' created.")


@click.command("warehouse-update")
@click.argument("warehouse_id")
@click.option("--name", default=None, help="New name.")
@click.option("--address", default=None, help="New address.")
@click.option("--capacity", default=None, type=int, help="New capacity.")
@click.option("--manager", default=None, help="New manager.")
@click.option("--active/--inactive", "is_active", default=None, help="Accept new stock operations.")
def remote_warehouse_update(
    warehouse_id: str,
    name: str | None,
    address: str | None,
    capacity: int | None,
    manager: str | None,
    is_active: bool | None,
) -> None:
    """Update a warehouse on the server."""
    changes = _changes(
        name=name, address=address, capacity=capacity, manager=manager, isActive=is_active,
    )
    if not changes:
        raise click.UsageError("Nothing to update.")
    client, service = _session()
    _call(service, client.update_warehouse, warehouse_id, changes)
    click.echo(f"Warehouse #{warehouse_id} updated.")


@click.command("warehouse-delete")
@click.argument("warehouse_id")
def remote_warehouse_delete(warehouse_id: str) -> None:
    """Delete a warehouse on the server."""
    client, service = _session()
    _call(service, client.delete_warehouse, warehouse_id)
    click.echo(f"Warehouse #{warehouse_id} deleted.")


# --- Orders -------------------------------------------------------------------


@click.command("orders")
@click.option("--status", default=None, help="Filter by status.")
@click.option("--warehouse", "warehouse_id", default=None, help="Filter by warehouse ID.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def remote_orders(status: str | None, warehouse_id: str | None, page: int, limit: int) -> None:
    """List orders on the server."""
    client, service = _session()
    data = _read(
        client, service, "orders", client.list_orders,
        page=page, limit=limit, warehouse_id=warehouse_id, status=status,
    )
    rows = _rows(data, "orders")
    if not rows:
        click.echo("No orders found.")
        return
    for o in rows:
        click.echo(
            f"#{o['id']} {o.get('order_number', '')}  {o.get('customer_name', '')}  "
            f"{o.get('status', '')}  {o.get('total_amount', '')}"
        )
    _echo_total(data)


@click.command("order-create")
@click.option("--customer-id", required=True, help="Customer ID.")
@click.option("--customer", "customer_name", required=True, help="Customer name.")
@click.option("--warehouse", "warehouse_id", required=True, help="Fulfilling warehouse ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--notes", default="", help="Order notes.")
def remote_order_create(
    customer_id: str, customer_name: str, warehouse_id: str, items: str, notes: str
) -> None:
    """Check the cart against server stock, then submit the order."""
    cart = parse_items(items)
    client, service = _session()
    products = _rows(
        _read(client, service, "products", client.list_products,
              warehouseId=warehouse_id, limit=1000),
        "products",
    )

    form = CheckoutForm(customer_id, customer_name, warehouse_id, notes)
    try:
        payload = build_order_payload(
            form, cart, products,
            now=datetime.now(timezone.utc),
            expires_in=get_settings().order_expiry,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    created = _call(service, client.create_order, payload)
    click.echo(
        f"Order {payload['order_number']} submitted "
        f"(#{(created or {}).get('id', '?')}, total {cart_total(cart, products)})."
    )


@click.command("order-status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", required=True, help="Target status.")
def remote_order_status(order_id: str, status: str) -> None:
    """Move an order on the server to a new status."""
    client, service = _session()
    updated = _call(service, client.update_order_status, order_id, status)
    click.echo(f"Order #{order_id} is now {(updated or {}).get('status', status)}.")


# --- Transactions and dashboard -------------------------------------------------


@click.command("transactions")
@click.option("--type", "tx_type", default=None, help="Filter by transaction type.")
@click.option("--warehouse", "warehouse_id", default=None, help="Filter by warehouse ID.")
@click.option("--from", "date_from", default=None, help="From date (YYYY-MM-DD).")
@click.option("--to", "date_to", default=None, help="To date (YYYY-MM-DD).")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def remote_transactions(
    tx_type: str | None,
    warehouse_id: str | None,
    date_from: str | None,
    date_to: str | None,
    page: int,
    limit: int,
) -> None:
    """Browse the server's transaction log."""
    client, service = _session()
    data = _read(
        client, service, "transactions", client.list_transactions,
        page=page, limit=limit, warehouse_id=warehouse_id, type=tx_type,
        date_from=date_from, date_to=date_to,
    )
    rows = _rows(data, "transactions")
    if not rows:
        click.echo("No transactions found.")
        return
    for t in rows:
        target = f" -> {t['to_warehouse_id']}" if t.get("to_warehouse_id") else ""
        click.echo(
            f"#{t['id']} {t.get('type', ''):<9} product={t.get('product_id', '')} "
            f"qty={t.get('quantity', 0)} wh={t.get('warehouse_id', '')}{target}"
        )
    _echo_total(data)


@click.command("transaction-add")
@click.option("--type", "tx_type", required=True, type=click.Choice(TRANSACTION_TYPES))
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units moved.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--to-warehouse", "to_warehouse_id", default=None, help="Transfer destination.")
@click.option("--reference", default=None, help="Reference number.")
@click.option("--notes", default=None, help="Notes.")
def remote_transaction_add(
    tx_type: str,
    product_id: str,
    quantity: int,
    warehouse_id: str,
    to_warehouse_id: str | None,
    reference: str | None,
    notes: str | None,
) -> None:
    """Record a stock movement on the server."""
    if tx_type == "transfer" and not to_warehouse_id:
        raise click.UsageError("--to-warehouse is required for transfers.")
    if quantity <= 0:
        raise click.BadParameter("Quantity must be positive.", param_hint="--quantity")
    client, service = _session()
    payload = _changes(
        type=tx_type,
        product_id=product_id,
        quantity=quantity,
        warehouse_id=warehouse_id,
        to_warehouse_id=to_warehouse_id,
        reference_number=reference,
        notes=notes,
        created_by=service.user.id if service.user else None,
    )
    created = _call(service, client.create_transaction, payload)
    click.echo(f"Recorded {tx_type} #{(created or {}).get('id', '?')}: {quantity} x {product_id}.")


@click.command("stats")
def remote_stats() -> None:
    """Show the server dashboard counters."""
    client, service = _session()
    stats = _read(client, service, "dashboard", client.dashboard_stats) or {}
    for key in (
        "total_products",
        "total_warehouses",
        "total_orders",
        "total_transactions",
        "active_warehouses",
        "pending_orders",
    ):
        if key in stats:
            label = key.replace("_", " ").capitalize() + ":"
            click.echo(f"{label:<22} {stats[key]}")
