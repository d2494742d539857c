"""CLI commands for the Warehouse aggregate."""

from __future__ import annotations

import click

from wms.application.add_warehouse import AddWarehouseHandler
from wms.application.delete_warehouse import DeleteWarehouseHandler
from wms.application.list_warehouses import ListWarehousesHandler
from wms.application.update_warehouse import UpdateWarehouseHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import product_repository, warehouse_repository


@click.command("add")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--capacity", default=0, show_default=True, type=int, help="Capacity in stock units.")
@click.option("--code", default="", help="Short code, e.g. WH-JKT.")
@click.option("--address", default="", help="Street address.")
@click.option("--manager", default="", help="Manager name.")
@click.option("--inactive", is_flag=True, default=False, help="Create the warehouse inactive.")
def warehouse_add(
    name: str, capacity: int, code: str, address: str, manager: str, inactive: bool
) -> None:
    """Add a new warehouse."""
    handler = AddWarehouseHandler(warehouse_repo=warehouse_repository())

    try:
        warehouse = handler.handle(
            name=name,
            capacity=capacity,
            is_active=not inactive,
            code=code,
            address=address,
            manager=manager,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{warehouse.id} '{warehouse.name}' added.")


@click.command("list")
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive warehouses.")
def warehouse_list(active_only: bool) -> None:
    """List warehouses with their utilization."""
    handler = ListWarehousesHandler(
        warehouse_repo=warehouse_repository(),
        product_repo=product_repository(),
    )
    warehouses = handler.handle(active_only=active_only)

    if not warehouses:
        click.echo("No warehouses found.")
        return

    click.echo(f"{'ID':<6} {'Code':<10} {'Name':<24} {'Active':<7} {'Used':>8} {'Capacity':>9}")
    click.echo("-" * 69)
    for w in warehouses:
        active = "yes" if w.is_active else "no"
        click.echo(
            f"{w.id:<6} {w.code:<10} {w.name:<24} {active:<7} "
            f"{w.current_utilization:>8} {w.capacity:>9}"
        )


@click.command("update")
@click.option("--id", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--capacity", default=None, type=int, help="New capacity.")
@click.option("--address", default=None, help="New address.")
@click.option("--manager", default=None, help="New manager.")
@click.option("--active/--inactive", "is_active", default=None, help="Activate or deactivate.")
def warehouse_update(
    warehouse_id: str,
    name: str | None,
    capacity: int | None,
    address: str | None,
    manager: str | None,
    is_active: bool | None,
) -> None:
    """Update a warehouse."""
    handler = UpdateWarehouseHandler(
        warehouse_repo=warehouse_repository(),
        product_repo=product_repository(),
    )

    try:
        warehouse = handler.handle(
            warehouse_id=warehouse_id,
            name=name,
            capacity=capacity,
            is_active=is_active,
            address=address,
            manager=manager,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    state = "active" if warehouse.is_active else "inactive"
    click.echo(f"Warehouse #{warehouse.id} '{warehouse.name}' updated ({state}).")


@click.command("delete")
@click.option("--id", "warehouse_id", required=True, help="Warehouse ID.")
def warehouse_delete(warehouse_id: str) -> None:
    """Delete an empty warehouse."""
    handler = DeleteWarehouseHandler(
        warehouse_repo=warehouse_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(warehouse_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{warehouse_id} deleted.")
