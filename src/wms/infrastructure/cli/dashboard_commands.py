"""CLI command for the dashboard summary."""

from __future__ import annotations

import click

from wms.application.dashboard_stats import DashboardStatsHandler
from wms.infrastructure.bootstrap import (
    order_repository,
    product_repository,
    reservation_engine,
    transaction_log,
    warehouse_repository,
)


@click.command("stats")
def dashboard_stats() -> None:
    """Show headline counts, recent activity and low-stock products."""
    handler = DashboardStatsHandler(
        product_repo=product_repository(),
        warehouse_repo=warehouse_repository(),
        order_repo=order_repository(),
        log=transaction_log(),
        engine=reservation_engine(),
    )
    stats = handler.handle()

    click.echo(f"Products:      {stats.total_products}")
    click.echo(f"Warehouses:    {stats.total_warehouses} ({stats.active_warehouses} active)")
    click.echo(f"Orders:        {stats.total_orders} ({stats.pending_orders} pending payment)")
    click.echo(f"Transactions:  {stats.total_transactions}")

    click.echo()
    click.echo("Recent transactions:")
    if not stats.transaction_histories:
        click.echo("  (none)")
    for t in stats.transaction_histories:
        click.echo(f"  {t.created_at}  {t.type:<9} {t.product_id:<8} {t.quantity:>5}")

    click.echo()
    click.echo("Low stock:")
    if not stats.low_stock_products:
        click.echo("  (none)")
    for p in stats.low_stock_products:
        click.echo(
            f"  {p.sku:<12} {p.name:<20} available={p.available_stock} min={p.min_stock}"
        )
