"""CLI commands for the transaction log."""

from __future__ import annotations

import click

from wms.application.list_transactions import ListTransactionsHandler
from wms.domain.exceptions import DomainException
from wms.domain.model.transaction import TransactionType
from wms.infrastructure.bootstrap import transaction_log
from wms.infrastructure.cli.common import echo_page_footer


@click.command("list")
@click.option(
    "--type",
    "tx_type",
    default=None,
    type=click.Choice([t.value for t in TransactionType]),
    help="Filter by type.",
)
@click.option("--warehouse", "warehouse_id", default=None, help="Source or destination warehouse.")
@click.option("--from", "date_from", default=None, type=click.DateTime(["%Y-%m-%d"]), help="First day (YYYY-MM-DD).")
@click.option("--to", "date_to", default=None, type=click.DateTime(["%Y-%m-%d"]), help="Last day, inclusive.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def transaction_list(tx_type, warehouse_id, date_from, date_to, page: int, limit: int) -> None:
    """List ledger entries, newest first."""
    handler = ListTransactionsHandler(log=transaction_log())

    try:
        result = handler.handle(
            type=tx_type,
            warehouse_id=warehouse_id,
            date_from=date_from.date() if date_from else None,
            date_to=date_to.date() if date_to else None,
            page=page,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'ID':<5} {'When':<21} {'Type':<9} {'Product':<8} {'Qty':>5} "
        f"{'WH':<6} {'To':<6} {'Reference':<20} {'By'}"
    )
    click.echo("-" * 100)
    for t in result.items:
        click.echo(
            f"{t.id:<5} {t.created_at:<21} {t.type:<9} {t.product_id:<8} {t.quantity:>5} "
            f"{t.warehouse_id:<6} {t.to_warehouse_id or '-':<6} "
            f"{t.reference_number or '-':<20} {t.created_by}"
        )
    echo_page_footer(result)
