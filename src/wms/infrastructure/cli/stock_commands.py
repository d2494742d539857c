"""CLI commands for direct stock movements: inbound, outbound, transfer."""

from __future__ import annotations

import click

from wms.application.record_inbound import RecordInboundHandler
from wms.application.record_outbound import DestinationType, RecordOutboundHandler
from wms.application.transfer_stock import TransferStockHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import stock_ledger
from wms.infrastructure.cli.common import current_actor


def _counters(p) -> str:
    return f"stock={p.stock} reserved={p.reserved_stock} available={p.available_stock}"


@click.command("inbound")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity received.")
@click.option("--supplier", required=True, help="Supplier name.")
@click.option("--reference", default="", help="Reference number, e.g. a delivery note.")
@click.option("--notes", default="", help="Free-text notes.")
def stock_inbound(
    product_id: str, quantity: int, supplier: str, reference: str, notes: str
) -> None:
    """Receive stock from a supplier."""
    handler = RecordInboundHandler(ledger=stock_ledger())

    try:
        product = handler.handle(
            product_id=product_id,
            quantity=quantity,
            supplier_name=supplier,
            reference_number=reference,
            notes=notes,
            created_by=current_actor(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Received {quantity} x {product.sku}: {_counters(product)}")


@click.command("outbound")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity shipped.")
@click.option(
    "--destination-type",
    required=True,
    type=click.Choice([d.value for d in DestinationType]),
    help="Kind of destination.",
)
@click.option("--destination", "destination_name", required=True, help="Destination name.")
@click.option("--reference", default="", help="Reference number.")
@click.option("--notes", default="", help="Free-text notes.")
def stock_outbound(
    product_id: str,
    quantity: int,
    destination_type: str,
    destination_name: str,
    reference: str,
    notes: str,
) -> None:
    """Ship unreserved stock out of its warehouse."""
    handler = RecordOutboundHandler(ledger=stock_ledger())

    try:
        product = handler.handle(
            product_id=product_id,
            quantity=quantity,
            destination_type=destination_type,
            destination_name=destination_name,
            reference_number=reference,
            notes=notes,
            created_by=current_actor(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Shipped {quantity} x {product.sku}: {_counters(product)}")


@click.command("transfer")
@click.option("--product", "product_id", required=True, help="Source product ID.")
@click.option("--to", "to_warehouse_id", required=True, help="Destination warehouse ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity to move.")
@click.option("--reference", default="", help="Reference number.")
@click.option("--notes", default="Stock transfer", show_default=True, help="Free-text notes.")
def stock_transfer(
    product_id: str, to_warehouse_id: str, quantity: int, reference: str, notes: str
) -> None:
    """Move available stock to another warehouse."""
    handler = TransferStockHandler(ledger=stock_ledger())

    try:
        result = handler.handle(
            product_id=product_id,
            to_warehouse_id=to_warehouse_id,
            quantity=quantity,
            reference_number=reference,
            notes=notes,
            created_by=current_actor(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    src, dst = result.source, result.destination
    click.echo(f"Transferred {quantity} x {src.sku} to warehouse {dst.warehouse_id}")
    click.echo(f"  source #{src.id}:      {_counters(src)}")
    click.echo(f"  destination #{dst.id}: {_counters(dst)}")
