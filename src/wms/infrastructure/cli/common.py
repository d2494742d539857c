"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import json

import click

from wms.application.dto import OrderItemSpec
from wms.application.session import USER_KEY
from wms.domain.model.page import Page
from wms.domain.service.stock_ledger import SYSTEM_USER
from wms.infrastructure.bootstrap import client_storage


def current_actor() -> str:
    """Email of the signed-in user, used as ``created_by`` on ledger entries."""
    raw = client_storage().get(USER_KEY)
    if not raw:
        return SYSTEM_USER
    try:
        return json.loads(raw).get("email") or SYSTEM_USER
    except ValueError:
        return SYSTEM_USER


def echo_page_footer(page: Page) -> None:
    click.echo(f"Page {page.page}/{page.total_pages}  ({page.total} total)")


def parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' (product ID : quantity) into an OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs
