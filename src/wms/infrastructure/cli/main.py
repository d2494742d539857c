import click

from wms.infrastructure.cli.auth_commands import (
    auth_login,
    auth_logout,
    auth_refresh,
    auth_whoami,
)
from wms.infrastructure.cli.dashboard_commands import dashboard_stats
from wms.infrastructure.cli.order_commands import (
    order_cancel,
    order_confirm,
    order_create,
    order_expire,
    order_list,
    order_ship,
    order_show,
    order_status,
)
from wms.infrastructure.cli.prefs_commands import prefs_language, prefs_show, prefs_theme
from wms.infrastructure.cli.remote_commands import (
    remote_order_create,
    remote_order_status,
    remote_orders,
    remote_product_add,
    remote_product_delete,
    remote_product_update,
    remote_products,
    remote_stats,
    remote_transaction_add,
    remote_transactions,
    remote_warehouse_add,
    remote_warehouse_delete,
    remote_warehouse_update,
    remote_warehouses,
)
from wms.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from wms.infrastructure.cli.stock_commands import (
    stock_inbound,
    stock_outbound,
    stock_transfer,
)
from wms.infrastructure.cli.transaction_commands import transaction_list
from wms.infrastructure.cli.warehouse_commands import (
    warehouse_add,
    warehouse_delete,
    warehouse_list,
    warehouse_update,
)
from wms.infrastructure.logging_setup import setup_logging
from wms.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """WMS — Warehouse Management System"""
    setup_logging(get_settings())


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def warehouse() -> None:
    """Manage warehouses."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def stock() -> None:
    """Record inbound, outbound and transfer movements."""


@cli.group()
def transaction() -> None:
    """Browse the transaction log."""


@cli.group()
def dashboard() -> None:
    """Summary views."""


@cli.group()
def auth() -> None:
    """Sign in to the warehouse API."""


@cli.group()
def prefs() -> None:
    """Client preferences."""


@cli.group()
def remote() -> None:
    """Run operations against the warehouse REST API."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
warehouse.add_command(warehouse_add)
warehouse.add_command(warehouse_delete)
warehouse.add_command(warehouse_list)
warehouse.add_command(warehouse_update)
order.add_command(order_cancel)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_expire)
order.add_command(order_list)
order.add_command(order_ship)
order.add_command(order_show)
order.add_command(order_status)
stock.add_command(stock_inbound)
stock.add_command(stock_outbound)
stock.add_command(stock_transfer)
transaction.add_command(transaction_list)
dashboard.add_command(dashboard_stats)
auth.add_command(auth_login)
auth.add_command(auth_logout)
auth.add_command(auth_refresh)
auth.add_command(auth_whoami)
prefs.add_command(prefs_language)
prefs.add_command(prefs_show)
prefs.add_command(prefs_theme)
remote.add_command(remote_order_create)
remote.add_command(remote_order_status)
remote.add_command(remote_orders)
remote.add_command(remote_product_add)
remote.add_command(remote_product_delete)
remote.add_command(remote_product_update)
remote.add_command(remote_products)
remote.add_command(remote_stats)
remote.add_command(remote_transaction_add)
remote.add_command(remote_transactions)
remote.add_command(remote_warehouse_add)
remote.add_command(remote_warehouse_delete)
remote.add_command(remote_warehouse_update)
remote.add_command(remote_warehouses)
