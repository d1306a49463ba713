import click

from shopcore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_set_quantity,
    cart_show,
)
from shopcore.infrastructure.cli.export_commands import export_run
from shopcore.infrastructure.cli.invoice_commands import invoice_generate
from shopcore.infrastructure.cli.order_commands import order_list, order_place, order_show
from shopcore.infrastructure.config import get_settings
from shopcore.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Shopcore: cart, checkout, export and invoice commands"""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def order() -> None:
    """Place and inspect orders."""


@cli.group()
def export() -> None:
    """Bulk-export collections (admin)."""


@cli.group()
def invoice() -> None:
    """Generate invoices."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_set_quantity)
cart.add_command(cart_show)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
export.add_command(export_run)
invoice.add_command(invoice_generate)
