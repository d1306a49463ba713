"""CLI commands for the shopping cart."""

from __future__ import annotations

from decimal import Decimal

import click

from shopcore.domain.exceptions import DomainException
from shopcore.domain.model.cart import CartSnapshot, NewCartLine
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.cart_aggregator import open_cart
from shopcore.infrastructure.bootstrap import cart_stores
from shopcore.infrastructure.cli.options import AMOUNT, principal_options, to_principal


def _print_snapshot(snapshot: CartSnapshot) -> None:
    if snapshot.is_empty:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Line':<26} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo("  " + "-" * 75)
    for line in snapshot.lines:
        click.echo(
            f"  {line.id:<26} {line.name:<20} {line.quantity:>5} "
            f"{str(line.unit_price):>10} {str(line.line_total):>10}"
        )
    click.echo()
    click.echo(f"  Items: {snapshot.count}   Subtotal: {snapshot.subtotal}")


def _open(user_id: str | None, role: str):
    return open_cart(cart_stores(), to_principal(user_id, role))


@click.command("add")
@principal_options
@click.option("--product-id", required=True, help="Product id.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, type=AMOUNT, help="Unit price, e.g. 15.00.")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--quantity", default=1, type=int, show_default=True)
def cart_add(
    user_id: str | None, role: str, product_id: str, name: str, price: Decimal, sku: str, quantity: int
) -> None:
    """Add a product to the cart, or raise its quantity."""
    try:
        cart = _open(user_id, role)
        snapshot = cart.add_line(
            NewCartLine(
                product_id=product_id,
                name=name,
                unit_price=Money(price),
                sku=sku,
                quantity=quantity,
            )
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_snapshot(snapshot)


@click.command("remove")
@principal_options
@click.option("--line", "line_id", required=True, help="Cart line id.")
def cart_remove(user_id: str | None, role: str, line_id: str) -> None:
    """Remove a line from the cart."""
    try:
        snapshot = _open(user_id, role).remove_line(line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_snapshot(snapshot)


@click.command("set-qty")
@principal_options
@click.option("--line", "line_id", required=True, help="Cart line id.")
@click.option("--quantity", required=True, type=int, help="New quantity; below 1 becomes 1.")
def cart_set_quantity(user_id: str | None, role: str, line_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        snapshot = _open(user_id, role).set_quantity(line_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_snapshot(snapshot)


@click.command("clear")
@principal_options
def cart_clear(user_id: str | None, role: str) -> None:
    """Empty the cart."""
    try:
        _open(user_id, role).clear()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared.")


@click.command("show")
@principal_options
def cart_show(user_id: str | None, role: str) -> None:
    """Show the cart contents and subtotal."""
    try:
        snapshot = _open(user_id, role).snapshot()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_snapshot(snapshot)
