"""CLI commands for the Order aggregate."""

from __future__ import annotations

from decimal import Decimal

import click

from shopcore.application.dto import CheckoutRequest, OrderDTO
from shopcore.application.list_orders import DEFAULT_PAGE_SIZE, ListOrdersHandler
from shopcore.application.place_order import PlaceOrderHandler
from shopcore.application.show_order import ShowOrderHandler
from shopcore.domain.exceptions import DomainException
from shopcore.domain.model.order import OrderPricing
from shopcore.domain.model.principal import Role, require_role
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.cart_aggregator import open_cart
from shopcore.infrastructure.bootstrap import cart_stores, order_repository
from shopcore.infrastructure.cli.options import AMOUNT, principal_options, to_principal


def _print_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"Id: {dto.id}")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'SKU':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo("  " + "-" * 61)
    for item in dto.items:
        name = item.product_name or item.product_id
        click.echo(
            f"  {name:<20} {item.sku or '-':<12} {item.quantity:>5} "
            f"{item.price:>10} {item.line_total:>10}"
        )
    click.echo()
    click.echo(f"  Subtotal: {dto.subtotal}   Tax: {dto.tax}   Shipping: {dto.shipping}")
    if dto.discount != "$0.00":
        click.echo(f"  Discount: -{dto.discount}")
    click.echo(f"  Total: {dto.total}")


@click.command("place")
@principal_options
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--email", required=True)
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True)
@click.option("--zip", "zip_code", required=True, help="Postal code.")
@click.option("--country", required=True)
@click.option("--phone", default="")
@click.option("--state", default="")
@click.option("--tax", default="0", type=AMOUNT, show_default=True)
@click.option("--shipping", default="0", type=AMOUNT, show_default=True)
@click.option("--discount", default="0", type=AMOUNT, show_default=True)
def order_place(
    user_id: str | None,
    role: str,
    tax: Decimal,
    shipping: Decimal,
    discount: Decimal,
    **billing: str,
) -> None:
    """Place an order from the current cart contents."""
    principal = to_principal(user_id, role)

    try:
        cart = open_cart(cart_stores(), principal)
        pricing = OrderPricing(tax=Money(tax), shipping=Money(shipping), discount=Money(discount))
        request = CheckoutRequest.from_snapshot(cart.snapshot(), billing, pricing)
        dto = PlaceOrderHandler(order_repo=order_repository()).handle(
            principal, request, pricing=pricing
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    # The order is committed; the cart is only emptied afterwards.
    cart.clear()
    _print_order(dto)


@click.command("show")
@principal_options
@click.option("--id", "order_id", required=True, help="Order id.")
def order_show(user_id: str | None, role: str, order_id: str) -> None:
    """Show order details (owner or admin)."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id=order_id, principal=to_principal(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_order(dto)


@click.command("list")
@principal_options
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=DEFAULT_PAGE_SIZE, type=int, show_default=True)
@click.option("--export", "export_mode", is_flag=True, help="Allow page sizes up to the export cap.")
def order_list(user_id: str | None, role: str, page: int, limit: int, export_mode: bool) -> None:
    """List orders, newest first (admin only)."""
    try:
        require_role(to_principal(user_id, role), Role.ADMIN)
        result = ListOrdersHandler(order_repo=order_repository()).handle(
            page=page, limit=limit, export=export_mode
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<26} {'Status':<11} {'Customer':<16} {'Items':>5} {'Total':>12}  Created")
    click.echo("-" * 95)
    for dto in result.items:
        click.echo(
            f"{dto.order_number:<26} {dto.status:<11} {dto.customer_id:<16} "
            f"{len(dto.items):>5} {dto.total:>12}  {dto.created_at}"
        )
    click.echo()
    click.echo(f"Page {result.page} of {result.total_pages}  ({result.total} orders)")
