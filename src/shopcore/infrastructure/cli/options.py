"""Option types and decorators shared by the command modules."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from shopcore.domain.model.principal import Principal, Role

ROLE_CHOICES = click.Choice([r.value for r in Role], case_sensitive=False)


class AmountType(click.ParamType):
    """A non-negative decimal amount such as ``15.00``."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        if not amount.is_finite() or amount < 0:
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        return amount


AMOUNT = AmountType()


def principal_options(func):
    """Add ``--user-id`` / ``--role`` to a command."""
    func = click.option(
        "--role", default=Role.CUSTOMER.value, type=ROLE_CHOICES, help="Role of the acting user."
    )(func)
    func = click.option("--user-id", default=None, help="Acting user; omit for a guest.")(func)
    return func


def to_principal(user_id: str | None, role: str) -> Principal | None:
    if not user_id:
        return None
    return Principal(id=user_id, role=Role(role.upper()))
