"""Money and quantity values used by carts, orders and invoices.

Amounts stay exact ``Decimal`` through every sum; rounding to cents is a
display concern and happens only in ``quantized()`` and the formatters.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from shopcore.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "USD"
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative amount in a single currency."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite() or self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    # --- Construction ---------------------------------------------------------

    @classmethod
    def of(cls, amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Parse a price as it arrives from a form, a payload or storage."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal(0), currency)

    @classmethod
    def total_of(cls, amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        total = cls.zero(currency)
        for amount in amounts:
            total += amount
        return total

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same(other).amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        remainder = self.amount - self._same(other).amount
        if remainder < 0:
            raise ValidationError(
                f"Deducting {other} from {self} would result in a negative amount"
            )
        return Money(remainder, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same(other).amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > self._same(other).amount

    @property
    def is_zero(self) -> bool:
        return not self.amount

    def _same(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other

    # --- Formatting -----------------------------------------------------------

    def quantized(self) -> Decimal:
        return self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP)

    def plain(self) -> str:
        """``"12.50"``: cents, no symbol. Used for exports and logs."""
        return str(self.quantized())

    def __str__(self) -> str:
        return f"${self.quantized()}"


@dataclass(frozen=True)
class Quantity:
    """How many units of a product; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
