"""Currency-tagged monetary value.

Money is immutable: every operation returns a new instance. Binary
operations require both sides to share a currency and the amount can never
go below zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from zakatkit.core.exceptions import (
    CurrencyMismatchError,
    NegativeBalanceError,
    ValidationError,
)
from zakatkit.core.types import Numeric

from .vocabulary import Currency


def to_decimal(value: Numeric, what: str = "amount") -> Decimal:
    """Convert user input to Decimal via ``str`` so floats keep their printed value."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {what}: {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Invalid {what}: {value!r}") from None
    if not result.is_finite():
        raise ValidationError(f"Invalid {what}: {value!r}")
    return result


@dataclass(frozen=True)
class Money:
    """A non-negative amount in one supported currency.

    Attributes:
        amount: Decimal amount, never negative.
        currency: Upper-cased ISO code from ``Currency``.
    """

    amount: Decimal
    currency: str

    def __post_init__(self):
        amount = to_decimal(self.amount)
        if amount < 0:
            raise ValidationError(f"Amount cannot be negative: {amount}")
        currency = Currency.from_string(str(self.currency)).value
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def zero(cls, currency: str) -> Money:
        return cls(Decimal("0"), currency)

    @classmethod
    def from_string(cls, value: str) -> Money:
        """Parse ``"USD 100.00"``."""
        parts = value.strip().split(" ")
        if len(parts) != 2:
            raise ValidationError('Invalid money format. Expected "CURRENCY AMOUNT"')
        return cls(to_decimal(parts[1]), parts[0])

    @classmethod
    def from_dict(cls, data: dict) -> Money:
        try:
            return cls(data["amount"], data["currency"])
        except KeyError as e:
            raise ValidationError(f"Money is missing field {e}") from None
        except TypeError:
            raise ValidationError(f"Money must be a mapping of amount and currency, got {data!r}") from None

    def add(self, other: Money) -> Money:
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._ensure_same_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise NegativeBalanceError(f"Result cannot be negative: {self} - {other}")
        return Money(result, self.currency)

    def multiply(self, factor: Numeric) -> Money:
        factor = to_decimal(factor, "factor")
        if factor < 0:
            raise ValidationError(f"Factor cannot be negative: {factor}")
        return Money(self.amount * factor, self.currency)

    def percentage(self, percent: Numeric) -> Money:
        """Return ``percent`` percent of this amount, e.g. ``percentage(2.5)``."""
        percent = to_decimal(percent, "percentage")
        if percent < 0 or percent > 100:
            raise ValidationError(f"Percentage must be between 0 and 100, got {percent}")
        return Money(self.amount * percent / Decimal(100), self.currency)

    def is_greater_than(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount >= other.amount

    def is_less_than(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def equals(self, other: Money) -> bool:
        return self.amount == other.amount and self.currency == other.currency

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def to_dict(self) -> dict:
        """Flat JSON-friendly form: ``{"amount": 100.0, "currency": "USD"}``."""
        return {"amount": float(self.amount), "currency": self.currency}

    def _ensure_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"
