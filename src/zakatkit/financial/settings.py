"""Engine settings: zakat rate, reminder offsets, revaluation period."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from zakatkit.core.config import Config
from zakatkit.core.exceptions import ConfigurationError, ValidationError

from .money import to_decimal
from .vocabulary import Currency, NisabMethod

ZAKAT_RATE_PERCENT = Decimal("2.5")
HAWL_REMINDER_DAYS_BEFORE = 7
PRE_RAMADAN_REMINDER_DAYS_BEFORE = 14
RECURRING_REMINDER_COUNT = 4
PROPERTY_REVALUATION_DAYS = 365


@dataclass
class ZakatConfig:
    """Configuration for zakat calculations and reminder scheduling."""

    zakat_rate_percent: Decimal = ZAKAT_RATE_PERCENT
    hawl_reminder_days_before: int = HAWL_REMINDER_DAYS_BEFORE
    pre_ramadan_days_before: int = PRE_RAMADAN_REMINDER_DAYS_BEFORE
    recurring_reminder_count: int = RECURRING_REMINDER_COUNT
    property_revaluation_days: int = PROPERTY_REVALUATION_DAYS
    gold_price_per_gram: Decimal | None = None
    silver_price_per_gram: Decimal | None = None
    currency: Currency = Currency.USD
    nisab_method: NisabMethod = NisabMethod.GOLD

    def __post_init__(self):
        self.zakat_rate_percent = to_decimal(self.zakat_rate_percent, "zakat rate")
        if not 0 <= self.zakat_rate_percent <= 100:
            raise ValidationError(f"Zakat rate must be between 0 and 100 percent, got {self.zakat_rate_percent}")
        for name in ("gold_price_per_gram", "silver_price_per_gram"):
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, to_decimal(value, name))

    def price_per_gram(self, method: NisabMethod) -> Decimal | None:
        """Configured metal price for a nisab method, if any."""
        if method is NisabMethod.GOLD:
            return self.gold_price_per_gram
        return self.silver_price_per_gram

    @classmethod
    def from_config(cls, config: Config) -> ZakatConfig:
        """Build settings from a Config, coercing env-var strings."""
        try:
            return cls(
                zakat_rate_percent=to_decimal(config.get("zakat.rate_percent", ZAKAT_RATE_PERCENT)),
                hawl_reminder_days_before=int(config.get("reminders.hawl_days_before", HAWL_REMINDER_DAYS_BEFORE)),
                pre_ramadan_days_before=int(
                    config.get("reminders.pre_ramadan_days_before", PRE_RAMADAN_REMINDER_DAYS_BEFORE)
                ),
                recurring_reminder_count=int(config.get("reminders.recurring_count", RECURRING_REMINDER_COUNT)),
                property_revaluation_days=int(
                    config.get("assets.property_revaluation_days", PROPERTY_REVALUATION_DAYS)
                ),
                gold_price_per_gram=config.get("prices.gold_per_gram"),
                silver_price_per_gram=config.get("prices.silver_per_gram"),
                currency=Currency.from_string(str(config.get("user.currency", "USD"))),
                nisab_method=NisabMethod.from_string(str(config.get("user.nisab_method", "GOLD"))),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid zakat configuration: {e}") from e
