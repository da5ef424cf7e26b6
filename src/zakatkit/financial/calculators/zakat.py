"""
Zakat Calculator — portfolio-level zakat obligations.

Implements:
- Per-asset zakat (2.5% of value when the asset is zakatable this year)
- Zakatable wealth: zakatable assets minus immediately-due liabilities
- Nisab threshold from a metal price and the method's reference weight
- Eligibility partition (zakatable AND hawl complete) with reasons
- Approximate days until hawl (354-day year, 29.5-day month)

The zakat due is one rate applied to total wealth, not the sum of per-asset
amounts; per-asset amounts in the result are informational.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from loguru import logger

from zakatkit.core.exceptions import ValidationError
from zakatkit.core.types import Numeric

from ..assets import Asset
from ..hijri import HijriDate, approximate_days_between
from ..liability import Liability
from ..money import Money
from ..settings import ZakatConfig
from ..vocabulary import NisabMethod


class IneligibilityReason(StrEnum):
    NOT_ZAKATABLE = "Asset type is not zakatable"
    HAWL_INCOMPLETE = "Hawl (one lunar year) not yet completed"
    ALREADY_PAID = "Zakat already paid for this cycle"
    BELOW_NISAB = "Total wealth is below the nisab threshold"


@dataclass
class EligibleAsset:
    asset: Asset
    zakat_amount: Money

    def to_dict(self) -> dict:
        return {
            "id": self.asset.id,
            "description": self.asset.description,
            "currentValue": self.asset.current_value.to_dict(),
            "zakatAmount": self.zakat_amount.to_dict(),
        }


@dataclass
class IneligibleAsset:
    asset: Asset
    reason: IneligibilityReason

    def to_dict(self) -> dict:
        return {
            "id": self.asset.id,
            "description": self.asset.description,
            "reason": self.reason.value,
        }


@dataclass
class ZakatCalculationResult:
    """Complete result of a portfolio zakat calculation."""

    total_wealth: Money
    nisab_threshold: Money
    is_above_nisab: bool
    zakat_due: Money
    calculation_date: HijriDate
    zakat_rate_percent: Decimal
    eligible_assets: list[EligibleAsset] = field(default_factory=list)
    ineligible_assets: list[IneligibleAsset] = field(default_factory=list)
    calculated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Flat JSON-serializable response."""
        return {
            "totalWealth": self.total_wealth.to_dict(),
            "nisabThreshold": self.nisab_threshold.to_dict(),
            "isAboveNisab": self.is_above_nisab,
            "zakatDue": self.zakat_due.to_dict(),
            "zakatRatePercent": float(self.zakat_rate_percent),
            "eligibleAssets": [a.to_dict() for a in self.eligible_assets],
            "ineligibleAssets": [a.to_dict() for a in self.ineligible_assets],
            "hijriDate": str(self.calculation_date),
            "calculationDate": self.calculated_at.isoformat(),
        }


class ZakatCalculationService:
    """Stateless zakat calculator.

    Holds only settings; every call works on the snapshots it is given and
    never mutates them.
    """

    def __init__(self, config: ZakatConfig | None = None):
        self.config = config or ZakatConfig()

    @property
    def rate_percent(self) -> Decimal:
        return self.config.zakat_rate_percent

    def calculate_asset_zakat(self, asset: Asset, current_date: HijriDate | None = None) -> Money:
        """Zakat on one asset: zero unless it is zakatable this Hijri year."""
        current_date = current_date or HijriDate.today()
        value = asset.valuation()
        if not asset.is_zakatable(current_date.year):
            return Money.zero(value.currency)
        return value.percentage(self.rate_percent)

    def calculate_total_zakatable_wealth(
        self,
        assets: list[Asset],
        liabilities: list[Liability],
        current_date: HijriDate | None = None,
    ) -> Money:
        """Sum of zakatable asset values minus deductible liabilities.

        The result is in the first asset's currency.

        Raises:
            ValidationError: ``assets`` is empty.
            CurrencyMismatchError: values are in different currencies.
            NegativeBalanceError: deductible liabilities exceed zakatable assets.
        """
        if not assets:
            raise ValidationError("No assets provided")
        current_date = current_date or HijriDate.today()

        total = Money.zero(assets[0].current_value.currency)
        for asset in assets:
            if asset.is_zakatable(current_date.year):
                total = total.add(asset.valuation())

        for liability in liabilities:
            if liability.is_deductible():
                total = total.subtract(liability.amount)

        return total

    def calculate_total_zakat(
        self,
        assets: list[Asset],
        liabilities: list[Liability],
        nisab_threshold: Money,
        current_date: HijriDate | None = None,
    ) -> ZakatCalculationResult:
        """Perform the complete calculation for a set of assets."""
        current_date = current_date or HijriDate.today()
        total_wealth = self.calculate_total_zakatable_wealth(assets, liabilities, current_date)
        meets_nisab = total_wealth.is_greater_than_or_equal(nisab_threshold)

        logger.debug(f"Nisab check: {total_wealth} vs threshold {nisab_threshold} on {current_date}")

        if not meets_nisab:
            logger.info(f"Wealth {total_wealth} below nisab {nisab_threshold}, no zakat due")
            below = IneligibilityReason.BELOW_NISAB
            return ZakatCalculationResult(
                total_wealth=total_wealth,
                nisab_threshold=nisab_threshold,
                is_above_nisab=False,
                zakat_due=Money.zero(total_wealth.currency),
                calculation_date=current_date,
                zakat_rate_percent=self.rate_percent,
                ineligible_assets=[
                    IneligibleAsset(asset, self.ineligibility_reason(asset, current_date) or below) for asset in assets
                ],
            )

        eligible: list[EligibleAsset] = []
        ineligible: list[IneligibleAsset] = []
        for asset in assets:
            reason = self.ineligibility_reason(asset, current_date)
            if reason is None:
                eligible.append(EligibleAsset(asset, self.calculate_asset_zakat(asset, current_date)))
            else:
                ineligible.append(IneligibleAsset(asset, reason))

        return ZakatCalculationResult(
            total_wealth=total_wealth,
            nisab_threshold=nisab_threshold,
            is_above_nisab=True,
            zakat_due=total_wealth.percentage(self.rate_percent),
            calculation_date=current_date,
            zakat_rate_percent=self.rate_percent,
            eligible_assets=eligible,
            ineligible_assets=ineligible,
        )

    @staticmethod
    def ineligibility_reason(asset: Asset, current_date: HijriDate) -> IneligibilityReason | None:
        """Why an asset is not eligible today, or None when it is."""
        if not asset.asset_type.is_zakatable:
            return IneligibilityReason.NOT_ZAKATABLE
        if not asset.has_completed_hawl(current_date):
            return IneligibilityReason.HAWL_INCOMPLETE
        if asset.has_paid_zakat_for_year(current_date.year):
            return IneligibilityReason.ALREADY_PAID
        return None

    @staticmethod
    def calculate_nisab(price_per_gram: Money, grams_required: Numeric) -> Money:
        return price_per_gram.multiply(grams_required)

    def nisab_threshold(self, method: NisabMethod, price_per_gram: Money) -> Money:
        """Nisab for a method: metal price x 85 g (gold) or 595 g (silver)."""
        threshold = self.calculate_nisab(price_per_gram, method.reference_grams)
        logger.debug(f"Nisab ({method.label}) at {price_per_gram}/g = {threshold}")
        return threshold

    @staticmethod
    def calculate_days_until_hawl(acquisition_date: HijriDate, current_date: HijriDate) -> float:
        """Approximate days until hawl completes; 0 once it has."""
        hawl_completion_date = acquisition_date.add_lunar_year(1)
        if current_date.is_after_or_equal(hawl_completion_date):
            return 0
        return approximate_days_between(current_date, hawl_completion_date)
