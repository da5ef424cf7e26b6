"""Zakat calculation use cases: full portfolio calculation and nisab lookup."""

from __future__ import annotations

from datetime import datetime

from loguru import logger

from zakatkit.core.exceptions import NotFoundError
from zakatkit.financial.calculators.zakat import ZakatCalculationService
from zakatkit.financial.hijri import HijriDate
from zakatkit.financial.money import Money
from zakatkit.financial.vocabulary import Currency, NisabMethod
from zakatkit.interfaces import (
    AssetRepository,
    HijriCalendarService,
    LiabilityRepository,
    PriceService,
    UserRepository,
)


async def fetch_metal_price(prices: PriceService, method: NisabMethod, currency: str) -> Money:
    """Per-gram price of the metal a nisab method is priced in."""
    if method is NisabMethod.GOLD:
        return await prices.get_gold_price(currency)
    return await prices.get_silver_price(currency)


class CalculateZakatUseCase:
    """Load a user's portfolio, price the nisab, and run the calculation."""

    def __init__(
        self,
        asset_repository: AssetRepository,
        liability_repository: LiabilityRepository,
        user_repository: UserRepository,
        price_service: PriceService,
        zakat_service: ZakatCalculationService | None = None,
        calendar: HijriCalendarService | None = None,
    ):
        self.assets = asset_repository
        self.liabilities = liability_repository
        self.users = user_repository
        self.prices = price_service
        self.zakat_service = zakat_service or ZakatCalculationService()
        self.calendar = calendar

    async def execute(
        self,
        user_id: str,
        asset_ids: list[str] | None = None,
        current_date: HijriDate | None = None,
    ) -> dict:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        assets = await self.assets.find_by_user_id(user_id)
        if asset_ids:
            wanted = set(asset_ids)
            assets = [a for a in assets if a.id in wanted]

        liabilities = await self.liabilities.find_deductible_by_user_id(user_id)

        price = await fetch_metal_price(self.prices, user.nisab_method, user.currency.value)
        nisab = self.zakat_service.nisab_threshold(user.nisab_method, price)

        if current_date is None:
            current_date = await self._today()

        result = self.zakat_service.calculate_total_zakat(assets, liabilities, nisab, current_date)
        logger.info(
            f"Zakat for user {user_id} on {current_date}: due {result.zakat_due} "
            f"({len(result.eligible_assets)} eligible, {len(result.ineligible_assets)} ineligible)"
        )
        return result.to_dict()

    async def _today(self) -> HijriDate:
        if self.calendar is not None:
            return await self.calendar.get_current_hijri_date()
        return HijriDate.today()


class GetNisabThresholdUseCase:
    """Current nisab threshold for a currency and method."""

    def __init__(self, price_service: PriceService, zakat_service: ZakatCalculationService | None = None):
        self.prices = price_service
        self.zakat_service = zakat_service or ZakatCalculationService()

    async def execute(self, currency: str, method: NisabMethod | str) -> dict:
        currency = Currency.from_string(currency).value
        method = NisabMethod.from_string(str(method))

        price = await fetch_metal_price(self.prices, method, currency)
        threshold = self.zakat_service.nisab_threshold(method, price)
        return {
            "nisabThreshold": threshold.to_dict(),
            "method": method.label,
            "referencePrice": price.to_dict(),
            "gramsRequired": method.reference_grams,
            "lastUpdated": datetime.now().isoformat(),
        }
