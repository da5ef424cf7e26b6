"""UserPortfolio aggregate: one user's assets and liabilities."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from loguru import logger

from zakatkit.core.exceptions import DuplicateEntryError, NotFoundError, OwnershipError

from .assets import Asset, ZakatPayment
from .liability import Liability
from .money import Money
from .settings import ZAKAT_RATE_PERCENT
from .user import User
from .vocabulary import AssetType


class UserPortfolio:
    """Aggregate root over a user, their assets, and their liabilities.

    Every asset and liability must belong to the portfolio's user and have an
    id unique within the portfolio. Totals are expressed in the user's
    currency; an empty collection totals to zero.
    """

    def __init__(
        self,
        user: User,
        assets: Iterable[Asset] = (),
        liabilities: Iterable[Liability] = (),
    ):
        self._user = user
        self._assets: dict[str, Asset] = {}
        self._liabilities: dict[str, Liability] = {}

        for asset in assets:
            self.add_asset(asset)
        for liability in liabilities:
            self.add_liability(liability)

    @property
    def user(self) -> User:
        return self._user

    @property
    def currency(self) -> str:
        return self._user.currency.value

    @property
    def assets(self) -> list[Asset]:
        return list(self._assets.values())

    @property
    def liabilities(self) -> list[Liability]:
        return list(self._liabilities.values())

    # -- assets ---------------------------------------------------------

    def add_asset(self, asset: Asset) -> None:
        if asset.user_id != self._user.id:
            raise OwnershipError(f"Asset {asset.id} does not belong to user {self._user.id}")
        if asset.id in self._assets:
            raise DuplicateEntryError(f"Asset {asset.id} already exists in portfolio")
        self._assets[asset.id] = asset

    def remove_asset(self, asset_id: str) -> Asset:
        if asset_id not in self._assets:
            raise NotFoundError(f"Asset {asset_id} not found in portfolio")
        return self._assets.pop(asset_id)

    def update_asset(self, asset_id: str, new_value: Money) -> None:
        self._require_asset(asset_id).update_value(new_value)

    def get_asset(self, asset_id: str) -> Asset | None:
        return self._assets.get(asset_id)

    def get_assets_by_type(self, asset_type: AssetType | str) -> list[Asset]:
        asset_type = AssetType.from_string(str(asset_type))
        return [a for a in self._assets.values() if a.asset_type is asset_type]

    def get_zakatable_assets(self, hijri_year: int) -> list[Asset]:
        return [a for a in self._assets.values() if a.is_zakatable(hijri_year)]

    # -- liabilities ----------------------------------------------------

    def add_liability(self, liability: Liability) -> None:
        if liability.user_id != self._user.id:
            raise OwnershipError(f"Liability {liability.id} does not belong to user {self._user.id}")
        if liability.id in self._liabilities:
            raise DuplicateEntryError(f"Liability {liability.id} already exists in portfolio")
        self._liabilities[liability.id] = liability

    def remove_liability(self, liability_id: str) -> Liability:
        if liability_id not in self._liabilities:
            raise NotFoundError(f"Liability {liability_id} not found in portfolio")
        return self._liabilities.pop(liability_id)

    def update_liability(self, liability_id: str, new_amount: Money) -> None:
        liability = self._liabilities.get(liability_id)
        if liability is None:
            raise NotFoundError(f"Liability {liability_id} not found in portfolio")
        liability.update_amount(new_amount)

    def get_liability(self, liability_id: str) -> Liability | None:
        return self._liabilities.get(liability_id)

    # -- totals ---------------------------------------------------------

    def calculate_total_asset_value(self) -> Money:
        total = Money.zero(self.currency)
        for asset in self._assets.values():
            total = total.add(asset.current_value)
        return total

    def calculate_total_liabilities(self) -> Money:
        total = Money.zero(self.currency)
        for liability in self._liabilities.values():
            total = total.add(liability.amount)
        return total

    def calculate_net_wealth(self) -> Money:
        """Total assets minus all liabilities.

        Raises:
            NegativeBalanceError: liabilities exceed assets.
        """
        return self.calculate_total_asset_value().subtract(self.calculate_total_liabilities())

    # -- bulk zakat status ----------------------------------------------

    def mark_all_zakat_as_paid(
        self,
        hijri_year: int,
        paid_date: datetime | None = None,
        rate_percent: Decimal = ZAKAT_RATE_PERCENT,
    ) -> list[ZakatPayment]:
        """Record a payment for ``hijri_year`` on every asset still zakatable that year.

        Each asset's recorded amount is ``rate_percent`` of its current value.
        """
        paid_date = paid_date or datetime.now()
        payments = [
            asset.mark_zakat_as_paid(hijri_year, asset.current_value.percentage(rate_percent), paid_date)
            for asset in self._assets.values()
            if asset.is_zakatable(hijri_year)
        ]
        logger.info(f"Marked zakat paid for {len(payments)} asset(s) of user {self._user.id}, Hijri year {hijri_year}")
        return payments

    def reset_all_zakat_status(self, hijri_year: int) -> int:
        """Clear the ``hijri_year`` payment on every asset. Returns how many were cleared."""
        cleared = sum(1 for asset in self._assets.values() if asset.reset_zakat_status(hijri_year))
        logger.info(f"Reset zakat status on {cleared} asset(s) of user {self._user.id}, Hijri year {hijri_year}")
        return cleared

    def _require_asset(self, asset_id: str) -> Asset:
        asset = self._assets.get(asset_id)
        if asset is None:
            raise NotFoundError(f"Asset {asset_id} not found in portfolio")
        return asset
