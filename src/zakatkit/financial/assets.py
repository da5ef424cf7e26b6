"""Asset entities.

An asset is one tagged record: the shared base fields (owner, type, value,
acquisition date, zakat payment history) plus a ``details`` record chosen by
``kind``. Per-kind behavior (construction rules, valuation) lives in dispatch
tables keyed by ``AssetKind`` instead of a class hierarchy:

    MONEY           cash, bonds, receivables, business stock  -> stored value
    STOCK           stocks, mutual funds                      -> shares x price
    PRECIOUS_METAL  gold (karat) or silver (purity)           -> grams x price/gram
    PROPERTY        investment real estate                    -> last appraisal

Hawl: an asset becomes eligible one lunar year after acquisition. Zakat
payments are recorded per Hijri year, at most one per year.

Entities are mutable and not synchronized; callers serialize concurrent
mutation of the same instance.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum

from loguru import logger

from zakatkit.core.exceptions import (
    CurrencyMismatchError,
    DuplicateEntryError,
    InvariantViolation,
    ValidationError,
)
from zakatkit.core.types import Numeric

from .hijri import HijriDate
from .money import Money, to_decimal
from .settings import PROPERTY_REVALUATION_DAYS
from .vocabulary import AssetType

GRAMS_PER_OUNCE = Decimal("28.3495")

MIN_KARAT = 1
MAX_KARAT = 24


class AssetKind(StrEnum):
    MONEY = "MONEY"
    STOCK = "STOCK"
    PRECIOUS_METAL = "PRECIOUS_METAL"
    PROPERTY = "PROPERTY"


class WeightUnit(StrEnum):
    GRAM = "GRAM"
    OUNCE = "OUNCE"

    @classmethod
    def from_string(cls, value: str) -> WeightUnit:
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValidationError(f"Invalid weight unit: {value}. Expected GRAM or OUNCE") from None


# Asset types each kind may carry
KIND_ASSET_TYPES: dict[AssetKind, frozenset[AssetType]] = {
    AssetKind.MONEY: frozenset(
        {
            AssetType.CASH,
            AssetType.BONDS,
            AssetType.RECEIVABLE_DEBTS,
            AssetType.BUSINESS_INVENTORY,
            AssetType.BUSINESS_ASSETS,
        }
    ),
    AssetKind.STOCK: frozenset({AssetType.STOCKS, AssetType.MUTUAL_FUNDS}),
    AssetKind.PRECIOUS_METAL: frozenset({AssetType.GOLD, AssetType.SILVER}),
    AssetKind.PROPERTY: frozenset({AssetType.INVESTMENT_REAL_ESTATE}),
}


def kind_for_asset_type(asset_type: AssetType) -> AssetKind:
    """The asset kind that handles a given asset type."""
    for kind, types in KIND_ASSET_TYPES.items():
        if asset_type in types:
            return kind
    raise ValidationError(f"No asset kind handles type {asset_type}")


@dataclass(frozen=True)
class ZakatPayment:
    """One recorded zakat payment for a Hijri year."""

    hijri_year: int
    paid_date: datetime
    amount: Money

    def to_dict(self) -> dict:
        return {
            "hijriYear": self.hijri_year,
            "paidDate": self.paid_date.isoformat(),
            "amount": self.amount.to_dict(),
        }


@dataclass
class MoneyDetails:
    institution: str | None = None


@dataclass
class StockDetails:
    """Share position. Value is always ``shares x price_per_share``."""

    shares: Decimal
    price_per_share: Money
    ticker: str = ""

    def __post_init__(self):
        self.shares = to_decimal(self.shares, "share count")


@dataclass
class PreciousMetalDetails:
    """Physical metal holding.

    Attributes:
        weight: Weight in ``weight_unit``.
        weight_unit: GRAM or OUNCE (1 oz = 28.3495 g).
        karat: Gold purity, 1-24. Gold only.
        silver_purity: Silver fineness as a fraction in (0, 1]. Silver only.
        price_per_gram: Last market price applied, if any.
    """

    weight: Decimal
    weight_unit: WeightUnit = WeightUnit.GRAM
    karat: int | None = None
    silver_purity: Decimal | None = None
    price_per_gram: Money | None = None

    def __post_init__(self):
        self.weight = to_decimal(self.weight, "weight")
        self.weight_unit = WeightUnit(self.weight_unit)
        if self.silver_purity is not None:
            self.silver_purity = to_decimal(self.silver_purity, "silver purity")

    @property
    def weight_in_grams(self) -> Decimal:
        if self.weight_unit is WeightUnit.OUNCE:
            return self.weight * GRAMS_PER_OUNCE
        return self.weight


@dataclass
class PropertyDetails:
    last_valuation_date: date
    address: str = ""
    revaluation_period_days: int = PROPERTY_REVALUATION_DAYS


AssetDetails = MoneyDetails | StockDetails | PreciousMetalDetails | PropertyDetails

KIND_DETAILS: dict[AssetKind, type] = {
    AssetKind.MONEY: MoneyDetails,
    AssetKind.STOCK: StockDetails,
    AssetKind.PRECIOUS_METAL: PreciousMetalDetails,
    AssetKind.PROPERTY: PropertyDetails,
}


@dataclass
class Asset:
    """A zakatable holding owned by one user.

    Build instances with ``money_asset``, ``stock_asset``,
    ``precious_metal_asset`` or ``property_asset``; direct construction runs
    the same validation.
    """

    id: str
    user_id: str
    kind: AssetKind
    asset_type: AssetType
    current_value: Money
    acquisition_date: HijriDate
    description: str
    details: AssetDetails
    last_updated: datetime = field(default_factory=datetime.now)
    zakat_payment_history: list[ZakatPayment] = field(default_factory=list)

    def __post_init__(self):
        self.kind = AssetKind(self.kind)
        self.asset_type = AssetType.from_string(str(self.asset_type))
        if not self.id:
            raise ValidationError("Asset id cannot be empty")
        if not self.user_id:
            raise ValidationError("Asset user_id cannot be empty")
        if self.asset_type not in KIND_ASSET_TYPES[self.kind]:
            allowed = ", ".join(sorted(KIND_ASSET_TYPES[self.kind]))
            raise ValidationError(f"{self.kind} asset cannot have type {self.asset_type}; expected one of: {allowed}")
        expected_details = KIND_DETAILS[self.kind]
        if not isinstance(self.details, expected_details):
            raise ValidationError(f"{self.kind} asset requires {expected_details.__name__}")
        _DETAIL_VALIDATORS[self.kind](self)

        years = [p.hijri_year for p in self.zakat_payment_history]
        if len(years) != len(set(years)):
            raise DuplicateEntryError(f"Asset {self.id} has more than one zakat payment for the same Hijri year")

    # -- valuation -------------------------------------------------------

    def valuation(self, on: date | None = None) -> Money:
        """Current value according to this kind's valuation rule.

        A property whose appraisal is older than its revaluation period is
        still valued at that appraisal; a warning is logged.
        """
        if self.kind is AssetKind.PROPERTY and self.is_valuation_stale(on):
            logger.warning(
                f"Valuation of property {self.id} ({self.description}) is stale: "
                f"last appraised {self.details.last_valuation_date.isoformat()}"
            )
        return _VALUE_RULES[self.kind](self)

    def update_value(self, new_value: Money) -> None:
        """Set the value directly.

        Not allowed for share positions, whose value is derived from shares
        and price. For metals this drops the stored market price; for
        property it counts as a revaluation today.
        """
        if self.kind is AssetKind.STOCK:
            raise InvariantViolation(
                f"Stock asset {self.id} is valued from shares x price; use update_stock_position()"
            )
        self._ensure_currency(new_value)
        if self.kind is AssetKind.PRECIOUS_METAL:
            self.details.price_per_gram = None
        elif self.kind is AssetKind.PROPERTY:
            self.details.last_valuation_date = date.today()
        self._set_value(new_value)

    def update_stock_position(
        self,
        shares: Numeric | None = None,
        price_per_share: Money | None = None,
    ) -> Money:
        """Change share count and/or price and recompute the value."""
        self._require_kind(AssetKind.STOCK)
        if shares is not None:
            shares = to_decimal(shares, "share count")
            if shares < 0:
                raise ValidationError(f"Share count cannot be negative: {shares}")
            self.details.shares = shares
        if price_per_share is not None:
            self._ensure_currency(price_per_share)
            self.details.price_per_share = price_per_share
        self._set_value(_VALUE_RULES[self.kind](self))
        return self.current_value

    def update_value_from_market_price(self, price_per_gram: Money) -> Money:
        """Reprice a metal holding: weight in grams x market price per gram."""
        self._require_kind(AssetKind.PRECIOUS_METAL)
        self._ensure_currency(price_per_gram)
        self.details.price_per_gram = price_per_gram
        self._set_value(_VALUE_RULES[self.kind](self))
        return self.current_value

    def revalue(self, new_value: Money, valuation_date: date | None = None) -> None:
        """Record a fresh property appraisal."""
        self._require_kind(AssetKind.PROPERTY)
        self._ensure_currency(new_value)
        self.details.last_valuation_date = valuation_date or date.today()
        self._set_value(new_value)

    def is_valuation_stale(self, on: date | None = None) -> bool:
        """True when a property has gone unappraised for longer than its revaluation period."""
        if self.kind is not AssetKind.PROPERTY:
            return False
        age = (on or date.today()) - self.details.last_valuation_date
        return age.days > self.details.revaluation_period_days

    # -- hawl and eligibility -------------------------------------------

    def get_hawl_completion_date(self) -> HijriDate:
        """One lunar year after acquisition."""
        return self.acquisition_date.add_lunar_year(1)

    def has_completed_hawl(self, current_date: HijriDate) -> bool:
        return current_date.is_after_or_equal(self.get_hawl_completion_date())

    def has_paid_zakat_for_year(self, hijri_year: int) -> bool:
        return any(p.hijri_year == hijri_year for p in self.zakat_payment_history)

    def is_zakatable(self, hijri_year: int) -> bool:
        """Type is zakatable and nothing has been paid for ``hijri_year``."""
        return self.asset_type.is_zakatable and not self.has_paid_zakat_for_year(hijri_year)

    def is_zakatable_for_year(self, hijri_year: int, current_date: HijriDate) -> bool:
        """Type is zakatable, hawl is complete, and ``hijri_year`` is unpaid."""
        return self.is_zakatable(hijri_year) and self.has_completed_hawl(current_date)

    # -- payment history ------------------------------------------------

    def mark_zakat_as_paid(
        self,
        hijri_year: int,
        amount: Money,
        paid_date: datetime | None = None,
    ) -> ZakatPayment:
        """Record the zakat payment for ``hijri_year``.

        Raises:
            DuplicateEntryError: a payment for that year is already recorded.
        """
        if self.has_paid_zakat_for_year(hijri_year):
            raise DuplicateEntryError(f"Zakat for Hijri year {hijri_year} already recorded on asset {self.id}")
        payment = ZakatPayment(hijri_year=hijri_year, paid_date=paid_date or datetime.now(), amount=amount)
        self.zakat_payment_history.append(payment)
        logger.info(f"Recorded zakat {amount} for asset {self.id}, Hijri year {hijri_year}")
        return payment

    def reset_zakat_status(self, hijri_year: int) -> bool:
        """Remove the payment recorded for ``hijri_year``. Returns whether one existed."""
        remaining = [p for p in self.zakat_payment_history if p.hijri_year != hijri_year]
        removed = len(remaining) != len(self.zakat_payment_history)
        self.zakat_payment_history = remaining
        if removed:
            logger.info(f"Reset zakat status of asset {self.id} for Hijri year {hijri_year}")
        return removed

    # -- serialization --------------------------------------------------

    def to_dict(self, current_date: HijriDate | None = None) -> dict:
        current_date = current_date or HijriDate.today()
        return {
            "id": self.id,
            "userId": self.user_id,
            "kind": self.kind.value,
            "type": self.asset_type.value,
            "currentValue": self.current_value.to_dict(),
            "acquisitionDate": self.acquisition_date.to_dict(),
            "description": self.description,
            "lastUpdated": self.last_updated.isoformat(),
            "zakatPaidStatus": self.has_paid_zakat_for_year(current_date.year),
            "zakatPaymentHistory": [p.to_dict() for p in self.zakat_payment_history],
            "hawlCompletionDate": self.get_hawl_completion_date().to_dict(),
            "hasCompletedHawl": self.has_completed_hawl(current_date),
            "isZakatable": self.is_zakatable(current_date.year),
        }

    def _set_value(self, value: Money) -> None:
        self.current_value = value
        self.last_updated = datetime.now()

    def _ensure_currency(self, value: Money) -> None:
        if value.currency != self.current_value.currency:
            raise CurrencyMismatchError(self.current_value.currency, value.currency)

    def _require_kind(self, kind: AssetKind) -> None:
        if self.kind is not kind:
            raise InvariantViolation(f"Operation requires a {kind} asset; {self.id} is {self.kind}")


# -- per-kind rules -----------------------------------------------------


def _validate_money(asset: Asset) -> None:
    pass


def _validate_stock(asset: Asset) -> None:
    details: StockDetails = asset.details
    if details.shares < 0:
        raise ValidationError(f"Share count cannot be negative: {details.shares}")
    if details.price_per_share.currency != asset.current_value.currency:
        raise CurrencyMismatchError(asset.current_value.currency, details.price_per_share.currency)


def _validate_precious_metal(asset: Asset) -> None:
    details: PreciousMetalDetails = asset.details
    if details.weight <= 0:
        raise ValidationError(f"Metal weight must be positive: {details.weight}")

    if asset.asset_type is AssetType.GOLD:
        if details.karat is None:
            raise ValidationError("Gold asset requires a karat")
        if details.silver_purity is not None:
            raise ValidationError("Gold asset cannot have a silver purity")
        if isinstance(details.karat, bool) or not isinstance(details.karat, int):
            raise ValidationError(f"Karat must be an integer, got {details.karat!r}")
        if not MIN_KARAT <= details.karat <= MAX_KARAT:
            raise ValidationError(f"Karat must be between {MIN_KARAT} and {MAX_KARAT}")
    else:
        if details.silver_purity is None:
            raise ValidationError("Silver asset requires a silver purity")
        if details.karat is not None:
            raise ValidationError("Silver asset cannot have a karat")
        if not 0 < details.silver_purity <= 1:
            raise ValidationError("Silver purity must be in (0, 1]")

    if details.price_per_gram is not None and details.price_per_gram.currency != asset.current_value.currency:
        raise CurrencyMismatchError(asset.current_value.currency, details.price_per_gram.currency)


def _validate_property(asset: Asset) -> None:
    details: PropertyDetails = asset.details
    if details.revaluation_period_days <= 0:
        raise ValidationError("Revaluation period must be positive")


_DETAIL_VALIDATORS: dict[AssetKind, Callable[[Asset], None]] = {
    AssetKind.MONEY: _validate_money,
    AssetKind.STOCK: _validate_stock,
    AssetKind.PRECIOUS_METAL: _validate_precious_metal,
    AssetKind.PROPERTY: _validate_property,
}


def _stored_value(asset: Asset) -> Money:
    return asset.current_value


def _stock_value(asset: Asset) -> Money:
    return asset.details.price_per_share.multiply(asset.details.shares)


def _metal_value(asset: Asset) -> Money:
    if asset.details.price_per_gram is None:
        return asset.current_value
    return asset.details.price_per_gram.multiply(asset.details.weight_in_grams)


_VALUE_RULES: dict[AssetKind, Callable[[Asset], Money]] = {
    AssetKind.MONEY: _stored_value,
    AssetKind.STOCK: _stock_value,
    AssetKind.PRECIOUS_METAL: _metal_value,
    AssetKind.PROPERTY: _stored_value,
}


# -- factories ----------------------------------------------------------


def new_asset_id() -> str:
    return f"asset-{uuid.uuid4().hex[:12]}"


def money_asset(
    user_id: str,
    asset_type: AssetType | str,
    value: Money,
    acquisition_date: HijriDate,
    description: str,
    *,
    asset_id: str | None = None,
    institution: str | None = None,
) -> Asset:
    """Cash-like holding valued at its stored amount."""
    return Asset(
        id=asset_id or new_asset_id(),
        user_id=user_id,
        kind=AssetKind.MONEY,
        asset_type=AssetType.from_string(str(asset_type)),
        current_value=value,
        acquisition_date=acquisition_date,
        description=description,
        details=MoneyDetails(institution=institution),
    )


def stock_asset(
    user_id: str,
    shares: Numeric,
    price_per_share: Money,
    acquisition_date: HijriDate,
    description: str,
    *,
    asset_id: str | None = None,
    ticker: str = "",
    asset_type: AssetType | str = AssetType.STOCKS,
) -> Asset:
    """Share position; value is shares x price per share."""
    details = StockDetails(shares=shares, price_per_share=price_per_share, ticker=ticker)
    if details.shares < 0:
        raise ValidationError(f"Share count cannot be negative: {details.shares}")
    return Asset(
        id=asset_id or new_asset_id(),
        user_id=user_id,
        kind=AssetKind.STOCK,
        asset_type=AssetType.from_string(str(asset_type)),
        current_value=price_per_share.multiply(details.shares),
        acquisition_date=acquisition_date,
        description=description,
        details=details,
    )


def precious_metal_asset(
    user_id: str,
    metal: AssetType | str,
    weight: Numeric,
    acquisition_date: HijriDate,
    description: str,
    *,
    asset_id: str | None = None,
    weight_unit: WeightUnit | str = WeightUnit.GRAM,
    karat: int | None = None,
    silver_purity: Numeric | None = None,
    price_per_gram: Money | None = None,
    value: Money | None = None,
) -> Asset:
    """Gold or silver holding.

    Either ``price_per_gram`` (value is computed from weight) or ``value``
    (taken as-is until the next market update) must be given.
    """
    details = PreciousMetalDetails(
        weight=weight,
        weight_unit=WeightUnit.from_string(weight_unit),
        karat=karat,
        silver_purity=silver_purity,
        price_per_gram=price_per_gram,
    )
    if price_per_gram is not None:
        current_value = price_per_gram.multiply(details.weight_in_grams)
    elif value is not None:
        current_value = value
    else:
        raise ValidationError("Metal asset needs either a price per gram or an initial value")
    return Asset(
        id=asset_id or new_asset_id(),
        user_id=user_id,
        kind=AssetKind.PRECIOUS_METAL,
        asset_type=AssetType.from_string(str(metal)),
        current_value=current_value,
        acquisition_date=acquisition_date,
        description=description,
        details=details,
    )


def property_asset(
    user_id: str,
    value: Money,
    acquisition_date: HijriDate,
    description: str,
    *,
    asset_id: str | None = None,
    last_valuation_date: date | None = None,
    address: str = "",
    revaluation_period_days: int = PROPERTY_REVALUATION_DAYS,
) -> Asset:
    """Investment real estate valued at its last appraisal."""
    return Asset(
        id=asset_id or new_asset_id(),
        user_id=user_id,
        kind=AssetKind.PROPERTY,
        asset_type=AssetType.INVESTMENT_REAL_ESTATE,
        current_value=value,
        acquisition_date=acquisition_date,
        description=description,
        details=PropertyDetails(
            last_valuation_date=last_valuation_date or date.today(),
            address=address,
            revaluation_period_days=revaluation_period_days,
        ),
    )
