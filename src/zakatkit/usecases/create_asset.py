"""Asset creation from a flat request record."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from loguru import logger

from zakatkit.core.exceptions import ValidationError
from zakatkit.financial.assets import (
    Asset,
    AssetKind,
    kind_for_asset_type,
    money_asset,
    precious_metal_asset,
    property_asset,
    stock_asset,
)
from zakatkit.financial.hijri import HijriDate
from zakatkit.financial.money import Money
from zakatkit.financial.settings import ZakatConfig
from zakatkit.financial.vocabulary import AssetType
from zakatkit.interfaces import AssetRepository


def _require(request: dict, key: str):
    if request.get(key) is None:
        raise ValidationError(f"Missing required field: {key}")
    return request[key]


def _optional_money(request: dict, key: str) -> Money | None:
    value = request.get(key)
    return Money.from_dict(value) if value is not None else None


def _optional_date(request: dict, key: str) -> date | None:
    value = request.get(key)
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationError(f"{key} must be an ISO date (YYYY-MM-DD), got {value!r}") from e


def _build_money(request: dict, common: dict, config: ZakatConfig) -> Asset:
    return money_asset(
        asset_type=common.pop("asset_type"),
        value=Money.from_dict(_require(request, "currentValue")),
        institution=request.get("institution"),
        **common,
    )


def _build_stock(request: dict, common: dict, config: ZakatConfig) -> Asset:
    return stock_asset(
        asset_type=common.pop("asset_type"),
        shares=_require(request, "shares"),
        price_per_share=Money.from_dict(_require(request, "pricePerShare")),
        ticker=request.get("ticker", ""),
        **common,
    )


def _build_precious_metal(request: dict, common: dict, config: ZakatConfig) -> Asset:
    return precious_metal_asset(
        metal=common.pop("asset_type"),
        weight=_require(request, "weight"),
        weight_unit=request.get("weightUnit", "GRAM"),
        karat=request.get("karat"),
        silver_purity=request.get("silverPurity"),
        price_per_gram=_optional_money(request, "pricePerGram"),
        value=_optional_money(request, "currentValue"),
        **common,
    )


def _build_property(request: dict, common: dict, config: ZakatConfig) -> Asset:
    common.pop("asset_type")
    return property_asset(
        value=Money.from_dict(_require(request, "currentValue")),
        last_valuation_date=_optional_date(request, "lastValuationDate"),
        address=request.get("address", ""),
        revaluation_period_days=config.property_revaluation_days,
        **common,
    )


_BUILDERS: dict[AssetKind, Callable[[dict, dict, ZakatConfig], Asset]] = {
    AssetKind.MONEY: _build_money,
    AssetKind.STOCK: _build_stock,
    AssetKind.PRECIOUS_METAL: _build_precious_metal,
    AssetKind.PROPERTY: _build_property,
}


def build_asset(request: dict, config: ZakatConfig | None = None) -> Asset:
    """Build the right asset variant for ``request["type"]``.

    Common fields: userId, type, acquisitionDate {year, month, day},
    description, optional id. Kind-specific fields:

    - money: currentValue, institution
    - stock: shares, pricePerShare, ticker
    - precious metal: weight, weightUnit, karat | silverPurity,
      pricePerGram and/or currentValue
    - property: currentValue, lastValuationDate (ISO), address
    """
    config = config or ZakatConfig()
    asset_type = AssetType.from_string(str(_require(request, "type")))
    common = {
        "asset_type": asset_type,
        "user_id": _require(request, "userId"),
        "acquisition_date": HijriDate.from_dict(_require(request, "acquisitionDate")),
        "description": request.get("description", ""),
        "asset_id": request.get("id"),
    }
    return _BUILDERS[kind_for_asset_type(asset_type)](request, common, config)


class CreateAssetUseCase:
    def __init__(self, asset_repository: AssetRepository, config: ZakatConfig | None = None):
        self.assets = asset_repository
        self.config = config or ZakatConfig()

    async def execute(self, request: dict, current_date: HijriDate | None = None) -> dict:
        asset = build_asset(request, self.config)
        await self.assets.save(asset)
        logger.info(f"Created {asset.kind} asset {asset.id} for user {asset.user_id}")
        return asset.to_dict(current_date)
