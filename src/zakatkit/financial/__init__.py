"""Zakat domain model: value objects, entities, and the portfolio aggregate."""

from .assets import (
    Asset,
    AssetKind,
    WeightUnit,
    ZakatPayment,
    money_asset,
    precious_metal_asset,
    property_asset,
    stock_asset,
)
from .hijri import HijriDate
from .liability import Liability
from .money import Money
from .portfolio import UserPortfolio
from .reminder import Reminder, ReminderStatus, ReminderType
from .settings import ZakatConfig
from .user import NotificationPreferences, ReminderFrequency, User
from .vocabulary import AssetType, Currency, NisabMethod

__all__ = [
    "Asset",
    "AssetKind",
    "AssetType",
    "Currency",
    "HijriDate",
    "Liability",
    "Money",
    "NisabMethod",
    "NotificationPreferences",
    "Reminder",
    "ReminderFrequency",
    "ReminderStatus",
    "ReminderType",
    "User",
    "UserPortfolio",
    "WeightUnit",
    "ZakatConfig",
    "ZakatPayment",
    "money_asset",
    "precious_metal_asset",
    "property_asset",
    "stock_asset",
]
