"""Closed vocabularies: asset types, currencies, and nisab calculation methods.

Each enum validates against a fixed set of codes and carries the facts the
engine derives from it (zakatability, currency symbol, nisab reference weight).
"""

from __future__ import annotations

from enum import StrEnum

from zakatkit.core.exceptions import ValidationError


class AssetType(StrEnum):
    """Zakatable asset categories.

    Every member is zakatable; the domain has no non-zakatable asset type.
    """

    CASH = "CASH"
    GOLD = "GOLD"
    SILVER = "SILVER"
    STOCKS = "STOCKS"
    BONDS = "BONDS"
    MUTUAL_FUNDS = "MUTUAL_FUNDS"
    BUSINESS_INVENTORY = "BUSINESS_INVENTORY"
    BUSINESS_ASSETS = "BUSINESS_ASSETS"
    INVESTMENT_REAL_ESTATE = "INVESTMENT_REAL_ESTATE"
    RECEIVABLE_DEBTS = "RECEIVABLE_DEBTS"

    @property
    def is_zakatable(self) -> bool:
        return self in ZAKATABLE_ASSET_TYPES

    @property
    def display_name(self) -> str:
        """e.g. ``BUSINESS_INVENTORY`` -> ``Business Inventory``."""
        return " ".join(word.capitalize() for word in self.value.split("_"))

    @classmethod
    def from_string(cls, value: str) -> AssetType:
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(f"Invalid asset type: {value}") from None

    @classmethod
    def all_zakatable(cls) -> list[AssetType]:
        return [t for t in cls if t.is_zakatable]


ZAKATABLE_ASSET_TYPES = frozenset(AssetType)


class Currency(StrEnum):
    """Supported ISO 4217 currency codes."""

    USD = "USD"  # US Dollar
    EUR = "EUR"  # Euro
    GBP = "GBP"  # British Pound
    SAR = "SAR"  # Saudi Riyal
    AED = "AED"  # UAE Dirham
    EGP = "EGP"  # Egyptian Pound
    TRY = "TRY"  # Turkish Lira
    MYR = "MYR"  # Malaysian Ringgit
    IDR = "IDR"  # Indonesian Rupiah
    PKR = "PKR"  # Pakistani Rupee
    BDT = "BDT"  # Bangladeshi Taka
    INR = "INR"  # Indian Rupee
    CAD = "CAD"  # Canadian Dollar
    AUD = "AUD"  # Australian Dollar

    @property
    def code(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self, self.value)

    @property
    def is_major(self) -> bool:
        return self in {Currency.USD, Currency.EUR, Currency.GBP}

    @property
    def is_islamic(self) -> bool:
        """Currency of a Muslim-majority country."""
        return self in {
            Currency.SAR,
            Currency.AED,
            Currency.EGP,
            Currency.TRY,
            Currency.MYR,
            Currency.IDR,
            Currency.PKR,
            Currency.BDT,
        }

    @classmethod
    def from_string(cls, code: str) -> Currency:
        try:
            return cls(code.strip().upper())
        except ValueError:
            raise ValidationError(f"Unsupported currency: {code}") from None


CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.SAR: "ر.س",
    Currency.AED: "د.إ",
    Currency.EGP: "ج.م",
    Currency.TRY: "₺",
    Currency.MYR: "RM",
    Currency.IDR: "Rp",
    Currency.PKR: "₨",
    Currency.BDT: "৳",
    Currency.INR: "₹",
    Currency.CAD: "C$",
    Currency.AUD: "A$",
}

# Nisab reference weights in grams
GOLD_NISAB_GRAMS = 85
SILVER_NISAB_GRAMS = 595


class NisabMethod(StrEnum):
    """Which metal the nisab threshold is priced in."""

    GOLD = "GOLD"
    SILVER = "SILVER"

    @property
    def reference_grams(self) -> int:
        match self:
            case NisabMethod.GOLD:
                return GOLD_NISAB_GRAMS
            case NisabMethod.SILVER:
                return SILVER_NISAB_GRAMS

    @property
    def reference_metal(self) -> AssetType:
        return AssetType.GOLD if self is NisabMethod.GOLD else AssetType.SILVER

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} ({self.reference_grams}g)"

    @classmethod
    def from_string(cls, value: str) -> NisabMethod:
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(f"Invalid nisab method: {value}") from None
