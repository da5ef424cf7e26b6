"""Domain services for zakat calculation and reminder scheduling."""

from .reminders import ReminderService
from .zakat import (
    EligibleAsset,
    IneligibilityReason,
    IneligibleAsset,
    ZakatCalculationResult,
    ZakatCalculationService,
)

__all__ = [
    "EligibleAsset",
    "IneligibilityReason",
    "IneligibleAsset",
    "ReminderService",
    "ZakatCalculationResult",
    "ZakatCalculationService",
]
