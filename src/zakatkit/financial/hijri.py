"""Hijri (Islamic lunar) calendar date.

The calendar model is deliberately coarse and other parts of the engine
depend on it staying that way:

- every month has a 30-day ceiling for validation purposes;
- ``today()`` maps a Gregorian date to Hijri with a fixed linear factor
  on the year and copies month and day across unchanged;
- day arithmetic elsewhere treats a lunar year as 354 days and a lunar
  month as 29.5 days.

None of this is astronomically correct. Hawl and reminder dates computed by
earlier versions must keep matching, so do not "fix" the constants.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date

from zakatkit.core.exceptions import ValidationError

DAYS_PER_LUNAR_YEAR = 354
DAYS_PER_LUNAR_MONTH = 29.5
MAX_DAY = 30

# Gregorian year -> Hijri year linear conversion
HIJRA_GREGORIAN_YEAR = 622
GREGORIAN_TO_HIJRI_FACTOR = 1.030684

RAMADAN = 9

MONTH_NAMES = [
    "Muharram",
    "Safar",
    "Rabi al-Awwal",
    "Rabi al-Thani",
    "Jumada al-Awwal",
    "Jumada al-Thani",
    "Rajab",
    "Shaban",
    "Ramadan",
    "Shawwal",
    "Dhul Qadah",
    "Dhul Hijjah",
]

_HIJRI_PATTERN = re.compile(r"^(\d+)-(\d{2})-(\d{2})H$")


@dataclass(frozen=True, order=True)
class HijriDate:
    """Immutable Hijri date ordered by (year, month, day)."""

    year: int
    month: int
    day: int

    def __post_init__(self):
        for name in ("year", "month", "day"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"Hijri {name} must be an integer, got {value!r}")
        if self.month < 1 or self.month > 12:
            raise ValidationError("Month must be between 1 and 12")
        if self.day < 1 or self.day > MAX_DAY:
            raise ValidationError(f"Day must be between 1 and {MAX_DAY}")
        if self.year < 1:
            raise ValidationError("Year must be positive")

    def add_lunar_year(self, years: int = 1) -> HijriDate:
        return HijriDate(self.year + years, self.month, self.day)

    def add_lunar_months(self, months: int) -> HijriDate:
        total_months = self.month + months
        new_year = self.year + (total_months - 1) // 12
        new_month = (total_months - 1) % 12 + 1
        return HijriDate(new_year, new_month, self.day)

    def is_after(self, other: HijriDate) -> bool:
        return self > other

    def is_after_or_equal(self, other: HijriDate) -> bool:
        return self >= other

    def is_before(self, other: HijriDate) -> bool:
        return self < other

    def equals(self, other: HijriDate) -> bool:
        return self == other

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "day": self.day}

    @classmethod
    def from_dict(cls, data: dict) -> HijriDate:
        try:
            parts = int(data["year"]), int(data["month"]), int(data["day"])
        except KeyError as e:
            raise ValidationError(f"Hijri date is missing field {e}") from None
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Hijri date fields must be whole numbers: {data}") from e
        return cls(*parts)

    @classmethod
    def from_string(cls, value: str) -> HijriDate:
        """Parse ``"1446-03-15H"``."""
        match = _HIJRI_PATTERN.match(value.strip())
        if not match:
            raise ValidationError('Invalid Hijri date format. Expected "YYYY-MM-DDH"')
        return cls(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    @classmethod
    def today(cls, on: date | None = None) -> HijriDate:
        """Approximate Hijri date for a Gregorian date (default: today).

        Only the year is converted; month and day are the Gregorian ones, so
        the 31st of a Gregorian month fails validation.
        """
        gregorian = on or date.today()
        hijri_year = math.floor((gregorian.year - HIJRA_GREGORIAN_YEAR) * GREGORIAN_TO_HIJRI_FACTOR)
        return cls(hijri_year, gregorian.month, gregorian.day)

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}-{self.day:02d}H"


def approximate_days_between(start: HijriDate, end: HijriDate) -> float:
    """Signed day count from ``start`` to ``end`` using 354/29.5-day units."""
    year_diff = end.year - start.year
    month_diff = end.month - start.month
    day_diff = end.day - start.day
    return year_diff * DAYS_PER_LUNAR_YEAR + month_diff * DAYS_PER_LUNAR_MONTH + day_diff
