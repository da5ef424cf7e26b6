"""
Collaborator protocols.

The engine does no I/O. Persistence, price feeds, notification delivery and
an optional real Hijri calendar are supplied by the host application through
these async protocols. Lookups return None for a missing id; raising
``NotFoundError`` is left to the caller that needs the record.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable

from zakatkit.financial.assets import Asset
from zakatkit.financial.hijri import HijriDate
from zakatkit.financial.liability import Liability
from zakatkit.financial.money import Money
from zakatkit.financial.reminder import Reminder, ReminderStatus, ReminderType
from zakatkit.financial.user import User
from zakatkit.financial.vocabulary import AssetType


@runtime_checkable
class AssetRepository(Protocol):
    async def find_by_id(self, asset_id: str) -> Asset | None: ...

    async def find_by_user_id(self, user_id: str) -> list[Asset]: ...

    async def find_by_user_id_and_type(self, user_id: str, asset_type: AssetType) -> list[Asset]: ...

    async def save(self, asset: Asset) -> None: ...

    async def update(self, asset: Asset) -> None: ...

    async def delete(self, asset_id: str) -> None: ...


@runtime_checkable
class LiabilityRepository(Protocol):
    async def find_by_id(self, liability_id: str) -> Liability | None: ...

    async def find_by_user_id(self, user_id: str) -> list[Liability]: ...

    async def find_deductible_by_user_id(self, user_id: str) -> list[Liability]: ...

    async def save(self, liability: Liability) -> None: ...

    async def update(self, liability: Liability) -> None: ...

    async def delete(self, liability_id: str) -> None: ...


@runtime_checkable
class UserRepository(Protocol):
    async def find_by_id(self, user_id: str) -> User | None: ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def save(self, user: User) -> None: ...

    async def update(self, user: User) -> None: ...

    async def delete(self, user_id: str) -> None: ...


@runtime_checkable
class ReminderRepository(Protocol):
    async def find_by_id(self, reminder_id: str) -> Reminder | None: ...

    async def find_by_user_id(self, user_id: str) -> list[Reminder]: ...

    async def find_by_user_id_and_status(self, user_id: str, status: ReminderStatus) -> list[Reminder]: ...

    async def find_by_user_id_and_type(self, user_id: str, reminder_type: ReminderType) -> list[Reminder]: ...

    async def find_due_reminders(self, now: datetime) -> list[Reminder]: ...

    async def save(self, reminder: Reminder) -> None: ...

    async def update(self, reminder: Reminder) -> None: ...

    async def delete(self, reminder_id: str) -> None: ...


@runtime_checkable
class PriceService(Protocol):
    """Market prices. Metal prices are per gram."""

    async def get_gold_price(self, currency: str) -> Money: ...

    async def get_silver_price(self, currency: str) -> Money: ...

    async def get_crypto_price(self, symbol: str, currency: str) -> Money: ...

    async def get_stock_price(self, symbol: str, currency: str) -> Money: ...

    async def get_conversion_rate(self, from_currency: str, to_currency: str) -> float: ...


@runtime_checkable
class NotificationService(Protocol):
    async def send_push_notification(
        self, user_id: str, title: str, message: str, data: dict[str, Any] | None = None
    ) -> None: ...

    async def send_email_notification(self, email: str, subject: str, body: str) -> None: ...

    async def send_sms_notification(self, phone_number: str, message: str) -> None: ...

    async def schedule_notification(
        self,
        user_id: str,
        title: str,
        message: str,
        scheduled_time: datetime,
        data: dict[str, Any] | None = None,
    ) -> str: ...

    async def cancel_scheduled_notification(self, notification_id: str) -> None: ...


@runtime_checkable
class HijriCalendarService(Protocol):
    """Exact calendar conversions, as an alternative to ``HijriDate.today()``."""

    async def get_current_hijri_date(self) -> HijriDate: ...

    async def convert_to_hijri(self, gregorian_date: date) -> HijriDate: ...

    async def convert_to_gregorian(self, hijri_date: HijriDate) -> date: ...

    async def get_ramadan_start_date(self, hijri_year: int) -> HijriDate: ...

    async def days_between(self, start_date: HijriDate, end_date: HijriDate) -> int: ...
