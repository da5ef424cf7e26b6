"""
Reminder scheduling derived from the Hijri calendar.

Builds Reminder entities (always PENDING) for hawl completion, the run-up to
Ramadan, custom dates, and nisab alerts, and scans a user's assets for hawls
about to complete.

Date arithmetic follows the engine's approximate calendar: subtracting days
rolls back at most one month using a 29-day month, and distances use the
354/29.5-day year/month estimate.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from loguru import logger

from ..assets import Asset
from ..hijri import HijriDate, approximate_days_between
from ..reminder import Reminder, ReminderType
from ..settings import ZakatConfig
from ..user import ReminderFrequency, User

FALLBACK_MONTH_DAYS = 29

# Days ahead of hawl completion that process_user_reminders looks. Independent
# of the configured reminder offset.
HAWL_SCAN_WINDOW_DAYS = 7

# Lunar months to advance per recurring step. Weekly cannot be expressed in
# whole lunar months and therefore does not advance.
RECURRING_STEP_MONTHS: dict[ReminderFrequency, int] = {
    ReminderFrequency.WEEKLY: 0,
    ReminderFrequency.MONTHLY: 1,
    ReminderFrequency.QUARTERLY: 3,
}

RECURRING_MESSAGE = "Reminder to review your zakat obligations."
PRE_RAMADAN_MESSAGE = "Ramadan is approaching. Consider calculating and paying your zakat during this blessed month."


def _new_reminder_id() -> str:
    return f"reminder-{uuid.uuid4().hex[:12]}"


def subtract_days(date: HijriDate, days: int) -> HijriDate:
    """Move ``days`` back, borrowing at most one 29-day month."""
    new_day = date.day - days
    if new_day > 0:
        return HijriDate(date.year, date.month, new_day)
    if date.month > 1:
        return HijriDate(date.year, date.month - 1, FALLBACK_MONTH_DAYS + new_day)
    return HijriDate(date.year - 1, 12, FALLBACK_MONTH_DAYS + new_day)


class ReminderService:
    """Stateless reminder factory."""

    def __init__(
        self,
        config: ZakatConfig | None = None,
        id_factory: Callable[[], str] = _new_reminder_id,
    ):
        self.config = config or ZakatConfig()
        self._new_id = id_factory

    def create_hawl_completion_reminder(
        self,
        user_id: str,
        asset: Asset,
        remind_days_before: int | None = None,
    ) -> Reminder:
        if remind_days_before is None:
            remind_days_before = self.config.hawl_reminder_days_before
        hawl_date = asset.get_hawl_completion_date()
        return Reminder(
            id=self._new_id(),
            user_id=user_id,
            asset_id=asset.id,
            type=ReminderType.HAWL_COMPLETION,
            scheduled_date=subtract_days(hawl_date, remind_days_before),
            message=f"Your {asset.description} will complete its hawl on {hawl_date}. Zakat may be due.",
        )

    def create_pre_ramadan_reminder(
        self,
        user_id: str,
        ramadan_start_date: HijriDate,
        remind_days_before: int | None = None,
    ) -> Reminder:
        if remind_days_before is None:
            remind_days_before = self.config.pre_ramadan_days_before
        return Reminder(
            id=self._new_id(),
            user_id=user_id,
            asset_id=None,
            type=ReminderType.PRE_RAMADAN,
            scheduled_date=subtract_days(ramadan_start_date, remind_days_before),
            message=PRE_RAMADAN_MESSAGE,
        )

    def create_custom_reminder(
        self,
        user_id: str,
        scheduled_date: HijriDate,
        message: str,
        asset_id: str | None = None,
    ) -> Reminder:
        return Reminder(
            id=self._new_id(),
            user_id=user_id,
            asset_id=asset_id,
            type=ReminderType.CUSTOM,
            scheduled_date=scheduled_date,
            message=message,
        )

    def create_nisab_threshold_alert(
        self,
        user_id: str,
        message: str,
        current_date: HijriDate | None = None,
    ) -> Reminder:
        """Alert scheduled for today."""
        return Reminder(
            id=self._new_id(),
            user_id=user_id,
            asset_id=None,
            type=ReminderType.NISAB_THRESHOLD,
            scheduled_date=current_date or HijriDate.today(),
            message=message,
        )

    def process_user_reminders(
        self,
        user: User,
        assets: list[Asset],
        current_date: HijriDate,
    ) -> list[Reminder]:
        """Hawl reminders for unpaid zakatable assets whose hawl completes within the next 7 days."""
        if not user.notification_preferences.hawl_completion_reminder:
            return []

        window = HAWL_SCAN_WINDOW_DAYS
        reminders = []
        for asset in assets:
            if not asset.is_zakatable(current_date.year):
                continue
            days_until = approximate_days_between(current_date, asset.get_hawl_completion_date())
            if 0 < days_until <= window:
                reminders.append(self.create_hawl_completion_reminder(user.id, asset))

        logger.debug(f"User {user.id}: {len(reminders)} hawl reminder(s) on {current_date}")
        return reminders

    def schedule_recurring_reminders(
        self,
        user_id: str,
        frequency: ReminderFrequency | str,
        start_date: HijriDate,
    ) -> list[Reminder]:
        """Fixed number of review reminders stepping by the frequency's lunar-month interval.

        Weekly steps by zero months, so every weekly reminder lands on
        ``start_date``.
        """
        frequency = ReminderFrequency(str(frequency).lower())
        step = RECURRING_STEP_MONTHS[frequency]
        if step == 0:
            logger.warning(
                f"Weekly cadence for user {user_id} cannot be stepped in lunar months; "
                f"all reminders fall on {start_date}"
            )

        reminders = []
        reminder_date = start_date
        for _ in range(self.config.recurring_reminder_count):
            reminders.append(self.create_custom_reminder(user_id, reminder_date, RECURRING_MESSAGE))
            reminder_date = reminder_date.add_lunar_months(step)
        return reminders
