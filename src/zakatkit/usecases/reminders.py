"""Reminder use cases: generating hawl reminders and delivering due ones."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from functools import partial

from loguru import logger

from zakatkit.core.exceptions import NotFoundError
from zakatkit.financial.calculators.reminders import ReminderService
from zakatkit.financial.hijri import HijriDate
from zakatkit.interfaces import (
    AssetRepository,
    NotificationService,
    ReminderRepository,
    UserRepository,
)

NOTIFICATION_TITLE = "Zakat Reminder"


class GenerateHawlRemindersUseCase:
    """Scan one user's assets and store reminders for hawls about to complete."""

    def __init__(
        self,
        user_repository: UserRepository,
        asset_repository: AssetRepository,
        reminder_repository: ReminderRepository,
        reminder_service: ReminderService | None = None,
    ):
        self.users = user_repository
        self.assets = asset_repository
        self.reminders = reminder_repository
        self.reminder_service = reminder_service or ReminderService()

    async def execute(self, user_id: str, current_date: HijriDate | None = None) -> list[dict]:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        assets = await self.assets.find_by_user_id(user_id)
        reminders = self.reminder_service.process_user_reminders(user, assets, current_date or HijriDate.today())
        for reminder in reminders:
            await self.reminders.save(reminder)
        return [r.to_dict() for r in reminders]


class ProcessRemindersUseCase:
    """Deliver due reminders through the user's enabled channels.

    One reminder failing is logged and skipped; the batch always completes.
    """

    def __init__(
        self,
        reminder_repository: ReminderRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
    ):
        self.reminders = reminder_repository
        self.users = user_repository
        self.notifications = notification_service

    async def execute(self, user_id: str | None = None, now: datetime | None = None) -> dict[str, int]:
        """Returns ``{"processed": n, "sent": m}``.

        ``sent`` counts reminders delivered on at least one channel. Such a
        reminder is marked sent even if another channel failed; a reminder
        whose every enabled channel failed stays pending for the next run.
        """
        now = now or datetime.now()
        due = await self.reminders.find_due_reminders(now)

        processed = 0
        sent = 0
        for reminder in due:
            if user_id and reminder.user_id != user_id:
                continue
            processed += 1
            try:
                user = await self.users.find_by_id(reminder.user_id)
                if user is None:
                    logger.warning(f"Skipping reminder {reminder.id}: user {reminder.user_id} not found")
                    continue

                channels = self._channels(user, reminder)
                delivered = False
                for name, send in channels:
                    try:
                        await send()
                        delivered = True
                    except Exception:
                        logger.exception(f"Reminder {reminder.id}: {name} delivery to {user.id} failed")

                if channels and not delivered:
                    continue
                reminder.mark_as_sent()
                await self.reminders.update(reminder)
                if delivered:
                    sent += 1
            except Exception:
                logger.exception(f"Failed to process reminder {reminder.id}")

        logger.info(f"Processed {processed} reminder(s), sent {sent}")
        return {"processed": processed, "sent": sent}

    def _channels(self, user, reminder) -> list[tuple[str, Callable[[], Awaitable[None]]]]:
        """Enabled delivery channels as ``(name, send)`` pairs, push first."""
        prefs = user.notification_preferences
        channels = []
        if prefs.enable_push_notifications:
            data = {"reminderId": reminder.id, "assetId": reminder.asset_id, "type": reminder.type.value}
            send_push = partial(
                self.notifications.send_push_notification, user.id, NOTIFICATION_TITLE, reminder.message, data
            )
            channels.append(("push", send_push))
        if prefs.enable_email_notifications:
            send_email = partial(
                self.notifications.send_email_notification, user.email, NOTIFICATION_TITLE, reminder.message
            )
            channels.append(("email", send_email))
        return channels
