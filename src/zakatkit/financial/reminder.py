"""Reminder entity.

State machine:
    pending -> sent                  (mark_as_sent)
    pending/snoozed -> snoozed       (snooze)
    any -> dismissed                 (dismiss)
    any -> pending                   (reschedule; clears the snooze deadline)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from loguru import logger

from zakatkit.core.exceptions import InvalidTransitionError, ValidationError

from .hijri import HijriDate


class ReminderType(StrEnum):
    HAWL_COMPLETION = "HAWL_COMPLETION"
    PRE_RAMADAN = "PRE_RAMADAN"
    CUSTOM = "CUSTOM"
    NISAB_THRESHOLD = "NISAB_THRESHOLD"


class ReminderStatus(StrEnum):
    PENDING = "PENDING"
    SENT = "SENT"
    SNOOZED = "SNOOZED"
    DISMISSED = "DISMISSED"


# Statuses each transition may start from
SEND_FROM = {ReminderStatus.PENDING}
SNOOZE_FROM = {ReminderStatus.PENDING, ReminderStatus.SNOOZED}


@dataclass
class Reminder:
    id: str
    user_id: str
    asset_id: str | None
    type: ReminderType
    scheduled_date: HijriDate
    message: str
    status: ReminderStatus = ReminderStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)
    snoozed_until: datetime | None = None

    def __post_init__(self):
        try:
            self.type = ReminderType(str(self.type).upper())
            self.status = ReminderStatus(str(self.status).upper())
        except ValueError as e:
            raise ValidationError(f"Reminder {self.id}: {e}") from None

    def mark_as_sent(self) -> None:
        self._transition(ReminderStatus.SENT, SEND_FROM)

    def snooze(self, until: datetime) -> None:
        self._transition(ReminderStatus.SNOOZED, SNOOZE_FROM)
        self.snoozed_until = until

    def dismiss(self) -> None:
        self.status = ReminderStatus.DISMISSED

    def reschedule(self, new_date: HijriDate) -> None:
        self.scheduled_date = new_date
        self.status = ReminderStatus.PENDING
        self.snoozed_until = None

    def is_due(self, now: datetime | None = None) -> bool:
        """Pending and past any snooze deadline."""
        if self.status is not ReminderStatus.PENDING:
            return False
        if self.snoozed_until is not None and (now or datetime.now()) < self.snoozed_until:
            return False
        return True

    def _transition(self, target: ReminderStatus, allowed_from: set[ReminderStatus]) -> None:
        if self.status not in allowed_from:
            raise InvalidTransitionError(f"Reminder {self.id} cannot go from {self.status} to {target}")
        logger.debug(f"Reminder {self.id}: {self.status} -> {target}")
        self.status = target

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "assetId": self.asset_id,
            "type": self.type.value,
            "scheduledDate": self.scheduled_date.to_dict(),
            "status": self.status.value,
            "message": self.message,
            "createdAt": self.created_at.isoformat(),
            "snoozedUntil": self.snoozed_until.isoformat() if self.snoozed_until else None,
        }
