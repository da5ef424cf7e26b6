"""User entity and notification preferences."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import StrEnum

from zakatkit.core.exceptions import ValidationError

from .vocabulary import Currency, NisabMethod


class ReminderFrequency(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


@dataclass
class NotificationPreferences:
    enable_push_notifications: bool = True
    enable_email_notifications: bool = False
    enable_sms_notifications: bool = False
    reminder_frequency: ReminderFrequency = ReminderFrequency.MONTHLY
    pre_ramadan_reminder: bool = True
    hawl_completion_reminder: bool = True
    nisab_threshold_alert: bool = True

    def __post_init__(self):
        try:
            self.reminder_frequency = ReminderFrequency(str(self.reminder_frequency).lower())
        except ValueError:
            raise ValidationError(f"Invalid reminder frequency: {self.reminder_frequency}") from None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["reminder_frequency"] = self.reminder_frequency.value
        return data


@dataclass
class User:
    """A zakatkit user.

    Email uniqueness across users is enforced by the user store, not here.
    """

    id: str
    email: str
    name: str
    currency: Currency = Currency.USD
    nisab_method: NisabMethod = NisabMethod.GOLD
    notification_preferences: NotificationPreferences = field(default_factory=NotificationPreferences)
    created_at: datetime = field(default_factory=datetime.now)
    last_login_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.id:
            raise ValidationError("User id cannot be empty")
        if not self.email or "@" not in self.email:
            raise ValidationError(f"Invalid email address: {self.email!r}")
        self.currency = Currency.from_string(str(self.currency))
        self.nisab_method = NisabMethod.from_string(str(self.nisab_method))

    def update_profile(self, name: str, currency: Currency | str) -> None:
        self.name = name
        self.currency = Currency.from_string(str(currency))

    def update_nisab_method(self, method: NisabMethod | str) -> None:
        self.nisab_method = NisabMethod.from_string(str(method))

    def update_notification_preferences(self, preferences: NotificationPreferences) -> None:
        self.notification_preferences = preferences

    def record_login(self) -> None:
        self.last_login_at = datetime.now()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "currency": self.currency.value,
            "nisabMethod": self.nisab_method.value,
            "notificationPreferences": self.notification_preferences.to_dict(),
            "createdAt": self.created_at.isoformat(),
            "lastLoginAt": self.last_login_at.isoformat(),
        }
