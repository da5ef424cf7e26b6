"""Shared test fixtures for zakatkit."""

import os
import tempfile

import pytest

from zakatkit.core.config import reset_config
from zakatkit.financial import (
    HijriDate,
    Liability,
    Money,
    NotificationPreferences,
    User,
    money_asset,
    precious_metal_asset,
)

ACQUIRED = HijriDate(1445, 3, 10)
HAWL_DONE = HijriDate(1446, 5, 1)


def usd(amount) -> Money:
    return Money(amount, "USD")


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "zakat": {"rate_percent": 2.5},
        "prices": {"gold_per_gram": 60, "silver_per_gram": 0.8},
        "user": {"currency": "USD", "nisab_method": "GOLD"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def user():
    return User(id="u1", email="amina@example.com", name="Amina")


@pytest.fixture
def cash_asset():
    return money_asset("u1", "CASH", usd(6000), ACQUIRED, "Savings", asset_id="cash-1")


@pytest.fixture
def gold_asset():
    return precious_metal_asset(
        "u1",
        "GOLD",
        100,
        ACQUIRED,
        "Gold bangles",
        asset_id="gold-1",
        karat=22,
        value=usd(4000),
    )


@pytest.fixture
def card_debt():
    return Liability(
        id="debt-1",
        user_id="u1",
        amount=usd(200),
        description="Credit card",
        is_immediately_due=True,
    )


# -- in-memory collaborators ------------------------------------------------


class InMemoryAssetRepository:
    def __init__(self, assets=()):
        self.items = {a.id: a for a in assets}

    async def find_by_id(self, asset_id):
        return self.items.get(asset_id)

    async def find_by_user_id(self, user_id):
        return [a for a in self.items.values() if a.user_id == user_id]

    async def find_by_user_id_and_type(self, user_id, asset_type):
        return [a for a in self.items.values() if a.user_id == user_id and a.asset_type == asset_type]

    async def save(self, asset):
        self.items[asset.id] = asset

    async def update(self, asset):
        self.items[asset.id] = asset

    async def delete(self, asset_id):
        self.items.pop(asset_id, None)


class InMemoryLiabilityRepository:
    def __init__(self, liabilities=()):
        self.items = {item.id: item for item in liabilities}

    async def find_by_id(self, liability_id):
        return self.items.get(liability_id)

    async def find_by_user_id(self, user_id):
        return [item for item in self.items.values() if item.user_id == user_id]

    async def find_deductible_by_user_id(self, user_id):
        return [item for item in self.items.values() if item.user_id == user_id and item.is_deductible()]

    async def save(self, liability):
        self.items[liability.id] = liability

    async def update(self, liability):
        self.items[liability.id] = liability

    async def delete(self, liability_id):
        self.items.pop(liability_id, None)


class InMemoryUserRepository:
    def __init__(self, users=()):
        self.items = {u.id: u for u in users}

    async def find_by_id(self, user_id):
        return self.items.get(user_id)

    async def find_by_email(self, email):
        return next((u for u in self.items.values() if u.email == email), None)

    async def save(self, user):
        self.items[user.id] = user

    async def update(self, user):
        self.items[user.id] = user

    async def delete(self, user_id):
        self.items.pop(user_id, None)


class InMemoryReminderRepository:
    def __init__(self, reminders=()):
        self.items = {r.id: r for r in reminders}
        self.updated = []

    async def find_by_id(self, reminder_id):
        return self.items.get(reminder_id)

    async def find_by_user_id(self, user_id):
        return [r for r in self.items.values() if r.user_id == user_id]

    async def find_by_user_id_and_status(self, user_id, status):
        return [r for r in self.items.values() if r.user_id == user_id and r.status == status]

    async def find_by_user_id_and_type(self, user_id, reminder_type):
        return [r for r in self.items.values() if r.user_id == user_id and r.type == reminder_type]

    async def find_due_reminders(self, now):
        return [r for r in self.items.values() if r.is_due(now)]

    async def save(self, reminder):
        self.items[reminder.id] = reminder

    async def update(self, reminder):
        self.updated.append(reminder.id)
        self.items[reminder.id] = reminder

    async def delete(self, reminder_id):
        self.items.pop(reminder_id, None)


class FakePriceService:
    def __init__(self, gold="60", silver="0.8"):
        self.gold = gold
        self.silver = silver
        self.calls = []

    async def get_gold_price(self, currency):
        self.calls.append(("gold", currency))
        return Money(self.gold, currency)

    async def get_silver_price(self, currency):
        self.calls.append(("silver", currency))
        return Money(self.silver, currency)

    async def get_crypto_price(self, symbol, currency):
        raise NotImplementedError

    async def get_stock_price(self, symbol, currency):
        raise NotImplementedError

    async def get_conversion_rate(self, from_currency, to_currency):
        return 1.0


class RecordingNotificationService:
    """Records sends; push raises for user ids in ``fail_for``, email for addresses in ``fail_email_for``."""

    def __init__(self, fail_for=(), fail_email_for=()):
        self.fail_for = set(fail_for)
        self.fail_email_for = set(fail_email_for)
        self.push = []
        self.email = []

    async def send_push_notification(self, user_id, title, message, data=None):
        if user_id in self.fail_for:
            raise ConnectionError(f"push gateway down for {user_id}")
        self.push.append((user_id, title, message, data))

    async def send_email_notification(self, email, subject, body):
        if email in self.fail_email_for:
            raise RuntimeError(f"smtp rejected {email}")
        self.email.append((email, subject, body))

    async def send_sms_notification(self, phone_number, message):
        pass

    async def schedule_notification(self, user_id, title, message, scheduled_time, data=None):
        return "scheduled-1"

    async def cancel_scheduled_notification(self, notification_id):
        pass


class FixedCalendar:
    def __init__(self, today):
        self.today = today

    async def get_current_hijri_date(self):
        return self.today

    async def convert_to_hijri(self, gregorian_date):
        return self.today

    async def convert_to_gregorian(self, hijri_date):
        raise NotImplementedError

    async def get_ramadan_start_date(self, hijri_year):
        return HijriDate(hijri_year, 9, 1)

    async def days_between(self, start_date, end_date):
        return 0


@pytest.fixture
def quiet_user():
    """User with every notification channel off."""
    return User(
        id="u-quiet",
        email="quiet@example.com",
        name="Quiet",
        notification_preferences=NotificationPreferences(
            enable_push_notifications=False,
            hawl_completion_reminder=False,
        ),
    )


@pytest.fixture
def asset_repo():
    return InMemoryAssetRepository()


@pytest.fixture
def liability_repo():
    return InMemoryLiabilityRepository()


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def reminder_repo():
    return InMemoryReminderRepository()


@pytest.fixture
def prices():
    return FakePriceService()


@pytest.fixture
def notifier():
    return RecordingNotificationService()


@pytest.fixture
def calendar():
    return FixedCalendar(HAWL_DONE)
