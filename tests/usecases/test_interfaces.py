"""The in-memory test doubles satisfy the collaborator protocols."""

from zakatkit.interfaces import (
    AssetRepository,
    HijriCalendarService,
    LiabilityRepository,
    NotificationService,
    PriceService,
    ReminderRepository,
    UserRepository,
)


def test_repositories(asset_repo, liability_repo, user_repo, reminder_repo):
    assert isinstance(asset_repo, AssetRepository)
    assert isinstance(liability_repo, LiabilityRepository)
    assert isinstance(user_repo, UserRepository)
    assert isinstance(reminder_repo, ReminderRepository)


def test_services(prices, notifier, calendar):
    assert isinstance(prices, PriceService)
    assert isinstance(notifier, NotificationService)
    assert isinstance(calendar, HijriCalendarService)


def test_incomplete_double_is_rejected():
    class HalfRepository:
        async def find_by_id(self, asset_id):
            return None

    assert not isinstance(HalfRepository(), AssetRepository)
