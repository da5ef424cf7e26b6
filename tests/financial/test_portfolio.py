"""Tests for zakatkit.financial.portfolio."""

from datetime import datetime
from decimal import Decimal

import pytest

from zakatkit.core.exceptions import (
    DuplicateEntryError,
    NegativeBalanceError,
    NotFoundError,
    OwnershipError,
)
from zakatkit.financial.assets import money_asset
from zakatkit.financial.hijri import HijriDate
from zakatkit.financial.liability import Liability
from zakatkit.financial.money import Money
from zakatkit.financial.portfolio import UserPortfolio

ACQUIRED = HijriDate(1445, 3, 10)


def usd(amount) -> Money:
    return Money(amount, "USD")


@pytest.fixture
def portfolio(user, cash_asset, gold_asset, card_debt):
    return UserPortfolio(user, [cash_asset, gold_asset], [card_debt])


class TestMembership:
    def test_empty_portfolio_totals_to_zero(self, user):
        empty = UserPortfolio(user)
        assert empty.calculate_total_asset_value() == usd(0)
        assert empty.calculate_total_liabilities() == usd(0)
        assert empty.calculate_net_wealth() == usd(0)

    def test_foreign_asset_rejected(self, portfolio):
        other = money_asset("u2", "CASH", usd(1), ACQUIRED, "Not mine")
        with pytest.raises(OwnershipError):
            portfolio.add_asset(other)

    def test_foreign_liability_rejected(self, portfolio):
        with pytest.raises(OwnershipError):
            portfolio.add_liability(Liability.create("u2", usd(1), "Not mine"))

    def test_duplicate_asset_rejected(self, portfolio, cash_asset):
        with pytest.raises(DuplicateEntryError):
            portfolio.add_asset(cash_asset)

    def test_duplicate_in_constructor_rejected(self, user, cash_asset):
        with pytest.raises(DuplicateEntryError):
            UserPortfolio(user, [cash_asset, cash_asset])

    def test_remove_asset(self, portfolio):
        removed = portfolio.remove_asset("cash-1")
        assert removed.id == "cash-1"
        assert portfolio.get_asset("cash-1") is None

    def test_remove_missing_asset(self, portfolio):
        with pytest.raises(NotFoundError):
            portfolio.remove_asset("nope")

    def test_update_asset(self, portfolio):
        portfolio.update_asset("cash-1", usd(100))
        assert portfolio.get_asset("cash-1").current_value == usd(100)

    def test_update_missing_asset(self, portfolio):
        with pytest.raises(NotFoundError):
            portfolio.update_asset("nope", usd(100))

    def test_liability_crud(self, portfolio):
        portfolio.update_liability("debt-1", usd(300))
        assert portfolio.get_liability("debt-1").amount == usd(300)
        portfolio.remove_liability("debt-1")
        assert portfolio.liabilities == []
        with pytest.raises(NotFoundError):
            portfolio.update_liability("debt-1", usd(1))

    def test_get_assets_by_type(self, portfolio):
        assert [a.id for a in portfolio.get_assets_by_type("GOLD")] == ["gold-1"]
        assert portfolio.get_assets_by_type("SILVER") == []


class TestTotals:
    def test_totals(self, portfolio):
        assert portfolio.calculate_total_asset_value() == usd(10_000)
        assert portfolio.calculate_total_liabilities() == usd(200)
        assert portfolio.calculate_net_wealth() == usd(9_800)

    def test_net_wealth_counts_every_liability(self, portfolio):
        portfolio.add_liability(Liability.create("u1", usd(800), "Car loan"))
        assert portfolio.calculate_net_wealth() == usd(9_000)

    def test_liabilities_exceeding_assets(self, user, cash_asset):
        p = UserPortfolio(user, [cash_asset], [Liability.create("u1", usd(7000), "Mortgage")])
        with pytest.raises(NegativeBalanceError):
            p.calculate_net_wealth()


class TestZakatStatus:
    def test_mark_all_paid(self, portfolio):
        payments = portfolio.mark_all_zakat_as_paid(1446, datetime(2025, 3, 1))
        assert sorted(p.amount.amount for p in payments) == [Decimal("100"), Decimal("150")]
        assert portfolio.get_zakatable_assets(1446) == []
        assert len(portfolio.get_zakatable_assets(1447)) == 2

    def test_mark_all_skips_already_paid(self, portfolio):
        portfolio.get_asset("cash-1").mark_zakat_as_paid(1446, usd(150))
        payments = portfolio.mark_all_zakat_as_paid(1446)
        assert len(payments) == 1

    def test_reset_all(self, portfolio):
        portfolio.mark_all_zakat_as_paid(1446)
        assert portfolio.reset_all_zakat_status(1446) == 2
        assert len(portfolio.get_zakatable_assets(1446)) == 2
        assert portfolio.reset_all_zakat_status(1446) == 0
