"""Tests for zakatkit.financial.calculators.zakat."""

import pytest

from zakatkit.core.exceptions import CurrencyMismatchError, NegativeBalanceError, ValidationError
from zakatkit.financial.assets import money_asset
from zakatkit.financial.calculators.zakat import (
    IneligibilityReason,
    ZakatCalculationService,
)
from zakatkit.financial.hijri import HijriDate
from zakatkit.financial.liability import Liability
from zakatkit.financial.money import Money
from zakatkit.financial.settings import ZakatConfig
from zakatkit.financial.vocabulary import NisabMethod

ACQUIRED = HijriDate(1445, 3, 10)
HAWL_DONE = HijriDate(1446, 5, 1)


def usd(amount) -> Money:
    return Money(amount, "USD")


@pytest.fixture
def service():
    return ZakatCalculationService()


class TestAssetZakat:
    def test_two_and_a_half_percent(self, service, cash_asset):
        assert service.calculate_asset_zakat(cash_asset, HAWL_DONE) == usd(150)

    def test_zero_when_year_already_paid(self, service, cash_asset):
        cash_asset.mark_zakat_as_paid(1446, usd(150))
        result = service.calculate_asset_zakat(cash_asset, HAWL_DONE)
        assert result.is_zero
        assert result.currency == "USD"

    def test_custom_rate(self, cash_asset):
        service = ZakatCalculationService(ZakatConfig(zakat_rate_percent=10))
        assert service.calculate_asset_zakat(cash_asset, HAWL_DONE) == usd(600)


class TestZakatableWealth:
    def test_assets_minus_deductible_liabilities(self, service, cash_asset, gold_asset, card_debt):
        deferred = Liability.create("u1", usd(5000), "Mortgage balance")
        total = service.calculate_total_zakatable_wealth([cash_asset, gold_asset], [card_debt, deferred], HAWL_DONE)
        assert total == usd(9800)

    def test_paid_assets_are_excluded(self, service, cash_asset, gold_asset):
        gold_asset.mark_zakat_as_paid(1446, usd(100))
        assert service.calculate_total_zakatable_wealth([cash_asset, gold_asset], [], HAWL_DONE) == usd(6000)

    def test_hawl_incomplete_assets_still_count(self, service, cash_asset):
        fresh = money_asset("u1", "CASH", usd(1000), HijriDate(1446, 4, 1), "New savings")
        assert service.calculate_total_zakatable_wealth([cash_asset, fresh], [], HAWL_DONE) == usd(7000)

    def test_empty_assets_raises(self, service):
        with pytest.raises(ValidationError, match="No assets"):
            service.calculate_total_zakatable_wealth([], [], HAWL_DONE)

    def test_mixed_currencies_raise(self, service, cash_asset):
        euros = money_asset("u1", "CASH", Money(100, "EUR"), ACQUIRED, "Euro account")
        with pytest.raises(CurrencyMismatchError):
            service.calculate_total_zakatable_wealth([cash_asset, euros], [], HAWL_DONE)

    def test_debts_exceeding_assets_raise(self, service, cash_asset):
        debt = Liability.create("u1", usd(7000), "Due now", is_immediately_due=True)
        with pytest.raises(NegativeBalanceError):
            service.calculate_total_zakatable_wealth([cash_asset], [debt], HAWL_DONE)


class TestTotalZakat:
    def test_above_nisab(self, service, cash_asset, gold_asset, card_debt):
        nisab = service.nisab_threshold(NisabMethod.GOLD, usd(60))
        result = service.calculate_total_zakat([cash_asset, gold_asset], [card_debt], nisab, HAWL_DONE)

        assert result.is_above_nisab
        assert result.total_wealth == usd(9800)
        assert result.nisab_threshold == usd(5100)
        assert result.zakat_due == usd(245)
        assert [e.asset.id for e in result.eligible_assets] == ["cash-1", "gold-1"]
        assert [e.zakat_amount for e in result.eligible_assets] == [usd(150), usd(100)]
        assert result.ineligible_assets == []

    def test_due_is_rate_on_total_not_sum_of_assets(self, service, cash_asset, gold_asset, card_debt):
        result = service.calculate_total_zakat([cash_asset, gold_asset], [card_debt], usd(5100), HAWL_DONE)
        per_asset = sum(e.zakat_amount.amount for e in result.eligible_assets)
        assert result.zakat_due.amount != per_asset

    def test_below_nisab(self, service, cash_asset):
        result = service.calculate_total_zakat([cash_asset], [], usd(10_000), HAWL_DONE)
        assert not result.is_above_nisab
        assert result.zakat_due.is_zero
        assert result.eligible_assets == []
        assert [i.reason for i in result.ineligible_assets] == [IneligibilityReason.BELOW_NISAB]

    def test_below_nisab_keeps_specific_reasons(self, service, cash_asset):
        fresh = money_asset("u1", "CASH", usd(10), HijriDate(1446, 4, 1), "New")
        result = service.calculate_total_zakat([cash_asset, fresh], [], usd(10_000), HAWL_DONE)
        reasons = {i.asset.id: i.reason for i in result.ineligible_assets}
        assert reasons[cash_asset.id] is IneligibilityReason.BELOW_NISAB
        assert reasons[fresh.id] is IneligibilityReason.HAWL_INCOMPLETE

    def test_exactly_at_nisab_is_above(self, service, cash_asset):
        result = service.calculate_total_zakat([cash_asset], [], usd(6000), HAWL_DONE)
        assert result.is_above_nisab
        assert result.zakat_due == usd(150)

    def test_partition_reasons(self, service, cash_asset, gold_asset):
        fresh = money_asset("u1", "CASH", usd(1000), HijriDate(1446, 4, 1), "New savings", asset_id="new-1")
        gold_asset.mark_zakat_as_paid(1446, usd(100))
        result = service.calculate_total_zakat([cash_asset, gold_asset, fresh], [], usd(5100), HAWL_DONE)

        assert [e.asset.id for e in result.eligible_assets] == ["cash-1"]
        reasons = {i.asset.id: i.reason for i in result.ineligible_assets}
        assert reasons == {
            "gold-1": IneligibilityReason.ALREADY_PAID,
            "new-1": IneligibilityReason.HAWL_INCOMPLETE,
        }
        # fresh cash counts toward wealth even before its hawl
        assert result.total_wealth == usd(7000)

    def test_to_dict(self, service, cash_asset):
        data = service.calculate_total_zakat([cash_asset], [], usd(5100), HAWL_DONE).to_dict()
        assert data["zakatDue"] == {"amount": 150.0, "currency": "USD"}
        assert data["isAboveNisab"] is True
        assert data["zakatRatePercent"] == 2.5
        assert data["hijriDate"] == "1446-05-01H"
        assert data["eligibleAssets"][0]["id"] == "cash-1"
        assert "calculationDate" in data

    def test_inputs_are_not_mutated(self, service, cash_asset, gold_asset):
        service.calculate_total_zakat([cash_asset, gold_asset], [], usd(5100), HAWL_DONE)
        assert cash_asset.zakat_payment_history == []
        assert cash_asset.current_value == usd(6000)


class TestNisab:
    def test_gold(self, service):
        assert service.nisab_threshold(NisabMethod.GOLD, usd(60)) == usd(5100)

    def test_silver(self, service):
        assert service.nisab_threshold(NisabMethod.SILVER, usd("0.8")) == usd(476)

    def test_calculate_nisab(self):
        assert ZakatCalculationService.calculate_nisab(usd(2), 10) == usd(20)


class TestDaysUntilHawl:
    def test_remaining_days(self):
        days = ZakatCalculationService.calculate_days_until_hawl(ACQUIRED, HijriDate(1446, 1, 10))
        assert days == 59.0

    def test_zero_once_complete(self):
        assert ZakatCalculationService.calculate_days_until_hawl(ACQUIRED, HijriDate(1446, 3, 10)) == 0
        assert ZakatCalculationService.calculate_days_until_hawl(ACQUIRED, HAWL_DONE) == 0
