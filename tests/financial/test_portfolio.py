"""Tests for flowfin.financial.calculators.portfolio."""

from datetime import date
from decimal import Decimal

import pytest

from flowfin.financial.calculators.amortization import loan_balance
from flowfin.financial.calculators.portfolio import (
    aggregate_portfolio,
    annual_income,
    asset_positions,
    empty_distribution,
    percent_of,
)
from flowfin.financial.models import Asset, AssetCategory, RealEstateLoan

ON = date(2025, 1, 1)


@pytest.fixture
def mortgage():
    return RealEstateLoan(principal=200_000, annual_rate_percent=2, duration_years=20, start_date="2020-01-01")


@pytest.fixture
def assets(mortgage):
    return [
        Asset(name="PEA", category=AssetCategory.INVESTMENT, value=10_000, yield_rate=5),
        Asset(name="BTC", category=AssetCategory.CRYPTO, value=2_000),
        Asset(name="Livret A", category=AssetCategory.LIQUIDITY, value=8_000, yield_rate=3),
        Asset(name="Flat", category=AssetCategory.REAL_ESTATE, value=250_000, monthly_rent=900, loan=mortgage),
    ]


class TestAggregateEmpty:
    def test_all_zero(self):
        summary = aggregate_portfolio(0, [], on=ON)
        assert summary.gross_wealth == 0
        assert summary.net_wealth == 0
        assert summary.total_debt == 0
        assert summary.projected_annual_income == 0
        assert set(summary.gross_distribution) == set(AssetCategory)
        assert set(summary.net_distribution) == set(AssetCategory)
        assert all(v == 0 for v in summary.gross_distribution.values())

    def test_ratios_are_zero_without_wealth(self):
        summary = aggregate_portfolio(0, [], on=ON)
        assert summary.debt_ratio == 0
        assert summary.net_ratio == 0
        assert summary.average_yield == 0
        assert summary.gross_share(AssetCategory.LIQUIDITY) == 0
        assert summary.net_share("crypto") == 0

    def test_balance_only(self):
        summary = aggregate_portfolio("1500.50", [], on=ON)
        assert summary.gross_wealth == Decimal("1500.50")
        assert summary.net_wealth == Decimal("1500.50")
        assert summary.gross_distribution[AssetCategory.LIQUIDITY] == Decimal("1500.50")
        assert summary.gross_share(AssetCategory.LIQUIDITY) == 100


class TestAggregate:
    def test_totals(self, assets, mortgage):
        summary = aggregate_portfolio(5_000, assets, on=ON)
        debt = loan_balance(mortgage, ON)

        assert summary.gross_wealth == Decimal("275000")
        assert summary.total_debt == debt
        assert summary.net_wealth == Decimal("275000") - debt
        assert summary.uncovered_debt == 0

    def test_gross_distribution(self, assets):
        summary = aggregate_portfolio(5_000, assets, on=ON)
        assert summary.gross_distribution == {
            AssetCategory.LIQUIDITY: Decimal("13000"),
            AssetCategory.INVESTMENT: Decimal("10000"),
            AssetCategory.REAL_ESTATE: Decimal("250000"),
            AssetCategory.CRYPTO: Decimal("2000"),
        }

    def test_net_distribution_subtracts_loans(self, assets, mortgage):
        summary = aggregate_portfolio(5_000, assets, on=ON)
        assert summary.net_distribution[AssetCategory.LIQUIDITY] == Decimal("13000")
        assert summary.net_distribution[AssetCategory.REAL_ESTATE] == Decimal("250000") - loan_balance(mortgage, ON)

    def test_distributions_sum_to_totals(self, assets):
        summary = aggregate_portfolio(5_000, assets, on=ON)
        assert sum(summary.gross_distribution.values()) == summary.gross_wealth
        assert sum(summary.net_distribution.values()) == summary.net_wealth

    def test_shares_sum_to_hundred(self, assets):
        summary = aggregate_portfolio(5_000, assets, on=ON)
        total = sum(summary.gross_share(c) for c in AssetCategory)
        assert float(total) == pytest.approx(100)

    def test_projected_income(self, assets):
        # 5% of 10k + 0 + 3% of 8k + 900 * 12
        summary = aggregate_portfolio(5_000, assets, on=ON)
        assert summary.projected_annual_income == Decimal("11540")

    def test_ratios(self, assets):
        summary = aggregate_portfolio(5_000, assets, on=ON)
        assert summary.debt_ratio == summary.total_debt / summary.gross_wealth * 100
        assert float(summary.debt_ratio + summary.net_ratio) == pytest.approx(100)
        assert summary.average_yield == Decimal("11540") / Decimal("275000") * 100

    def test_loan_paid_off(self):
        old = RealEstateLoan(principal=100_000, annual_rate_percent=3, duration_years=10, start_date="2000-01-01")
        house = Asset(name="House", category="real_estate", value=300_000, loan=old)
        summary = aggregate_portfolio(0, [house], on=ON)
        assert summary.total_debt == 0
        assert summary.net_wealth == summary.gross_wealth == Decimal("300000")

    def test_loan_exceeding_value_is_clamped(self):
        loan = RealEstateLoan(principal=200_000, annual_rate_percent=1, duration_years=25, start_date=ON)
        flat = Asset(name="Flat", category="real_estate", value=150_000, loan=loan)
        summary = aggregate_portfolio(1_000, [flat], on=ON)

        assert summary.total_debt == Decimal("200000")
        assert summary.net_wealth == Decimal("-49000")
        assert summary.net_distribution[AssetCategory.REAL_ESTATE] == 0
        assert summary.uncovered_debt == Decimal("50000")
        assert sum(summary.net_distribution.values()) - summary.uncovered_debt == summary.net_wealth

    def test_negative_balance(self):
        summary = aggregate_portfolio(-300, [Asset(name="BTC", category="crypto", value=1_000)], on=ON)
        assert summary.gross_distribution[AssetCategory.LIQUIDITY] == Decimal("-300")
        assert summary.gross_wealth == Decimal("700")
        assert sum(summary.gross_distribution.values()) == summary.gross_wealth

    def test_accepts_generator(self, assets):
        summary = aggregate_portfolio(0, (a for a in assets), on=ON)
        assert summary.gross_wealth == Decimal("270000")


class TestHelpers:
    def test_percent_of(self):
        assert percent_of(Decimal("25"), Decimal("200")) == Decimal("12.5")
        assert percent_of(Decimal("25"), Decimal("0")) == 0

    def test_empty_distribution_seeds_liquidity(self):
        dist = empty_distribution(Decimal("42"))
        assert dist[AssetCategory.LIQUIDITY] == Decimal("42")
        assert dist[AssetCategory.CRYPTO] == 0
        assert len(dist) == 4

    def test_annual_income_real_estate_ignores_yield(self):
        flat = Asset(name="Flat", category="real_estate", value=100_000, yield_rate=10)
        assert annual_income(flat) == 0

    def test_asset_positions_sorted_by_value(self, assets, mortgage):
        positions = asset_positions(assets, on=ON)
        assert [p.asset.name for p in positions] == ["Flat", "PEA", "Livret A", "BTC"]
        flat = positions[0]
        assert flat.remaining_loan == loan_balance(mortgage, ON)
        assert flat.net_value == flat.asset.value - flat.remaining_loan
        assert flat.effective_yield == Decimal("900") * 12 / Decimal("250000") * 100
        assert positions[1].remaining_loan == 0
