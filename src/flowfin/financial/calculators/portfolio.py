"""Wealth aggregation over the current account and the asset list.

Gross wealth is the account balance plus every asset's value. Net wealth
subtracts the outstanding principal of every loan. Both are broken down by
asset category; the current account is counted as debt-free liquidity.

Distributions always carry all four categories, seeded before any asset is
added, so an empty category reports 0 instead of going missing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from ...core.types import AmountLike
from ..models import CENT, Asset, AssetCategory, to_cents
from .amortization import remaining_loan

_ZERO = Decimal("0.00")


def empty_distribution(liquidity: Decimal = _ZERO) -> dict[AssetCategory, Decimal]:
    """A distribution with every category present, liquidity pre-seeded."""
    distribution = {category: _ZERO for category in AssetCategory}
    distribution[AssetCategory.LIQUIDITY] = liquidity
    return distribution


def percent_of(part: Decimal, total: Decimal) -> Decimal:
    """``part`` as a percentage of ``total``; 0 when ``total`` is 0."""
    if total == 0:
        return Decimal("0")
    return part / total * 100


@dataclass
class WealthSummary:
    """Result of aggregating an account balance and a set of assets.

    ``sum(net_distribution.values()) - uncovered_debt == net_wealth`` holds
    for any input; ``uncovered_debt`` is only non-zero when a loan exceeds
    the value of the asset it finances.
    """

    gross_wealth: Decimal = _ZERO
    net_wealth: Decimal = _ZERO
    total_debt: Decimal = _ZERO
    uncovered_debt: Decimal = _ZERO
    projected_annual_income: Decimal = _ZERO
    gross_distribution: dict[AssetCategory, Decimal] = field(default_factory=empty_distribution)
    net_distribution: dict[AssetCategory, Decimal] = field(default_factory=empty_distribution)

    def gross_share(self, category: AssetCategory | str) -> Decimal:
        """Percent of gross wealth held in ``category``."""
        return percent_of(self.gross_distribution[AssetCategory(category)], self.gross_wealth)

    def net_share(self, category: AssetCategory | str) -> Decimal:
        """Percent of net wealth held in ``category``."""
        return percent_of(self.net_distribution[AssetCategory(category)], self.net_wealth)

    @property
    def debt_ratio(self) -> Decimal:
        """Outstanding debt as a percent of gross wealth."""
        return percent_of(self.total_debt, self.gross_wealth)

    @property
    def net_ratio(self) -> Decimal:
        """Net wealth as a percent of gross wealth."""
        return percent_of(self.net_wealth, self.gross_wealth)

    @property
    def average_yield(self) -> Decimal:
        """Projected passive income as a percent of gross wealth."""
        return percent_of(self.projected_annual_income, self.gross_wealth)


@dataclass
class AssetPosition:
    """One asset with its outstanding loan and equity at a given date."""

    asset: Asset
    remaining_loan: Decimal
    net_value: Decimal

    @property
    def effective_yield(self) -> Decimal:
        return self.asset.effective_yield


def annual_income(asset: Asset) -> Decimal:
    """Projected yearly income: rent for real estate, yield otherwise."""
    if asset.is_real_estate:
        return asset.monthly_rent * 12
    return asset.value * asset.yield_rate / 100


def aggregate_portfolio(
    balance: AmountLike,
    assets: Iterable[Asset],
    on: date | None = None,
) -> WealthSummary:
    """Combine the account balance and assets into gross/net wealth figures.

    Args:
        balance: Current account balance, counted as liquidity.
        assets: Asset snapshot. May be empty.
        on: Date at which loans are evaluated. Defaults to today.

    Returns:
        WealthSummary with totals, distributions and projected income.
    """
    balance = to_cents(balance)
    on = on or date.today()

    summary = WealthSummary(
        gross_wealth=balance,
        gross_distribution=empty_distribution(balance),
        net_distribution=empty_distribution(balance),
    )

    count = 0
    for asset in assets:
        count += 1
        debt = remaining_loan(asset, on)
        equity = asset.value - debt

        summary.gross_wealth += asset.value
        summary.gross_distribution[asset.category] += asset.value
        summary.total_debt += debt
        summary.net_distribution[asset.category] += max(equity, _ZERO)
        if equity < 0:
            summary.uncovered_debt += -equity
        summary.projected_annual_income += annual_income(asset)

    summary.net_wealth = summary.gross_wealth - summary.total_debt
    summary.projected_annual_income = summary.projected_annual_income.quantize(CENT, rounding=ROUND_HALF_UP)

    logger.debug(
        f"Aggregated {count} assets on {on}: gross={summary.gross_wealth} "
        f"debt={summary.total_debt} net={summary.net_wealth}"
    )
    return summary


def asset_positions(assets: Iterable[Asset], on: date | None = None) -> list[AssetPosition]:
    """Per-asset loan and equity, largest asset first."""
    on = on or date.today()
    positions = []
    for asset in assets:
        debt = remaining_loan(asset, on)
        positions.append(AssetPosition(asset=asset, remaining_loan=debt, net_value=asset.value - debt))
    return sorted(positions, key=lambda p: p.asset.value, reverse=True)
