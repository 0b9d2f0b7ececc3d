"""Loan amortization for real-estate mortgages.

Remaining principal of a fixed-rate, fixed-term amortizing loan after a
whole number of monthly payments:

    B(k) = P * ((1+m)^N - (1+m)^k) / ((1+m)^N - 1)

with P the principal, m the monthly rate, N the total number of payments
and k the payments made. A zero rate falls back to straight-line
repayment. Elapsed months count calendar months only; the day of month is
ignored.

This is the only implementation of the formula. Aggregation, per-asset
positions and the CLI all call ``remaining_balance``.

Pure math, Decimal throughout, results rounded to the cent.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from ..dates import months_between
from ..models import CENT, Asset, RealEstateLoan

_ZERO = Decimal("0")


def monthly_rate(loan: RealEstateLoan) -> Decimal:
    """Monthly rate as a fraction (2% annual -> 0.001666...)."""
    return loan.annual_rate_percent / 100 / 12


def months_elapsed(loan: RealEstateLoan, on: date | None = None) -> int:
    """Whole months between the loan start and ``on`` (today by default).

    Negative when ``on`` is before the start month.
    """
    return months_between(loan.start_date, on or date.today())


def remaining_balance(
    principal: Decimal | int | float | str,
    annual_rate_percent: Decimal | int | float | str,
    duration_years: int,
    start_date: date,
    on: date | None = None,
) -> Decimal:
    """Outstanding principal of an amortizing loan at a given date.

    Args:
        principal: Amount borrowed (> 0).
        annual_rate_percent: Annual rate in percent (>= 0).
        duration_years: Term in years (> 0).
        start_date: Loan start date.
        on: Evaluation date. Defaults to today.

    Returns:
        Remaining principal, rounded to the cent, always within [0, principal].
    """
    loan = RealEstateLoan(
        principal=principal,
        annual_rate_percent=annual_rate_percent,
        duration_years=duration_years,
        start_date=start_date,
    )
    return loan_balance(loan, on)


def loan_balance(loan: RealEstateLoan, on: date | None = None) -> Decimal:
    """Outstanding principal of ``loan`` at ``on`` (today by default)."""
    principal = loan.principal
    total = loan.total_months
    elapsed = months_elapsed(loan, on)

    if elapsed >= total:
        return _ZERO.quantize(CENT)
    if elapsed <= 0:
        return principal

    rate = monthly_rate(loan)
    if rate == 0:
        remaining = principal * (1 - Decimal(elapsed) / Decimal(total))
    else:
        growth_total = (1 + rate) ** total
        growth_elapsed = (1 + rate) ** elapsed
        remaining = principal * (growth_total - growth_elapsed) / (growth_total - 1)

    remaining = remaining.quantize(CENT, rounding=ROUND_HALF_UP)
    return min(max(remaining, _ZERO.quantize(CENT)), principal)


def remaining_loan(asset: Asset, on: date | None = None) -> Decimal:
    """Outstanding loan on an asset, zero when it carries none."""
    if asset.loan is None:
        return _ZERO.quantize(CENT)
    return loan_balance(asset.loan, on)


def monthly_payment(loan: RealEstateLoan) -> Decimal:
    """Constant monthly installment that repays ``loan`` over its term.

    Zero-rate loans repay ``principal / months`` each month.
    """
    total = loan.total_months
    rate = monthly_rate(loan)
    if rate == 0:
        payment = loan.principal / total
    else:
        payment = loan.principal * rate / (1 - (1 + rate) ** -total)
    return payment.quantize(CENT, rounding=ROUND_HALF_UP)
