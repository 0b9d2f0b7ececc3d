"""Financial calculators: recurrence, amortization, wealth, reconciliation, periods."""

from .amortization import loan_balance, monthly_payment, months_elapsed, remaining_balance, remaining_loan
from .periods import PeriodSummary, entries_between, summarize_period
from .portfolio import (
    AssetPosition,
    WealthSummary,
    aggregate_portfolio,
    annual_income,
    asset_positions,
    percent_of,
)
from .reconciliation import (
    ReconciliationResult,
    manual_update,
    manual_update_store,
    net_since,
    reconcile,
    reconcile_store,
)
from .recurrence import ANNUAL_OCCURRENCES, RecurrenceSchedule, expand_recurrence, schedule_for

__all__ = [
    "ANNUAL_OCCURRENCES",
    "AssetPosition",
    "PeriodSummary",
    "ReconciliationResult",
    "RecurrenceSchedule",
    "WealthSummary",
    "aggregate_portfolio",
    "annual_income",
    "asset_positions",
    "entries_between",
    "expand_recurrence",
    "loan_balance",
    "manual_update",
    "manual_update_store",
    "monthly_payment",
    "months_elapsed",
    "net_since",
    "percent_of",
    "reconcile",
    "reconcile_store",
    "remaining_balance",
    "remaining_loan",
    "schedule_for",
    "summarize_period",
]
