"""Period totals over the ledger.

Monthly and yearly views of income, expense and the resulting balance,
with per-label breakdowns for the flow chart.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..models import DEFAULT_LABEL, CashFlowEntry, EntryKind


def entries_between(
    entries: Iterable[CashFlowEntry],
    start: date | None = None,
    end: date | None = None,
) -> list[CashFlowEntry]:
    """Entries with ``start <= date <= end``, sorted by date.

    Either bound may be None for an open range.
    """
    selected = [
        e for e in entries if (start is None or e.date >= start) and (end is None or e.date <= end)
    ]
    return sorted(selected, key=lambda e: e.date)


@dataclass
class PeriodSummary:
    """Totals for one calendar month or year."""

    year: int
    month: int | None = None
    total_income: Decimal = Decimal("0.00")
    total_expense: Decimal = Decimal("0.00")
    income_by_label: dict[str, Decimal] = field(default_factory=dict)
    expense_by_label: dict[str, Decimal] = field(default_factory=dict)
    entries: list[CashFlowEntry] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        """Theoretical savings for the period (income minus expense)."""
        return self.total_income - self.total_expense

    @property
    def period_name(self) -> str:
        if self.month is None:
            return f"{self.year}"
        return f"{self.year}-{self.month:02d}"


def in_period(entry: CashFlowEntry, year: int, month: int | None = None) -> bool:
    if entry.date.year != year:
        return False
    return month is None or entry.date.month == month


def summarize_period(entries: Iterable[CashFlowEntry], year: int, month: int | None = None) -> PeriodSummary:
    """Total the entries of a month, or of a whole year when ``month`` is None."""
    if month is not None and not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    summary = PeriodSummary(year=year, month=month)
    income: dict[str, Decimal] = defaultdict(Decimal)
    expense: dict[str, Decimal] = defaultdict(Decimal)

    for entry in sorted(entries, key=lambda e: e.date):
        if not in_period(entry, year, month):
            continue
        summary.entries.append(entry)
        label = entry.label.strip() or DEFAULT_LABEL
        if entry.kind == EntryKind.INCOME:
            summary.total_income += entry.amount
            income[label] += entry.amount
        else:
            summary.total_expense += entry.amount
            expense[label] += entry.amount

    # Largest label first, like the flow chart
    summary.income_by_label = dict(sorted(income.items(), key=lambda kv: kv[1], reverse=True))
    summary.expense_by_label = dict(sorted(expense.items(), key=lambda kv: kv[1], reverse=True))
    return summary
