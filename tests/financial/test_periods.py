"""Tests for flowfin.financial.calculators.periods."""

from datetime import date
from decimal import Decimal

import pytest

from flowfin.financial.calculators.periods import entries_between, in_period, summarize_period
from flowfin.financial.models import CashFlowEntry


@pytest.fixture
def entries():
    return [
        CashFlowEntry(name="Salary", amount=3000, kind="income", date="2024-01-28", label="Work"),
        CashFlowEntry(name="Rent", amount=900, kind="expense", date="2024-01-05", label="Maison"),
        CashFlowEntry(name="Food", amount=350, kind="expense", date="2024-01-12"),
        CashFlowEntry(name="Gift", amount=100, kind="income", date="2024-01-20"),
        CashFlowEntry(name="Rent", amount=900, kind="expense", date="2024-02-05", label="Maison"),
        CashFlowEntry(name="Bonus", amount=1000, kind="income", date="2023-12-20", label="Work"),
    ]


class TestEntriesBetween:
    def test_inclusive_bounds_sorted(self, entries):
        selected = entries_between(entries, date(2024, 1, 5), date(2024, 1, 28))
        assert [e.name for e in selected] == ["Rent", "Food", "Gift", "Salary"]

    def test_open_ranges(self, entries):
        assert len(entries_between(entries)) == 6
        assert [e.name for e in entries_between(entries, end=date(2023, 12, 31))] == ["Bonus"]
        assert [e.date for e in entries_between(entries, start=date(2024, 2, 1))] == [date(2024, 2, 5)]


class TestSummarizePeriod:
    def test_month(self, entries):
        summary = summarize_period(entries, 2024, 1)
        assert summary.period_name == "2024-01"
        assert summary.total_income == Decimal("3100")
        assert summary.total_expense == Decimal("1250")
        assert summary.balance == Decimal("1850")
        assert len(summary.entries) == 4

    def test_by_label_sorted_largest_first(self, entries):
        summary = summarize_period(entries, 2024, 1)
        assert list(summary.income_by_label) == ["Work", "Perso"]
        assert summary.expense_by_label == {"Maison": Decimal("900"), "Perso": Decimal("350")}
        assert list(summary.expense_by_label) == ["Maison", "Perso"]

    def test_year(self, entries):
        summary = summarize_period(entries, 2024)
        assert summary.period_name == "2024"
        assert summary.total_expense == Decimal("2150")
        assert summary.total_income == Decimal("3100")

    def test_empty_period(self, entries):
        summary = summarize_period(entries, 2030, 6)
        assert summary.entries == []
        assert summary.balance == 0
        assert summary.income_by_label == {}

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, entries, month):
        with pytest.raises(ValueError, match="Month must be between 1 and 12"):
            summarize_period(entries, 2024, month)

    def test_in_period(self, entries):
        assert in_period(entries[5], 2023, 12)
        assert in_period(entries[5], 2023)
        assert not in_period(entries[5], 2024)
