"""flowfin add / entries / delete / summary: cash-flow ledger commands."""

from __future__ import annotations

from datetime import date

import click

from flowfin.core.cli.common import DATE, engine_errors, fmt, get_settings, open_store, parse_month, to_date
from flowfin.financial.models import CashFlowEntry, EntryKind, RecurrencePolicy

_KINDS = click.Choice([k.value for k in EntryKind], case_sensitive=False)
_POLICIES = click.Choice([p.value for p in RecurrencePolicy], case_sensitive=False)


def _period_options(month: str | None, year: int | None) -> tuple[int, int | None]:
    if month and year:
        raise click.UsageError("Use either --month or --year, not both.")
    if month:
        return parse_month(month)
    if year:
        return year, None
    today = date.today()
    return today.year, today.month


@click.command()
@click.argument("name")
@click.argument("amount")
@click.option("--kind", type=_KINDS, default=EntryKind.EXPENSE.value, show_default=True)
@click.option("--date", "entry_date", type=DATE, default=None, help="Start date (YYYY-MM-DD). Defaults to today.")
@click.option("--label", default=None, help="Grouping label. Defaults to ledger.default_label.")
@click.option("--recurrence", type=_POLICIES, default=RecurrencePolicy.NONE.value, show_default=True)
@click.option("--dry-run", is_flag=True, help="Show the entries without saving them.")
@click.pass_context
def add(ctx, name, amount, kind, entry_date, label, recurrence, dry_run) -> None:
    """Record a cash flow, projecting recurring ones over the coming year."""
    from flowfin.financial.calculators.recurrence import expand_recurrence

    with engine_errors():
        settings = get_settings(ctx)
        template = CashFlowEntry(
            name=name,
            amount=amount,
            kind=kind.lower(),
            date=to_date(entry_date) or date.today(),
            label=label or settings.ledger.default_label,
        )
        entries = expand_recurrence(
            template,
            recurrence.lower(),
            annual_occurrences=settings.recurrence.annual_occurrences,
        )
        if not dry_run:
            open_store(ctx).add_entries(entries)

    verb = "Would add" if dry_run else "Added"
    click.echo(f"{verb} {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    for entry in entries:
        click.echo(f"  {entry.date}  {entry.kind.value:<7}  {fmt(entry.amount):>12}  {entry.name} [{entry.label}]")


@click.command()
@click.option("--month", default=None, help="Month to list (YYYY-MM). Defaults to the current month.")
@click.option("--year", type=int, default=None, help="List a whole year instead.")
@click.pass_context
def entries(ctx, month, year) -> None:
    """List ledger entries for a month or a year."""
    from flowfin.financial.calculators.periods import summarize_period

    period_year, period_month = _period_options(month, year)
    with engine_errors():
        summary = summarize_period(open_store(ctx).list_entries(), period_year, period_month)

    if not summary.entries:
        click.echo(f"No entries for {summary.period_name}.")
        return
    for entry in summary.entries:
        sign = "+" if entry.kind == EntryKind.INCOME else "-"
        click.echo(f"{entry.entry_id}  {entry.date}  {sign}{fmt(entry.amount):>12}  {entry.name} [{entry.label}]")


@click.command()
@click.argument("entry_id")
@click.pass_context
def delete(ctx, entry_id) -> None:
    """Delete one ledger entry by id."""
    with engine_errors():
        removed = open_store(ctx).delete_entry(entry_id)
    if not removed:
        raise click.ClickException(f"No entry with id {entry_id}")
    click.echo(f"Deleted entry {entry_id}.")


@click.command()
@click.option("--month", default=None, help="Month to summarize (YYYY-MM). Defaults to the current month.")
@click.option("--year", type=int, default=None, help="Summarize a whole year instead.")
@click.pass_context
def summary(ctx, month, year) -> None:
    """Income, expense and balance for a period, by label."""
    from flowfin.financial.calculators.periods import summarize_period

    period_year, period_month = _period_options(month, year)
    with engine_errors():
        result = summarize_period(open_store(ctx).list_entries(), period_year, period_month)

    click.echo(f"Period {result.period_name}")
    click.echo(f"  Income:   {fmt(result.total_income):>14}")
    click.echo(f"  Expenses: {fmt(result.total_expense):>14}")
    click.echo(f"  Balance:  {fmt(result.balance):>14}")
    if result.income_by_label:
        click.echo("Income by label:")
        for label, total in result.income_by_label.items():
            click.echo(f"  {label:<20} {fmt(total):>14}")
    if result.expense_by_label:
        click.echo("Expenses by label:")
        for label, total in result.expense_by_label.items():
            click.echo(f"  {label:<20} {fmt(total):>14}")
