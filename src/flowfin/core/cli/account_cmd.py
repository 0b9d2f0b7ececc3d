"""flowfin account: current-account balance commands."""

from __future__ import annotations

from datetime import date

import click

from flowfin.core.cli.common import DATE, engine_errors, fmt, open_store, to_date


@click.group()
def account() -> None:
    """Show, set or reconcile the current account."""


@account.command("show")
@click.pass_context
def account_show(ctx) -> None:
    """Print the stored balance and last reconciliation date."""
    with engine_errors():
        current = open_store(ctx).get_account()
    if current is None:
        click.echo("No current account yet. Use 'flowfin account set' or 'flowfin account reconcile'.")
        return
    click.echo(f"Balance: {fmt(current.balance)} (as of {current.last_reconciled})")


@account.command("set")
@click.argument("balance")
@click.option("--date", "ref_date", type=DATE, default=None, help="Reference date. Defaults to today.")
@click.pass_context
def account_set(ctx, balance, ref_date) -> None:
    """Overwrite the balance with a value read from your bank."""
    from flowfin.financial.calculators.reconciliation import manual_update_store

    with engine_errors():
        saved = manual_update_store(open_store(ctx), balance, to_date(ref_date) or date.today())
    click.echo(f"Balance set to {fmt(saved.balance)} as of {saved.last_reconciled}.")


@account.command("reconcile")
@click.option("--today", "today_date", type=DATE, default=None, help="Reconcile as of this date.")
@click.pass_context
def account_reconcile(ctx, today_date) -> None:
    """Apply ledger entries recorded since the last reconciliation."""
    from flowfin.financial.calculators.reconciliation import reconcile_store

    with engine_errors():
        result = reconcile_store(open_store(ctx), today=to_date(today_date))
    click.echo(result.describe())
