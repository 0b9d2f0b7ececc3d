"""flowfin asset / loan / wealth: holdings and net-worth commands."""

from __future__ import annotations

from datetime import date

import click

from flowfin.core.cli.common import DATE, engine_errors, fmt, open_store, to_date
from flowfin.financial.models import Asset, AssetCategory, RealEstateLoan

_CATEGORIES = click.Choice([c.value for c in AssetCategory], case_sensitive=False)

_CATEGORY_NAMES = {
    AssetCategory.LIQUIDITY: "Liquidity",
    AssetCategory.INVESTMENT: "Investment",
    AssetCategory.REAL_ESTATE: "Real estate",
    AssetCategory.CRYPTO: "Crypto",
}


@click.group()
def asset() -> None:
    """Manage assets."""


@asset.command("add")
@click.argument("name")
@click.argument("value")
@click.option("--category", type=_CATEGORIES, required=True)
@click.option("--yield", "yield_rate", default="0", help="Annual yield in percent (non-real-estate).")
@click.option("--rent", "monthly_rent", default="0", help="Monthly rent (real estate).")
@click.option("--loan-principal", default=None, help="Amount borrowed, if the asset carries a loan.")
@click.option("--loan-rate", default="0", help="Loan annual rate in percent.")
@click.option("--loan-years", type=int, default=None)
@click.option("--loan-start", type=DATE, default=None)
@click.pass_context
def asset_add(ctx, name, value, category, yield_rate, monthly_rent, loan_principal, loan_rate, loan_years, loan_start):
    """Add an asset, optionally with a mortgage."""
    with engine_errors():
        loan = None
        if loan_principal is not None:
            if loan_years is None or loan_start is None:
                raise click.UsageError("--loan-years and --loan-start are required with --loan-principal.")
            loan = RealEstateLoan(
                principal=loan_principal,
                annual_rate_percent=loan_rate,
                duration_years=loan_years,
                start_date=to_date(loan_start),
            )
        new_asset = Asset(
            name=name,
            category=category.lower(),
            value=value,
            yield_rate=yield_rate,
            monthly_rent=monthly_rent,
            loan=loan,
        )
        open_store(ctx).add_asset(new_asset)
    click.echo(f"Added asset {new_asset.asset_id}: {new_asset.name} ({fmt(new_asset.value)})")


@asset.command("list")
@click.option("--on", "on_date", type=DATE, default=None, help="Evaluate loans at this date.")
@click.pass_context
def asset_list(ctx, on_date) -> None:
    """List assets, largest first, with outstanding loans."""
    from flowfin.financial.calculators.portfolio import asset_positions

    with engine_errors():
        positions = asset_positions(open_store(ctx).list_assets(), to_date(on_date))

    if not positions:
        click.echo("No assets recorded.")
        return
    for pos in positions:
        line = (
            f"{pos.asset.asset_id}  {pos.asset.name:<24} {_CATEGORY_NAMES[pos.asset.category]:<12}"
            f" {fmt(pos.asset.value):>14}  yield {pos.effective_yield:.2f}%"
        )
        if pos.asset.loan is not None:
            line += f"  loan {fmt(pos.remaining_loan)}  equity {fmt(pos.net_value)}"
        click.echo(line)


@asset.command("delete")
@click.argument("asset_id")
@click.pass_context
def asset_delete(ctx, asset_id) -> None:
    """Delete an asset by id."""
    with engine_errors():
        removed = open_store(ctx).delete_asset(asset_id)
    if not removed:
        raise click.ClickException(f"No asset with id {asset_id}")
    click.echo(f"Deleted asset {asset_id}.")


@click.command()
@click.option("--principal", required=True)
@click.option("--rate", default="0", show_default=True, help="Annual rate in percent.")
@click.option("--years", type=int, required=True)
@click.option("--start", type=DATE, required=True)
@click.option("--on", "on_date", type=DATE, default=None, help="Evaluation date. Defaults to today.")
def loan(principal, rate, years, start, on_date) -> None:
    """Remaining principal and monthly payment of an amortizing loan."""
    from flowfin.financial.calculators.amortization import loan_balance, monthly_payment, months_elapsed

    on = to_date(on_date) or date.today()
    with engine_errors():
        terms = RealEstateLoan(principal=principal, annual_rate_percent=rate, duration_years=years, start_date=to_date(start))
        remaining = loan_balance(terms, on)
        payment = monthly_payment(terms)

    elapsed = min(max(months_elapsed(terms, on), 0), terms.total_months)
    click.echo(f"Months elapsed:  {elapsed} / {terms.total_months}")
    click.echo(f"Monthly payment: {fmt(payment)}")
    click.echo(f"Remaining:       {fmt(remaining)}")


@click.command()
@click.option("--on", "on_date", type=DATE, default=None, help="Evaluate loans at this date.")
@click.pass_context
def wealth(ctx, on_date) -> None:
    """Gross and net wealth, debt and projected income."""
    from flowfin.financial.calculators.portfolio import aggregate_portfolio

    with engine_errors():
        store = open_store(ctx)
        account = store.get_account()
        balance = account.balance if account else 0
        result = aggregate_portfolio(balance, store.list_assets(), to_date(on_date))

    click.echo(f"Gross wealth:      {fmt(result.gross_wealth):>14}")
    click.echo(f"Outstanding debt:  {fmt(result.total_debt):>14}  ({result.debt_ratio:.0f}% of gross)")
    click.echo(f"Net wealth:        {fmt(result.net_wealth):>14}  ({result.net_ratio:.0f}% of gross)")
    click.echo(f"Projected income:  {fmt(result.projected_annual_income):>14}  /year ({result.average_yield:.2f}%)")
    click.echo("By category (gross / net):")
    for category in AssetCategory:
        click.echo(
            f"  {_CATEGORY_NAMES[category]:<12} {fmt(result.gross_distribution[category]):>14}"
            f" {result.gross_share(category):>4.0f}%  {fmt(result.net_distribution[category]):>14}"
            f" {result.net_share(category):>4.0f}%"
        )
