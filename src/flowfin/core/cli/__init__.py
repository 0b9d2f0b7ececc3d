"""Flowfin CLI: entry point for ledger, wealth and account commands."""

import click

from flowfin import __version__
from flowfin.core.cli.common import load_config
from flowfin.core.exceptions import ConfigurationError
from flowfin.core.utils.logging import setup_logging


@click.group()
@click.version_option(version=__version__, package_name="flowfin")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="Config file (YAML/JSON).")
@click.option("--ledger", type=click.Path(dir_okay=False), default=None, help="Ledger file to use.")
@click.option("-v", "--verbose", is_flag=True, help="Log engine activity to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, ledger: str | None, verbose: bool) -> None:
    """Flowfin: track cash flows, assets and net worth."""
    try:
        config = load_config(config_file)
        settings = config.validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(level="DEBUG" if verbose else settings.logging.level, log_file=settings.resolved_log_file())
    ctx.obj = {"settings": settings, "ledger": ledger}


# Register subcommands
from .account_cmd import account
from .ledger_cmd import add, delete, entries, summary
from .wealth_cmd import asset, loan, wealth

main.add_command(add)
main.add_command(entries)
main.add_command(delete)
main.add_command(summary)
main.add_command(asset)
main.add_command(loan)
main.add_command(wealth)
main.add_command(account)
