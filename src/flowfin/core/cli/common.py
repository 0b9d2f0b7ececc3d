"""Shared setup logic for CLI commands."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from pathlib import Path

import click

from flowfin.core.config import Config
from flowfin.core.config_schema import FlowfinConfig

FLOWFIN_DIR = Path.home() / ".flowfin"
CONFIG_PATH = FLOWFIN_DIR / "config.yaml"


def load_config(config_file: str | None = None) -> Config:
    """Load config from ``config_file`` or ~/.flowfin/config.yaml."""
    return Config(config_file=config_file or str(CONFIG_PATH))


def get_settings(ctx: click.Context) -> FlowfinConfig:
    """Validated settings of the running command."""
    return ctx.find_root().obj["settings"]


def open_store(ctx: click.Context):
    """Open the ledger store selected by --ledger or the config."""
    from flowfin.financial.store import LocalLedgerStore

    obj = ctx.find_root().obj
    ledger = obj.get("ledger") or obj["settings"].paths.resolved_ledger_file()
    return LocalLedgerStore(ledger)


def parse_month(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month)."""
    try:
        year_str, month_str = value.split("-", 1)
        year, month = int(year_str), int(month_str)
    except ValueError as e:
        raise click.BadParameter(f"expected YYYY-MM, got {value!r}") from e
    if not 1 <= month <= 12:
        raise click.BadParameter(f"month must be 01-12, got {value!r}")
    return year, month


def to_date(value) -> date | None:
    """click.DateTime yields datetimes; the engine wants calendar dates."""
    if value is None:
        return None
    return value.date()


def fmt(amount: Decimal) -> str:
    return f"{amount:,.2f}"


DATE = click.DateTime(formats=["%Y-%m-%d"])


@contextmanager
def engine_errors():
    """Turn engine and validation errors into clean CLI failures."""
    from flowfin.core.exceptions import FlowfinError

    try:
        yield
    except (FlowfinError, ValueError) as e:
        raise click.ClickException(str(e)) from e
