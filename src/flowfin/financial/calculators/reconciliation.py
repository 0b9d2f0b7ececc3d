"""Current-account reconciliation.

The stored balance is brought up to date by applying every ledger entry
dated after the last reconciliation and no later than today:

    last_reconciled < entry.date <= today

The watermark then moves to today whether or not anything was applied, so
the next run never re-sums the same entries. The manual path simply
overwrites balance and watermark with what the user typed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from loguru import logger

from ...core.exceptions import FlowfinError, ReconciliationError
from ...core.types import AmountLike
from ..models import Account, CashFlowEntry, to_cents

if TYPE_CHECKING:
    from ..store import AccountStore, LedgerProvider


@dataclass(frozen=True)
class ReconciliationResult:
    """Updated account plus the net amount that was applied."""

    account: Account
    applied: Decimal

    @property
    def changed(self) -> bool:
        return self.applied != 0

    def describe(self) -> str:
        if not self.changed:
            return "Up to date, nothing changed."
        sign = "+" if self.applied > 0 else ""
        return f"{sign}{self.applied} applied, balance is now {self.account.balance}."


def net_since(entries: Iterable[CashFlowEntry], after: date, through: date) -> Decimal:
    """Income minus expense over entries with ``after < date <= through``."""
    return sum(
        (e.signed_amount for e in entries if after < e.date <= through),
        Decimal("0.00"),
    )


def reconcile(account: Account, entries: Iterable[CashFlowEntry], today: date | None = None) -> ReconciliationResult:
    """Apply the ledger's net effect since the last reconciliation.

    Args:
        account: Current stored account.
        entries: The user's ledger entries (any range; filtered here).
        today: Reconciliation date. Defaults to ``date.today()``.

    Returns:
        ReconciliationResult with the new account (watermark = today).
    """
    today = today or date.today()
    net = net_since(entries, account.last_reconciled, today)
    updated = Account(balance=account.balance + net, last_reconciled=today)
    logger.debug(f"Reconciled window ({account.last_reconciled}, {today}]: net={net}, balance={updated.balance}")
    return ReconciliationResult(account=updated, applied=net)


def manual_update(balance: AmountLike, reference_date: date | str) -> Account:
    """Account state as entered by the user, taken as-is."""
    return Account(balance=to_cents(balance), last_reconciled=reference_date)


def opening_account(today: date | None = None) -> Account:
    """A fresh account: zero balance, reconciled as of today."""
    return Account(balance=Decimal("0"), last_reconciled=today or date.today())


def reconcile_store(
    store: AccountStore,
    ledger: LedgerProvider | None = None,
    today: date | None = None,
) -> ReconciliationResult:
    """Reconcile the stored account as one atomic read-compute-write.

    Args:
        store: Account store; its ``transaction()`` guards the whole sequence.
        ledger: Entry source. Defaults to ``store`` when it also serves entries.
        today: Reconciliation date. Defaults to ``date.today()``.

    Raises:
        ReconciliationError: If the new state could not be persisted. The
            stored account is left at its previous values.
    """
    today = today or date.today()
    ledger = ledger if ledger is not None else store  # type: ignore[assignment]

    try:
        with store.transaction():
            account = store.get_account() or opening_account(today)
            entries = ledger.list_entries(start=None, end=today)
            result = reconcile(account, entries, today)
            store.update_account(result.account.balance, result.account.last_reconciled)
    except (FlowfinError, OSError) as e:
        raise ReconciliationError(f"Reconciliation on {today} failed: {e}") from e

    if result.changed:
        logger.info(f"Applied {result.applied} to current account, balance {result.account.balance}")
    else:
        logger.info(f"Current account up to date as of {today}")
    return result


def manual_update_store(store: AccountStore, balance: AmountLike, reference_date: date | str) -> Account:
    """Persist a manually entered balance and reference date."""
    account = manual_update(balance, reference_date)
    with store.transaction():
        saved = store.update_account(account.balance, account.last_reconciled)
    logger.info(f"Current account set to {saved.balance} as of {saved.last_reconciled}")
    return saved
