"""Collaborator protocols and a local YAML-file store.

The calculators never do I/O. Callers hand them snapshots obtained through
these protocols and persist the results:

- ``LedgerProvider``: dated cash-flow entries, read-only to the engine
- ``AssetProvider``: the asset list, read-only to the engine
- ``AccountStore``: the single current account, with one atomic update

``LocalLedgerStore`` implements all three on top of a single YAML file.
It is the source of truth for the CLI: every command re-reads it instead
of keeping its own copy.
"""

from __future__ import annotations

import os
import tempfile
import threading
from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from loguru import logger

from ..core.exceptions import DataProcessingError, StorageError
from ..core.types import PathLike
from .calculators.periods import entries_between
from .models import Account, Asset, CashFlowEntry


@runtime_checkable
class LedgerProvider(Protocol):
    """Read access to a user's cash-flow entries."""

    def list_entries(self, start: date | None = None, end: date | None = None) -> list[CashFlowEntry]:
        """Return entries with ``start <= date <= end``, sorted by date.

        Args:
            start: Earliest date (inclusive). None = no lower bound.
            end: Latest date (inclusive). None = no upper bound.
        """
        ...


@runtime_checkable
class AssetProvider(Protocol):
    """Read access to a user's assets."""

    def list_assets(self) -> list[Asset]: ...


@runtime_checkable
class AccountStore(Protocol):
    """Storage for the single current account.

    ``transaction()`` must make everything done inside it all-or-nothing:
    if the block raises, the stored account keeps its previous values.
    """

    def get_account(self) -> Account | None: ...

    def update_account(self, balance: Decimal, last_reconciled: date) -> Account: ...

    def transaction(self) -> AbstractContextManager[Any]: ...


class LocalLedgerStore:
    """Ledger, assets and account persisted in one YAML document.

    Layout::

        account: {balance: "1000.00", last_reconciled: "2024-01-01"}
        entries: [{id, name, amount, kind, label, date}, ...]
        assets: [{id, name, category, value, yield_rate, monthly_rent, loan}, ...]

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace``, so the file is always either the old or the new
    version. ``transaction()`` blocks are serialized by a re-entrant lock and
    only the outermost block writes.
    """

    def __init__(self, path: PathLike):
        self.path = Path(path).expanduser()
        self._lock = threading.RLock()
        self._pending: dict[str, Any] | None = None
        self._owner: int | None = None
        self._depth = 0

    # ------------------------------------------------------------------
    # Raw document I/O
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"account": None, "entries": [], "assets": []}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise StorageError(f"Ledger file {self.path} is not valid YAML: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read ledger file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Ledger file {self.path} must contain a mapping")
        data.setdefault("account", None)
        data["entries"] = list(data.get("entries") or [])
        data["assets"] = list(data.get("assets") or [])
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Cannot write ledger file {self.path}: {e}") from e

    def _document(self) -> dict[str, Any]:
        """The in-flight document for the thread running a transaction.

        Any other caller waits for the running transaction and reads the
        committed file.
        """
        if self._owner == threading.get_ident() and self._pending is not None:
            return self._pending
        with self._lock:
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[LocalLedgerStore]:
        """Group reads and writes into one all-or-nothing unit."""
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._pending = self._load()
                self._owner = threading.get_ident()
            self._depth += 1
            try:
                yield self
                if outermost:
                    self._write(self._pending)
            finally:
                self._depth -= 1
                if outermost:
                    self._pending = None
                    self._owner = None

    # ------------------------------------------------------------------
    # LedgerProvider
    # ------------------------------------------------------------------

    def list_entries(self, start: date | None = None, end: date | None = None) -> list[CashFlowEntry]:
        raw = self._document()["entries"]
        try:
            entries = [CashFlowEntry.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise DataProcessingError(f"Invalid entry in {self.path}: {e}") from e
        return entries_between(entries, start, end)

    def add_entries(self, entries: Iterable[CashFlowEntry]) -> list[CashFlowEntry]:
        added = list(entries)
        with self.transaction() as store:
            store._pending["entries"].extend(entry.to_dict() for entry in added)
        logger.info(f"Added {len(added)} entries to {self.path}")
        return added

    def delete_entry(self, entry_id: str) -> bool:
        with self.transaction() as store:
            return store._remove_by_id("entries", entry_id)

    # ------------------------------------------------------------------
    # AssetProvider
    # ------------------------------------------------------------------

    def list_assets(self) -> list[Asset]:
        raw = self._document()["assets"]
        try:
            return [Asset.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise DataProcessingError(f"Invalid asset in {self.path}: {e}") from e

    def add_asset(self, asset: Asset) -> Asset:
        with self.transaction() as store:
            store._pending["assets"].append(asset.to_dict())
        logger.info(f"Added asset '{asset.name}' to {self.path}")
        return asset

    def delete_asset(self, asset_id: str) -> bool:
        with self.transaction() as store:
            return store._remove_by_id("assets", asset_id)

    def _remove_by_id(self, section: str, item_id: str) -> bool:
        items = self._pending[section]
        kept = [item for item in items if str(item.get("id")) != item_id]
        if len(kept) == len(items):
            logger.warning(f"No {section[:-1]} with id {item_id} in {self.path}")
            return False
        self._pending[section] = kept
        return True

    # ------------------------------------------------------------------
    # AccountStore
    # ------------------------------------------------------------------

    def get_account(self) -> Account | None:
        raw = self._document().get("account")
        if not raw:
            return None
        try:
            return Account.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise DataProcessingError(f"Invalid account in {self.path}: {e}") from e

    def update_account(self, balance: Decimal, last_reconciled: date) -> Account:
        account = Account(balance=balance, last_reconciled=last_reconciled)
        with self.transaction() as store:
            store._pending["account"] = account.to_dict()
        return account
