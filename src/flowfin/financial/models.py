"""Core financial data models.

Cash-flow entries, assets (with optional real-estate loans) and the single
current account. Amounts are ``Decimal`` with two fractional digits; the
sign of a cash flow is carried by its ``kind``, never by a negative amount.
Dates are plain calendar dates.

Every model converts loose input (int, float, str) in ``__post_init__`` and
rejects invalid values with ``ValueError``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import StrEnum
from typing import Any

from .dates import parse_date

CENT = Decimal("0.01")
DEFAULT_LABEL = "Perso"


def to_decimal(value: Any) -> Decimal:
    """Convert a number or numeric string to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a valid amount: {value!r}") from e


def to_cents(value: Any) -> Decimal:
    """Round to two fractional digits (half up)."""
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_rate(value: Any) -> Decimal:
    """Convert a percentage, rejecting NaN and infinities."""
    rate = to_decimal(value)
    if not rate.is_finite():
        raise ValueError(f"Rate must be finite, got {value!r}")
    return rate


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class EntryKind(StrEnum):
    INCOME = "income"
    EXPENSE = "expense"


class RecurrencePolicy(StrEnum):
    """How a single entry is projected into future occurrences."""

    NONE = "none"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"


class AssetCategory(StrEnum):
    LIQUIDITY = "liquidity"  # Savings accounts, cash
    INVESTMENT = "investment"  # Brokerage, life insurance, retirement plans
    REAL_ESTATE = "real_estate"
    CRYPTO = "crypto"


@dataclass(frozen=True)
class CashFlowEntry:
    """A single dated income or expense record.

    Attributes:
        name: What the flow is ("Salary", "Rent").
        amount: Non-negative amount; the direction comes from ``kind``.
        kind: Income or expense.
        date: Calendar date the flow occurs on.
        label: Grouping label, "Perso" when not given.
        entry_id: Identity; generated when not supplied.
    """

    name: str
    amount: Decimal
    kind: EntryKind
    date: date
    label: str = DEFAULT_LABEL
    entry_id: str = field(default_factory=new_id)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Entry name cannot be empty")
        amount = to_cents(self.amount)
        if amount < 0:
            raise ValueError(f"Entry {self.name} has invalid amount: {self.amount}")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "kind", EntryKind(self.kind))
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "label", (self.label or "").strip() or DEFAULT_LABEL)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with income positive and expense negative."""
        return self.amount if self.kind == EntryKind.INCOME else -self.amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entry_id,
            "name": self.name,
            "amount": str(self.amount),
            "kind": self.kind.value,
            "label": self.label,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CashFlowEntry:
        kwargs: dict[str, Any] = {
            "name": data["name"],
            "amount": data["amount"],
            "kind": str(data["kind"]).lower(),
            "date": data["date"],
            "label": data.get("label") or DEFAULT_LABEL,
        }
        if data.get("id"):
            kwargs["entry_id"] = str(data["id"])
        return cls(**kwargs)


@dataclass
class RealEstateLoan:
    """Fixed-rate, fixed-term amortizing loan attached to a property.

    Attributes:
        principal: Amount borrowed.
        annual_rate_percent: Nominal annual rate in percent (2 for 2%).
        duration_years: Loan term in years.
        start_date: Date of the first month of the loan.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    duration_years: int
    start_date: date

    def __post_init__(self):
        self.principal = to_cents(self.principal)
        self.annual_rate_percent = to_rate(self.annual_rate_percent)
        self.start_date = parse_date(self.start_date)
        if self.principal <= 0:
            raise ValueError(f"Loan principal must be positive, got {self.principal}")
        if self.annual_rate_percent < 0:
            raise ValueError(f"Loan rate cannot be negative, got {self.annual_rate_percent}")
        years = to_decimal(self.duration_years)
        if not years.is_finite() or years <= 0 or years != years.to_integral_value():
            raise ValueError(f"Loan duration must be a positive number of years, got {self.duration_years}")
        self.duration_years = int(years)

    @property
    def total_months(self) -> int:
        return self.duration_years * 12

    def to_dict(self) -> dict[str, Any]:
        return {
            "principal": str(self.principal),
            "annual_rate_percent": str(self.annual_rate_percent),
            "duration_years": self.duration_years,
            "start_date": self.start_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RealEstateLoan:
        return cls(
            principal=data["principal"],
            annual_rate_percent=data.get("annual_rate_percent", 0),
            duration_years=data["duration_years"],
            start_date=data["start_date"],
        )


@dataclass
class Asset:
    """A holding counted in the user's wealth.

    Attributes:
        name: Human-readable name.
        category: One of the four asset categories.
        value: Current estimated value.
        yield_rate: Annual yield in percent, used for non-real-estate assets.
        monthly_rent: Rental income, used for real estate.
        loan: Outstanding mortgage on the asset, if any.
        asset_id: Identity; generated when not supplied.
    """

    name: str
    category: AssetCategory
    value: Decimal
    yield_rate: Decimal = Decimal("0")
    monthly_rent: Decimal = Decimal("0")
    loan: RealEstateLoan | None = None
    asset_id: str = field(default_factory=new_id)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Asset name cannot be empty")
        self.category = AssetCategory(self.category)
        self.value = to_cents(self.value)
        self.yield_rate = to_rate(self.yield_rate)
        self.monthly_rent = to_cents(self.monthly_rent)
        if self.value < 0:
            raise ValueError(f"Asset {self.name} has negative value: {self.value}")
        if self.monthly_rent < 0:
            raise ValueError(f"Asset {self.name} has negative rent: {self.monthly_rent}")

    @property
    def is_real_estate(self) -> bool:
        return self.category == AssetCategory.REAL_ESTATE

    @property
    def effective_yield(self) -> Decimal:
        """Annual yield in percent; derived from rent for real estate."""
        if not self.is_real_estate:
            return self.yield_rate
        if self.value <= 0:
            return Decimal("0")
        return self.monthly_rent * 12 / self.value * 100

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.asset_id,
            "name": self.name,
            "category": self.category.value,
            "value": str(self.value),
            "yield_rate": str(self.yield_rate),
            "monthly_rent": str(self.monthly_rent),
        }
        if self.loan is not None:
            data["loan"] = self.loan.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Asset:
        kwargs: dict[str, Any] = {
            "name": data["name"],
            "category": str(data["category"]).lower(),
            "value": data["value"],
            "yield_rate": data.get("yield_rate", 0),
            "monthly_rent": data.get("monthly_rent", 0),
            "loan": RealEstateLoan.from_dict(data["loan"]) if data.get("loan") else None,
        }
        if data.get("id"):
            kwargs["asset_id"] = str(data["id"])
        return cls(**kwargs)


@dataclass(frozen=True)
class Account:
    """The user's current account.

    Attributes:
        balance: Stored balance; may be negative (overdraft).
        last_reconciled: Watermark date; ledger entries on or before it
            are already included in ``balance``.
    """

    balance: Decimal
    last_reconciled: date

    def __post_init__(self):
        object.__setattr__(self, "balance", to_cents(self.balance))
        object.__setattr__(self, "last_reconciled", parse_date(self.last_reconciled))

    def to_dict(self) -> dict[str, Any]:
        return {"balance": str(self.balance), "last_reconciled": self.last_reconciled.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        return cls(balance=data.get("balance", 0), last_reconciled=data["last_reconciled"])
