"""Personal-finance engine: models, calculators and the local store."""

from .models import Account, Asset, AssetCategory, CashFlowEntry, EntryKind, RealEstateLoan, RecurrencePolicy

__all__ = [
    "Account",
    "Asset",
    "AssetCategory",
    "CashFlowEntry",
    "EntryKind",
    "RealEstateLoan",
    "RecurrencePolicy",
]
