"""Shared type aliases used across flowfin."""

from decimal import Decimal
from pathlib import Path
from typing import Any

# Config value types
ConfigDict = dict[str, Any]

# Path types
PathLike = str | Path

# Anything accepted where a monetary amount is expected
AmountLike = Decimal | int | float | str
