"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``FlowfinConfig``
instance.  Dict-based access through ``Config.get`` keeps working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class PathsConfig(BaseModel):
    """File-system locations used by the CLI and the local store."""

    data_dir: Path
    ledger_file: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "ledger_file", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    def resolved_ledger_file(self) -> Path:
        return self.ledger_file or self.data_dir / "ledger.yaml"

    def resolved_log_dir(self) -> Path:
        return self.log_dir or self.data_dir / "logs"


class LedgerConfig(BaseModel):
    """Defaults applied to new cash-flow entries."""

    default_label: str = "Perso"

    @field_validator("default_label")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_label cannot be blank")
        return v.strip()


class RecurrenceConfig(BaseModel):
    """Recurrence expansion knobs."""

    # Annual entries project into the current and the following year
    annual_occurrences: int = 2

    @field_validator("annual_occurrences")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"annual_occurrences must be >= 1, got {v}")
        return v


class LoggingConfig(BaseModel):
    """Log level, and an optional log file (relative names live under paths.log_dir)."""

    level: str = "WARNING"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return level


class FlowfinConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so callers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.flowfin-data"))
    ledger: LedgerConfig = LedgerConfig()
    recurrence: RecurrenceConfig = RecurrenceConfig()
    logging: LoggingConfig = LoggingConfig()

    def resolved_log_file(self) -> Path | None:
        """Absolute log file path, or None when file logging is off."""
        if not self.logging.file:
            return None
        path = Path(self.logging.file).expanduser()
        if path.is_absolute():
            return path
        return self.paths.resolved_log_dir() / path
