"""Core infrastructure: configuration, exceptions, logging, CLI."""

from .config import Config
from .exceptions import (
    ConfigurationError,
    DataProcessingError,
    FlowfinError,
    ReconciliationError,
    StorageError,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "DataProcessingError",
    "FlowfinError",
    "ReconciliationError",
    "StorageError",
]
