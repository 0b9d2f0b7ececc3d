"""
Loguru sinks for flowfin.

The engine only ever calls ``logger.debug/info/warning``; which of those
messages reach the terminal or a file is decided once, by the CLI, through
``setup_logging``.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from ..types import PathLike

CONSOLE_FORMAT = "<level>{level: <8}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} {level: <8} {name}:{line} {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: PathLike | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> Path | None:
    """
    Replace loguru's sinks with a stderr sink and, optionally, a rotating file.

    Args:
        level: Minimum level for both sinks.
        log_file: Log file path; its directory is created when missing.
        rotation: Size at which the log file is rotated.
        retention: How long rotated files are kept.

    Returns:
        The resolved log file path, or None when logging to stderr only.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
    if log_file is None:
        return None

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(path, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention, encoding="utf-8")
    return path
