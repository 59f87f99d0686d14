"""Logging initialization using loguru.

The terminal belongs to the UI, so the default stderr sink is always removed.
Logs go to a file only when one is requested.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger


def init_logging(log_file: Path | None = None, level: str = "INFO") -> None:
    """Route logs to ``log_file`` (rotating), or discard them when ``None``."""
    logger.remove()
    if log_file is None:
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_file),
        rotation="5 MB",
        retention=3,
        backtrace=False,
        diagnose=False,
        level=level,
    )
