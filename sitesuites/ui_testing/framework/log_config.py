"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the UI suites.

Sinks:
    - stderr (colorized, skipped when running under CI)
    - <log_dir>/combined.log   all records at the configured level
    - <log_dir>/error.log      ERROR and above only

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .settings import FrameworkSettings


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(settings: FrameworkSettings, force: bool = False) -> None:
    """
    Initialize the global Loguru logger from the settings snapshot.

    Safe to call more than once; only the first call (or a forced call)
    replaces the handlers.

    Args:
        settings: Framework settings (log level and directory)
        force: Reconfigure even if already initialized
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    level = settings.log_level.upper()
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()

    if not os.getenv("CI"):
        logger.add(
            sys.stderr,
            level=level,
            format=CONSOLE_FORMAT,
            colorize=True,
        )

    logger.add(
        log_dir / "combined.log",
        level=level,
        format=FILE_FORMAT,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
    )
    logger.add(
        log_dir / "error.log",
        level="ERROR",
        format=FILE_FORMAT,
        rotation="5 MB",
        retention=5,
        encoding="utf-8",
        backtrace=True,
    )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level} (files in {log_dir})")


def reset_logger(level: Optional[str] = None) -> None:
    """Drop configured sinks and fall back to a plain stderr handler."""
    global _logger_initialized
    logger.remove()
    logger.add(sys.stderr, level=(level or "INFO").upper())
    _logger_initialized = False


__all__ = [
    "init_logger",
    "reset_logger",
]
