# File: src/utils/logger.py
"""
Centralized logging configuration for Courtside Scheduler.

Every module calls setup_logger(__name__). Console verbosity comes from
COURTSIDE_LOG_LEVEL; the daily file under COURTSIDE_LOG_DIR always gets DEBUG.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

LOG_DIR_ENV = "COURTSIDE_LOG_DIR"
LOG_LEVEL_ENV = "COURTSIDE_LOG_LEVEL"

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'

BANNER_WIDTH = 60


def _console_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(name: str = "courtside", level: Optional[int] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name, usually the module's __name__
        level: Console level (default: COURTSIDE_LOG_LEVEL or INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    # Handlers filter; the logger itself passes everything through
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(_console_level(level))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    # Fetch workers log from pool threads, so the file format records the thread
    log_dir = Path(os.getenv(LOG_DIR_ENV, "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"courtside_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(file_handler)

    return logger


def log_banner(logger: logging.Logger, title: str, level: int = logging.INFO) -> None:
    """Log `title` between two rules, marking the start or end of a run."""
    logger.log(level, "=" * BANNER_WIDTH)
    logger.log(level, title)
    logger.log(level, "=" * BANNER_WIDTH)
