"""Logging configuration for command line use."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Configure the ``confluence_rest`` logger.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"INFO"``.
        log_file: Optional file that receives the same records as stderr.
    """
    resolved = getattr(logging, level.upper(), logging.WARNING)
    formatter = logging.Formatter(LOG_FORMAT)

    logger = logging.getLogger("confluence_rest")
    logger.setLevel(resolved)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(resolved)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
