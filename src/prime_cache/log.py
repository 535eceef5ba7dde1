"""Logging setup for command-line use.

Library modules only create loggers under the ``prime_cache`` namespace;
handlers are attached here by whoever runs the package.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logger(level: int = logging.INFO, log_path: Optional[Path] = None) -> logging.Logger:
    """Set up the package logger to write to the console and optionally a file."""
    logger = logging.getLogger("prime_cache")
    # The file handler captures everything; otherwise only what the console shows
    logger.setLevel(logging.DEBUG if log_path is not None else level)

    # Clear any existing handlers
    logger.handlers.clear()

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    return logger
