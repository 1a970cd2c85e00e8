"""Logging utilities.

Python's standard `logging` with the same line format everywhere:
    2024-01-01T12:00:00 WARNING solution_corpus.walker | ...

- Console handler always.
- Optional UTF-8 log file (directories are created).
Calling setup_logging() again replaces the handlers it installed before.
"""

from __future__ import annotations
import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_installed: list = []

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Setup logging configuration.

    Args:
        level: Root log level
        log_file: Also write logs to this file when given
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in _installed:
        root.removeHandler(h)
        h.close()
    _installed.clear()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # File
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)
        _installed.append(fh)

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)
    _installed.append(ch)
