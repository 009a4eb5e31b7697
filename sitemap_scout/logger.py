# === FILE: sitemap_scout/logger.py ===
"""Logging setup for **SitemapScout**.

Every component logs through the ``"SitemapScout"`` logger. Nothing is
attached at import time, so library users keep control of their own logging
tree; the CLI calls :func:`init_logging` once it has parsed its options.

Console output goes to stderr because ``sitemap-scout scrape`` writes its
results to stdout. An optional log file rotates at 5 MiB and keeps three
backups.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SitemapScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _build_handlers(fmt: str, log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _detach_handlers(lg: logging.Logger) -> None:
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the project logger.

    With ``replace_handlers=False`` the new handlers are added next to the
    existing ones. Records never propagate to the root logger afterwards.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        _detach_handlers(lg)
    for handler in _build_handlers(log_format, log_file):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """CLI entry point: drop whatever handlers are attached and start over."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = logging.getLogger(LOGGER_NAME)

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
