from __future__ import annotations

"""Centralized logging utilities for the POLO collector.

Every entry point asks for the package logger here so each run gets the same
format and a rotating log file next to the collected data. Library modules
just call ``logging.getLogger(__name__)``; their records propagate up to the
``polo_collector`` logger configured below.
"""

import logging
import logging.handlers
import os
import pathlib
from typing import Optional, Union

# Cache created loggers so repeated calls don't duplicate handlers
_LOGGER_CACHE = {}


def get_logger(
    name: str = "polo_collector",
    log_dir: Optional[Union[str, pathlib.Path]] = None,
    level: Union[str, int] = "INFO",
) -> logging.Logger:
    """Return a configured :class:`logging.Logger`.

    Parameters
    ----------
    name:
        Logger name (also used in log filename: ``{name}.log``).
    log_dir:
        Directory where log files should be written. Created if missing.
    level:
        Level name or number applied to the logger and both handlers.

    Behavior
    --------
    * Rotating file handler (5MB x5 backups) + console handler.
    * Reuses cached logger on subsequent calls.
    """
    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    # Guard against double-adding handlers if the interpreter reloads modules
    if logger.handlers:
        return logger

    if log_dir is None:
        log_dir = "logs"
    pathlib.Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_path = os.path.join(log_dir, f"{name}.log")

    # Rotating file --------------------------------------------------------
    fh = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8"
    )
    fh.setLevel(level)
    fh.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )

    # Console --------------------------------------------------------------
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(fh)
    logger.addHandler(ch)

    _LOGGER_CACHE[name] = logger
    return logger


def reset_loggers() -> None:
    """Close and drop cached handlers (tests point runs at fresh tmp dirs)."""
    for name, logger in list(_LOGGER_CACHE.items()):
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        del _LOGGER_CACHE[name]
