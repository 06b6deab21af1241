# src/config/logging_config.py

"""Logging setup for offer_ledger.

Every CLI invocation writes to its own file under ``logs/`` named after
the start time (``logs/run_20261019_174512.log``).  Loggers named
``offer_ledger.*`` (recorder, store, cli, main) share that file.  Only
warnings and errors are echoed to stderr, so JSON on stdout stays clean.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER = "offer_ledger"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_STDERR_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_level() -> int:
    """Resolve Settings.CONSOLE_LOG_LEVEL, falling back to WARNING."""
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logging() -> Path:
    """Attach the per-run file and stderr handlers to ``offer_ledger``.

    Safe to call more than once; handlers are only added the first time.

    Returns:
        The path of this run's log file.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(_console_level())
    stderr_handler.setFormatter(
        logging.Formatter(_STDERR_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(stderr_handler)
    root_logger.debug("Logging to %s", log_file)
    return log_file


def reset_logging() -> None:
    """Close and detach every handler on the ``offer_ledger`` logger."""
    root_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
