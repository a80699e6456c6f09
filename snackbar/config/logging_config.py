# snackbar/config/logging_config.py

"""Per-run logging for the catalog layer.

``setup_logging`` attaches two handlers to the ``snackbar`` logger: a
timestamped file under ``logs/`` (``run_YYYYMMDD_HHMMSS.log``) that records
every catalog request, cache decision and fallback at DEBUG, and a stderr
handler at ``Settings.CONSOLE_LOG_LEVEL`` (``SNACKBAR_LOG_LEVEL``) so the
CLI's JSON on stdout is never interleaved with log lines.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from snackbar.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-20s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_level() -> int:
    """Numeric level for the configured console level name; WARNING if unknown."""
    level = getattr(logging, Settings.CONSOLE_LOG_LEVEL, None)
    return level if isinstance(level, int) else logging.WARNING


def _active_log_file(logger: logging.Logger) -> Path | None:
    """Path of the file handler a previous call attached, if any."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging() -> Path:
    """Configure the ``snackbar`` logger and return this run's log file.

    Calling it again is a no-op that returns the file already in use.
    """
    catalog_logger = logging.getLogger("snackbar")
    existing = _active_log_file(catalog_logger)
    if existing is not None:
        return existing

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    catalog_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_console_level())
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    catalog_logger.addHandler(file_handler)
    catalog_logger.addHandler(console_handler)

    catalog_logger.info(
        "Catalog %s, log file: %s", Settings.CATALOG_BASE_URL, log_file
    )
    return log_file
