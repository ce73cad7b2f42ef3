# src/config/logging_config.py

"""Per-run logging for listing_matcher.

One run writes ``logs/run_<timestamp>.log`` at DEBUG, which holds the
stage counts and individual match decisions; stderr only shows what
``console_level`` lets through.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "listing_matcher"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _active_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def _attach(
    logger: logging.Logger, handler: logging.Handler, level: int, fmt: str
) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Configure the ``listing_matcher`` logger and return its log file.

    A second call leaves the handlers alone and returns the file the
    first call opened.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    active = _active_log_file(root_logger)
    if active is not None:
        return active

    Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = Settings.LOGS_DIR / f"run_{stamp}.log"

    _attach(
        root_logger,
        logging.FileHandler(log_file, encoding="utf-8"),
        logging.DEBUG,
        _FILE_FORMAT,
    )
    _attach(
        root_logger,
        logging.StreamHandler(sys.stderr),
        console_level,
        _CONSOLE_FORMAT,
    )

    root_logger.info("Logging to %s", log_file)
    return log_file
