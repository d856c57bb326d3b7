# catalogue/config/logging_config.py

"""Per-run logging for the catalogue client.

Every launch writes to its own ``logs/run_<timestamp>.log`` file. All
``catalogue.*`` loggers share it, so a list fetch, the detail fetches
that follow it and their merges read as one timeline. Requests run on
worker threads, so the thread name is part of every file record.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from catalogue.config.settings import Settings

ROOT_LOGGER_NAME = "catalogue"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    verbose: bool = False,
    logs_dir: Path | None = None,
) -> Path:
    """Attach the per-run file handler and a stderr handler.

    Args:
        verbose: Lower the console threshold from WARNING to DEBUG.
        logs_dir: Directory for the run log, ``Settings.LOGS_DIR`` if omitted.

    Returns:
        Path of the log file for this run.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, CLI re-entry) keep the first run's handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(
        logging.DEBUG if verbose else logging.WARNING
    )
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, run log at %s", log_file)

    return log_file
