# src/config/logging_config.py

"""Per-run timestamped logging configuration for temp_snapshots.

Every scheduled run writes to its own file inside ``logs/``, named after
the launch time (e.g. ``logs/run_20261017_060000.log``).  All
``temp_snapshots.*`` loggers share that file, so a single run's list,
evict, create, write and format steps read top to bottom in one place.

Only warnings and errors reach stderr unless ``verbose`` is requested;
the file always captures DEBUG records with module and line numbers.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

LOGGER_NAME = "temp_snapshots"

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    logs_dir: Path | None = None,
    verbose: bool = False,
) -> Path:
    """Initialise the ``temp_snapshots`` logger for the current run.

    Args:
        logs_dir: Directory for the run log (default ``Settings.LOGS_DIR``).
        verbose: Lower the console threshold from WARNING to INFO.

    Returns:
        The :class:`~pathlib.Path` to the log file for this run.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, --health followed by a run) keep one handler set
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(
        logging.INFO if verbose else logging.WARNING
    )
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
