"""
Handler setup for the ``spectrokit`` logger.

Library modules only create module-level loggers under ``spectrokit.*``;
the CLI (or an embedding application) attaches handlers once through here.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'spectrokit'

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger.

    The console (stderr, so it never mixes with the rich report on stdout)
    shows warnings, or everything when verbose. The log file always records
    INFO and above, DEBUG when verbose. Calling this again replaces the
    handlers from the previous call.

    Args:
        verbose: Log DEBUG messages to console and file
        log_file: Append log records to this path (parent dirs are created)

    Returns:
        The ``spectrokit`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
