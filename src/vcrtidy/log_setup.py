"""
Logging setup for applications embedding the cleaner.

The package itself only creates module loggers; handlers and levels are the
embedding application's choice. ``configure_logging`` is a convenience for
scripts that want the same console format everywhere.
"""

import logging
import sys

# Between DEBUG and INFO: per-cassette progress without per-interaction detail
VERBOSE = 15

logging.addLevelName(VERBOSE, "VERBOSE")

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False, debug: bool = False) -> int:
    """
    Configure root logging for console output.

    Args:
        verbose: Log at VERBOSE level
        debug: Log at DEBUG level; wins over ``verbose``

    Returns:
        The level that was applied
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = VERBOSE
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    return level
