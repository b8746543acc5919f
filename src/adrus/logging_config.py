"""
Logging configuration for adrus.

All modules log through ``logging.getLogger(__name__)`` under the ``adrus``
hierarchy.  The CLI installs one stderr handler on that logger, filtered by the
``LOG_FILTER`` environment variable (``trace``, ``debug``, ``info``, ``warn``,
``error``).
"""

import logging
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_FILTER = "info"

_HANDLER_NAME = "adrus-stderr"

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(name):
    """Map a ``LOG_FILTER`` value to a logging level.

    Unknown or empty values fall back to ``info``.
    """
    if not name:
        return _LEVELS[DEFAULT_FILTER]
    return _LEVELS.get(name.strip().lower(), _LEVELS[DEFAULT_FILTER])


def configure_logging(log_filter=None, stream=None):
    """
    Route ``adrus`` log records to stderr at the requested level.

    Calling this again replaces the handler installed by a previous call,
    so repeated CLI invocations in one process don't duplicate output.

    Args:
        log_filter: Level name as accepted by :func:`parse_level`.
        stream: Output stream, defaults to the current ``sys.stderr``.

    Returns:
        The installed handler.
    """
    level = parse_level(log_filter)
    logger = logging.getLogger("adrus")

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)-5s %(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
