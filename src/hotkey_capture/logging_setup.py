from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "hotkey_capture"

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install a single stderr handler on the package logger.

    Calling it again replaces the handler instead of stacking a second one.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
