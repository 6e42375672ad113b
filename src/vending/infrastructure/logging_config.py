"""Centralized logging configuration for the vending machine.

Every module logs through ``logging.getLogger(__name__)``, which places
it under the ``vending`` namespace configured here.

Log Format:
    2026-10-19 10:15:30 [INFO    ] vending.application.vending_machine - Dispensed A2; change [$0.50]
"""

from __future__ import annotations

import logging
import os
import sys

APP_LOGGER = "vending"
LOG_LEVEL_ENV = "VENDING_LOG_LEVEL"


def setup_logging(log_level: int | str | None = None) -> logging.Logger:
    """Configure the ``vending`` logger with a single console handler.

    ``log_level`` falls back to ``$VENDING_LOG_LEVEL`` and then WARNING.
    Calling it again replaces the handler instead of stacking a second one.
    """
    if log_level is None:
        log_level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    logger.debug("Logging configured at level %s", logging.getLevelName(logger.level))
    return logger
