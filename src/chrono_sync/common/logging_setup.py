"""Logging setup shared by the app factory and scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "chrono_sync.stdout"


def configure_logging(level: str = "INFO") -> logging.Logger:
    log = logging.getLogger("chrono_sync")
    log.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # create_app may run several times in one process (tests).
    if not any(h.get_name() == HANDLER_NAME for h in log.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.set_name(HANDLER_NAME)
        log.addHandler(handler)
    return log
