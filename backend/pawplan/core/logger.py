"""
Logging setup.

All modules obtain their logger through ``setup_logger(__name__)`` so that
handlers and levels are configured in one place.
"""

import logging
import sys

from pawplan.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Return a logger with a single stream handler at the configured level."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(get_settings().LOG_LEVEL)
    return log


logger = setup_logger("pawplan")
