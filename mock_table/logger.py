"""
Shared logger for the mock table service.

Every module does ``from mock_table.logger import logger`` so that the
whole package logs through one named logger with one handler.
"""

import logging
import sys

from mock_table.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def _build_logger(name: str = "mock_table") -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    level = logging.getLevelName(LOG_LEVEL.upper())
    log.setLevel(level if isinstance(level, int) else logging.INFO)
    return log


logger = _build_logger()
