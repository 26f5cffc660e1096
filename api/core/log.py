"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging
import sys

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    """
    Attach a single stdout handler to the root logger.

    Safe to call more than once; existing handlers are replaced.
    """
    level = logging.getLevelName(settings.log_level())
    if not isinstance(level, int):
        level = logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # asyncpg is chatty at DEBUG.
    logging.getLogger("asyncpg").setLevel(max(level, logging.INFO))
