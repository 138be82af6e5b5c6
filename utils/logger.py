"""
utils/logger.py
---------------
Logging setup shared by the whole package.
Every module gets its logger through `get_logger(__name__)`; the first call
installs a stdout handler on the root logger at LOG_LEVEL.
"""

import logging
import sys

from config import LOG_LEVEL

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return the logger called `name`, configuring the root logger on first use."""
    global _configured
    if not _configured:
        level = getattr(logging, LOG_LEVEL, None)
        logging.basicConfig(
            level=level if isinstance(level, int) else logging.INFO,
            format=_FORMAT,
            datefmt=_DATEFMT,
            stream=sys.stdout,
        )
        _configured = True
    return logging.getLogger(name)
