"""Logging configuration shared by the server and the headless runner."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Third-party loggers that flood the console at INFO
_CHATTY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Route all records to *stream* (stdout by default) and return the root logger.

    The thread name is part of the format because the engine ticks on its
    own thread while request handlers run on the server's.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(threadName)-12s %(name)-28s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    return root
