"""
Bridge from the stdlib logging module.

    import logging
    logging.getLogger().addHandler(XlogHandler(get_logger("app")))

Records are rendered by the handler's logging.Formatter (just the message
by default) and passed to the xlog logger, which adds its own template.
"""

import logging
from typing import Optional

from xlog.errors import LoggerPanic
from xlog.levels import Level
from xlog.loggable import Loggable

# stdlib level → xlog level, highest first. Values in between map down.
STDLIB_LEVELS: tuple[tuple[int, Level], ...] = (
    (logging.CRITICAL, Level.CRITICAL),
    (logging.ERROR, Level.ERROR),
    (logging.WARNING, Level.WARNING),
    (logging.INFO, Level.INFO),
    (logging.DEBUG, Level.DEBUG),
)


def from_stdlib_level(levelno: int) -> Level:
    for threshold, level in STDLIB_LEVELS:
        if levelno >= threshold:
            return level
    return Level.DEBUG


class XlogHandler(logging.Handler):
    """logging.Handler that forwards records to an xlog logger."""

    def __init__(self, logger: Loggable, level: int = logging.NOTSET, fmt: Optional[str] = None):
        super().__init__(level=level)
        self.logger = logger
        self.setFormatter(logging.Formatter(fmt or "%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self.logger.log(from_stdlib_level(record.levelno), message)
        except LoggerPanic:
            raise
        except Exception:
            self.handleError(record)
