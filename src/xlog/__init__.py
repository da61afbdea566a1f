"""
xlog: leveled logging to multiple destinations.

One logger, many sinks, each registered at a threshold level and
receiving every message at that level or above.
"""

from xlog.levels import (
    Level,
    LEVEL_NAMES,
    LEVEL_ORDER,
    at_or_above,
    is_greater_level,
    is_lesser_level,
    level_name,
    rank,
    resolve_level,
)
from xlog.errors import (
    XlogError,
    InvalidLevelError,
    PlaceholderError,
    LoggerClosedError,
    DestinationOpenError,
    LoggerPanic,
)
from xlog.formatters import LogFormatter, TemplateFormatter
from xlog.container import DestinationContainer
from xlog.loggable import Loggable, Configurable
from xlog.writer import LoggerWriter
from xlog.core import Logger
from xlog.config import DestinationConfig, LoggerConfig, RegistryConfig
from xlog.registry import LoggerRegistry, get_logger, default_logger
from xlog.handlers import XlogHandler

DEBUG = Level.DEBUG
INFO = Level.INFO
NOTICE = Level.NOTICE
WARNING = Level.WARNING
ERROR = Level.ERROR
CRITICAL = Level.CRITICAL
ALERT = Level.ALERT
EMERGENCY = Level.EMERGENCY

__all__ = [
    "Level",
    "LEVEL_NAMES",
    "LEVEL_ORDER",
    "at_or_above",
    "is_greater_level",
    "is_lesser_level",
    "level_name",
    "rank",
    "resolve_level",
    "XlogError",
    "InvalidLevelError",
    "PlaceholderError",
    "LoggerClosedError",
    "DestinationOpenError",
    "LoggerPanic",
    "LogFormatter",
    "TemplateFormatter",
    "DestinationContainer",
    "Loggable",
    "Configurable",
    "LoggerWriter",
    "Logger",
    "DestinationConfig",
    "LoggerConfig",
    "RegistryConfig",
    "LoggerRegistry",
    "get_logger",
    "default_logger",
    "XlogHandler",
    "DEBUG",
    "INFO",
    "NOTICE",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "ALERT",
    "EMERGENCY",
]
