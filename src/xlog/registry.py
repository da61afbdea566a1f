"""
Named logger registry.

    registry = LoggerRegistry()
    db = registry.get_logger("db")      # created on first use
    registry.get_logger("db") is db     # True

A registry is an ordinary object so tests and applications can hold their
own. LoggerRegistry.instance() is the process-wide one behind the module
functions get_logger() and default_logger().
"""

from __future__ import annotations

import threading
from typing import Optional

from xlog.config import RegistryConfig
from xlog.core import Logger

DEFAULT_LOGGER_NAME = "xlog"


class LoggerRegistry:
    """Lazily created loggers, one per name."""

    _instance: Optional["LoggerRegistry"] = None
    _lock = threading.Lock()

    def __init__(self, default_name: str = DEFAULT_LOGGER_NAME) -> None:
        self.default_name = default_name
        self._loggers: dict[str, Logger] = {}
        self._loggers_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "LoggerRegistry":
        """Get or create the process-wide registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """
        Close every logger in the process-wide registry and discard it.
        The next instance() call starts from scratch.
        """
        with cls._lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None

    # ── Lookup ────────────────────────────────────────────────────

    def get_logger(self, name: str) -> Logger:
        """The logger called `name`, created with defaults on first use."""
        with self._loggers_lock:
            logger = self._loggers.get(name)
            if logger is None or logger.closed:
                logger = Logger(name)
                self._loggers[name] = logger
            return logger

    def default(self) -> Logger:
        return self.get_logger(self.default_name)

    def names(self) -> list[str]:
        with self._loggers_lock:
            return sorted(self._loggers)

    def __contains__(self, name: object) -> bool:
        return name in self._loggers

    def __len__(self) -> int:
        return len(self._loggers)

    # ── Configuration ─────────────────────────────────────────────

    def configure(self, config: RegistryConfig | dict) -> None:
        """Apply a RegistryConfig: each entry configures get_logger(name)."""
        if isinstance(config, dict):
            config = RegistryConfig.from_dict(config)
        if config.default_name:
            self.default_name = config.default_name
        for name, logger_config in config.loggers.items():
            self.get_logger(name).configure(logger_config)

    def status(self) -> dict:
        with self._loggers_lock:
            loggers = dict(self._loggers)
        return {
            "default_name": self.default_name,
            "loggers": {name: logger.status() for name, logger in sorted(loggers.items())},
        }

    # ── Cleanup ───────────────────────────────────────────────────

    def close(self) -> None:
        """Close every logger and forget them."""
        with self._loggers_lock:
            loggers = list(self._loggers.values())
            self._loggers.clear()
        for logger in loggers:
            logger.close()


def get_logger(name: str) -> Logger:
    """Named logger from the process-wide registry."""
    return LoggerRegistry.instance().get_logger(name)


def default_logger() -> Logger:
    """The default logger of the process-wide registry."""
    return LoggerRegistry.instance().default()
