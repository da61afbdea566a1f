"""
Logger: name + formatter + destination container.

    log = Logger("api")
    log.append("stderr", Level.WARNING)
    log.append("/var/log/api.log", Level.DEBUG)
    log.info("listening on", 8080)

A logging call never raises because of the act of logging: disabled or
closed loggers return immediately, and a sink that fails to write is
skipped. The only exceptions out of log() are programming errors (a
non-canonical level) and the configured panic escalation.
"""

from __future__ import annotations

import os
import threading
from typing import Any, Iterable, Optional

from xlog import destinations
from xlog.config import LoggerConfig
from xlog.container import DestinationContainer
from xlog.errors import DestinationOpenError, LoggerClosedError, LoggerPanic
from xlog.formatters import LogFormatter, PlaceholderSupplier, TemplateFormatter
from xlog.levels import Level, level_name, rank, resolve_level
from xlog.writer import LoggerWriter

# Exit status used when a fatal-level message terminates the process.
FATAL_EXIT_CODE = 1


def render_printf(fmt: str, args: tuple) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return f"{fmt} %!({', '.join(map(repr, args))})"


class Logger:
    """
    Multi-destination leveled logger.

    Thread safety: one re-entrant lock per logger guards rendering, sink
    writes and every configuration change made through the logger. The
    formatter and container are not locked themselves; change them through
    the logger (set_template, register_placeholder, append*) or hold
    `logger.lock`.
    """

    DEBUG = Level.DEBUG
    INFO = Level.INFO
    NOTICE = Level.NOTICE
    WARNING = Level.WARNING
    ERROR = Level.ERROR
    CRITICAL = Level.CRITICAL
    ALERT = Level.ALERT
    EMERGENCY = Level.EMERGENCY

    def __init__(
        self,
        name: str,
        formatter: Optional[LogFormatter] = None,
        container: Optional[DestinationContainer] = None,
        *,
        enabled: bool = True,
        fatal_on: int | str = 0,
        panic_on: int | str = 0,
        panic_on_file_errors: Optional[bool] = None,
    ) -> None:
        self.name = name
        self.enabled = enabled
        self.formatter = formatter or TemplateFormatter()
        self.container = container or DestinationContainer()
        self._fatal_on = resolve_level(fatal_on)
        self._panic_on = resolve_level(panic_on)
        # None: follow destinations.PANIC_ON_FILE_ERRORS
        self.panic_on_file_errors = panic_on_file_errors
        self.lock = threading.RLock()
        self._closed = False
        self._skipped: list[str] = []
        self._write_errors = 0

    # ── Escalation masks ──────────────────────────────────────────

    @property
    def fatal_on(self) -> Level:
        return self._fatal_on

    @fatal_on.setter
    def fatal_on(self, value: int | str) -> None:
        self._fatal_on = resolve_level(value)

    @property
    def panic_on(self) -> Level:
        return self._panic_on

    @panic_on.setter
    def panic_on(self, value: int | str) -> None:
        self._panic_on = resolve_level(value)

    # ── State ─────────────────────────────────────────────────────

    @property
    def closed(self) -> bool:
        return self._closed

    def writable(self) -> bool:
        """True when logging is enabled and the logger hasn't been closed."""
        return self.enabled and not self._closed

    # ── Destinations ──────────────────────────────────────────────

    def append(self, target: str, level: int | str) -> None:
        """
        Add a destination receiving `level` and above.

        `target` is an alias from destinations.ALIASES ("stdout", "stdin",
        "stderr") or a file path. Files are opened here and closed by
        close(). When a file can't be opened, DestinationOpenError is raised
        if the file-error policy is on; otherwise the target is skipped.
        """
        threshold = resolve_level(level)
        with self.lock:
            self._check_open()
            alias = destinations.ALIASES.get(target)
            if alias is not None:
                self.container.append(alias, threshold)
                return
            try:
                handle = destinations.open_file(target)
            except DestinationOpenError:
                if self._file_errors_raise():
                    raise
                self._skipped.append(target)
                return
            self.container.append(handle, threshold, owned=True)

    def multi_append(self, targets: Iterable[str], level: int | str) -> None:
        for target in targets:
            self.append(target, level)

    def append_writer(self, sink: Any, level: int | str) -> None:
        """Add a caller-owned sink (anything with write()). Never closed here."""
        threshold = resolve_level(level)
        with self.lock:
            self._check_open()
            self.container.append(sink, threshold)

    def multi_append_writer(self, sinks: Iterable[Any], level: int | str) -> None:
        for sink in sinks:
            self.append_writer(sink, level)

    def writer(self, level: int | str) -> LoggerWriter:
        """A file-like object that logs what is written to it at `level`."""
        return LoggerWriter(self, resolve_level(level))

    # ── Formatting ────────────────────────────────────────────────

    def set_template(self, template: str) -> None:
        with self.lock:
            self.formatter.set_template(template)

    def register_placeholder(self, key: str, supplier: PlaceholderSupplier) -> None:
        with self.lock:
            self.formatter.register_placeholder(key, supplier)

    # ── Core logging ──────────────────────────────────────────────

    def log(self, level: int, *args: Any) -> None:
        """
        Write a message to every destination registered for `level`.
        Arguments are joined the way print() joins them.

        After delivery, a level in fatal_on terminates the process and a
        level in panic_on raises LoggerPanic carrying the message.
        """
        if not self.writable():
            return
        rank(level)

        with self.lock:
            message = self.formatter.format(self.name, level, *args)
            if message:
                for writer in self.container.get(level):
                    try:
                        writer.write_line(message)
                    except Exception:
                        # A broken sink must not take the caller down
                        self._write_errors += 1

        if self._fatal_on & level:
            self._terminate()
        elif self._panic_on & level:
            raise LoggerPanic(message)

    def logf(self, level: int, fmt: str, *args: Any) -> None:
        """
        Like log(), with the message rendered as `fmt % args`. A format that
        doesn't match its arguments is logged as `fmt %!(args...)` instead of
        raising.
        """
        if not self.writable():
            return
        self.log(level, render_printf(fmt, args))

    def _terminate(self) -> None:
        with self.lock:
            try:
                self.container.flush()
            except Exception:
                self._write_errors += 1
        os._exit(FATAL_EXIT_CODE)

    # ── Convenience Methods ───────────────────────────────────────

    def debug(self, *args: Any) -> None:
        self.log(Level.DEBUG, *args)

    def debugf(self, fmt: str, *args: Any) -> None:
        self.logf(Level.DEBUG, fmt, *args)

    def info(self, *args: Any) -> None:
        self.log(Level.INFO, *args)

    def infof(self, fmt: str, *args: Any) -> None:
        self.logf(Level.INFO, fmt, *args)

    def notice(self, *args: Any) -> None:
        self.log(Level.NOTICE, *args)

    def noticef(self, fmt: str, *args: Any) -> None:
        self.logf(Level.NOTICE, fmt, *args)

    def warning(self, *args: Any) -> None:
        self.log(Level.WARNING, *args)

    def warningf(self, fmt: str, *args: Any) -> None:
        self.logf(Level.WARNING, fmt, *args)

    def error(self, *args: Any) -> None:
        self.log(Level.ERROR, *args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self.logf(Level.ERROR, fmt, *args)

    def critical(self, *args: Any) -> None:
        self.log(Level.CRITICAL, *args)

    def criticalf(self, fmt: str, *args: Any) -> None:
        self.logf(Level.CRITICAL, fmt, *args)

    def alert(self, *args: Any) -> None:
        self.log(Level.ALERT, *args)

    def alertf(self, fmt: str, *args: Any) -> None:
        self.logf(Level.ALERT, fmt, *args)

    def emergency(self, *args: Any) -> None:
        self.log(Level.EMERGENCY, *args)

    def emergencyf(self, fmt: str, *args: Any) -> None:
        self.logf(Level.EMERGENCY, fmt, *args)

    # ── Derived loggers ───────────────────────────────────────────

    def child(self, name: str) -> "Logger":
        """
        A logger with another name sharing this logger's formatter,
        destinations, escalation masks and lock. Closing either one closes
        the shared destinations.
        """
        other = Logger(
            name,
            formatter=self.formatter,
            container=self.container,
            enabled=self.enabled,
            fatal_on=self._fatal_on,
            panic_on=self._panic_on,
            panic_on_file_errors=self.panic_on_file_errors,
        )
        other.lock = self.lock
        return other

    # ── Configuration ─────────────────────────────────────────────

    def configure(self, config: LoggerConfig | dict) -> None:
        """
        Apply a LoggerConfig (or a dict in the same shape, e.g. parsed YAML):

            enabled: true
            template: "{date|%H:%M:%S} {name}.{level} {message}"
            fatal_on: [EMERGENCY]
            panic_on_file_errors: false
            destinations:
              - {target: stderr, level: WARNING}
              - {target: logs/app.log, level: DEBUG}
        """
        if isinstance(config, dict):
            config = LoggerConfig.from_dict(config)
        with self.lock:
            self._check_open()
            if config.enabled is not None:
                self.enabled = config.enabled
            if config.template is not None:
                self.formatter.set_template(config.template)
            if config.date_format is not None and isinstance(self.formatter, TemplateFormatter):
                self.formatter.date_format = config.date_format
            if config.fatal_on is not None:
                self.fatal_on = config.fatal_on
            if config.panic_on is not None:
                self.panic_on = config.panic_on
            if config.panic_on_file_errors is not None:
                self.panic_on_file_errors = config.panic_on_file_errors
            for dest in config.destinations:
                self.append(dest.target, dest.level)

    # ── Status ────────────────────────────────────────────────────

    def status(self) -> dict:
        """Current logger state for display."""
        return {
            "name": self.name,
            "enabled": self.enabled,
            "closed": self._closed,
            "writable": self.writable(),
            "fatal_on": level_name(self._fatal_on) if self._fatal_on else None,
            "panic_on": level_name(self._panic_on) if self._panic_on else None,
            "panic_on_file_errors": self._file_errors_raise(),
            "skipped_destinations": list(self._skipped),
            "write_errors": self._write_errors,
            "destinations": self.container.describe(),
        }

    # ── Cleanup ───────────────────────────────────────────────────

    def flush(self) -> None:
        with self.lock:
            self.container.flush()

    def close(self) -> None:
        """
        Close files this logger opened and disable it. Sinks passed to
        append_writer() are left open for their owner. Idempotent.
        """
        with self.lock:
            if self._closed:
                return
            try:
                self.container.close()
            finally:
                self.enabled = False
                self._closed = True

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("enabled" if self.enabled else "disabled")
        return f"<Logger {self.name!r} {state}>"

    # ── Helpers ───────────────────────────────────────────────────

    def _check_open(self) -> None:
        if self._closed or self.container.closed:
            raise LoggerClosedError(f"Logger '{self.name}' is closed")

    def _file_errors_raise(self) -> bool:
        if self.panic_on_file_errors is None:
            return destinations.PANIC_ON_FILE_ERRORS
        return self.panic_on_file_errors
