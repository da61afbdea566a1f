"""
Message formatters.

A formatter turns (logger name, level, args) into one finished line:
  - template:    "{date} {name}.{level} {message}"
  - date format: strftime pattern, plus %L for milliseconds
  - custom:      "{host}" etc., resolved through registered suppliers

Placeholders are substituted in a single pass over the template, so a
substituted value is never expanded again. Unknown placeholders are left
as they are, and so is the placeholder of a supplier that raises.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Optional

from xlog.errors import PlaceholderError
from xlog.levels import level_name

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S.%L"
DEFAULT_TEMPLATE = "{date} {name}.{level} {message}"

BUILTIN_PLACEHOLDERS = frozenset({"date", "name", "level", "message"})

_DATE_SPEC = re.compile(r"\{date\|([^}]+)\}")
_PLACEHOLDER = re.compile(r"\{([^{}|]+)\}")

PlaceholderSupplier = Callable[[str], str]


class LogFormatter(ABC):
    """Base formatter. Renders a leveled message into a line of text."""

    @abstractmethod
    def set_template(self, template: str) -> None: ...

    @abstractmethod
    def register_placeholder(self, key: str, supplier: PlaceholderSupplier) -> None: ...

    @abstractmethod
    def format(self, name: str, level: int, *args: Any) -> str: ...


class TemplateFormatter(LogFormatter):
    """
    Default formatter.

    Usage:
        fmt = TemplateFormatter("{date|%H:%M:%S} [{host}] {level} {message}")
        fmt.register_placeholder("host", lambda key: socket.gethostname())
        fmt.format("api", Level.INFO, "started on port", 8080)
        # 14:32:05 [svc-1] INFO started on port 8080
    """

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        date_format: str = DEFAULT_DATE_FORMAT,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._template, self._date_format = sanitize_for_date(template, date_format)
        self._suppliers: dict[str, PlaceholderSupplier] = {}
        self._clock = clock or datetime.now

    @property
    def template(self) -> str:
        return self._template

    @property
    def date_format(self) -> str:
        return self._date_format

    @date_format.setter
    def date_format(self, value: str) -> None:
        self._date_format = value

    @property
    def placeholders(self) -> list[str]:
        """Registered custom placeholder keys."""
        return sorted(self._suppliers)

    def set_template(self, template: str) -> None:
        """
        Replace the template. An inline {date|<fmt>} becomes the active
        date format; without one the current date format is kept.
        """
        self._template, self._date_format = sanitize_for_date(template, self._date_format)

    def register_placeholder(self, key: str, supplier: PlaceholderSupplier) -> None:
        """Add or replace a custom {key} placeholder."""
        if key in BUILTIN_PLACEHOLDERS:
            raise PlaceholderError(f"'{key}' is a built-in placeholder and cannot be replaced")
        if not key or not _PLACEHOLDER.fullmatch("{" + key + "}"):
            raise PlaceholderError(f"Invalid placeholder key {key!r}")
        self._suppliers[key] = supplier

    def unregister_placeholder(self, key: str) -> bool:
        """Remove a custom placeholder. Returns True if it existed."""
        return self._suppliers.pop(key, None) is not None

    def format(self, name: str, level: int, *args: Any) -> str:
        values = {
            "name": name,
            "level": level_name(level),
            "message": " ".join(str(arg) for arg in args),
        }
        if "{date}" in self._template:
            values["date"] = render_date(self._clock(), self._date_format)

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key in values:
                return values[key]
            supplier = self._suppliers.get(key)
            if supplier is None:
                return match.group(0)
            try:
                return str(supplier(key))
            except Exception:
                return match.group(0)

        return _PLACEHOLDER.sub(substitute, self._template)


def sanitize_for_date(template: str, date_format: str) -> tuple[str, str]:
    """
    Pull an inline date format out of the template.

    Returns the template with {date|<fmt>} rewritten to {date}, and the date
    format to use (the inline one if found, otherwise `date_format`).
    """
    match = _DATE_SPEC.search(template)
    if match:
        date_format = match.group(1)
        template = _DATE_SPEC.sub("{date}", template)
    return template, date_format


def render_date(moment: datetime, date_format: str) -> str:
    """strftime with one extra directive: %L renders milliseconds."""
    if "%L" in date_format:
        # Keep "%%L" (a literal "%L") intact.
        parts = date_format.split("%%")
        millis = f"{moment.microsecond // 1000:03d}"
        date_format = "%%".join(p.replace("%L", millis) for p in parts)
    return moment.strftime(date_format)
