"""
Capability interfaces.

Code that only needs to emit messages should depend on Loggable. Setup
code that wires destinations depends on Configurable. Logger satisfies
both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from xlog.writer import LoggerWriter


@runtime_checkable
class Loggable(Protocol):
    @property
    def closed(self) -> bool: ...
    def writable(self) -> bool: ...
    def writer(self, level: int) -> LoggerWriter: ...
    def log(self, level: int, *args: Any) -> None: ...
    def logf(self, level: int, fmt: str, *args: Any) -> None: ...
    def debug(self, *args: Any) -> None: ...
    def debugf(self, fmt: str, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def infof(self, fmt: str, *args: Any) -> None: ...
    def notice(self, *args: Any) -> None: ...
    def noticef(self, fmt: str, *args: Any) -> None: ...
    def warning(self, *args: Any) -> None: ...
    def warningf(self, fmt: str, *args: Any) -> None: ...
    def error(self, *args: Any) -> None: ...
    def errorf(self, fmt: str, *args: Any) -> None: ...
    def critical(self, *args: Any) -> None: ...
    def criticalf(self, fmt: str, *args: Any) -> None: ...
    def alert(self, *args: Any) -> None: ...
    def alertf(self, fmt: str, *args: Any) -> None: ...
    def emergency(self, *args: Any) -> None: ...
    def emergencyf(self, fmt: str, *args: Any) -> None: ...


@runtime_checkable
class Configurable(Protocol):
    @property
    def closed(self) -> bool: ...
    def append(self, target: str, level: int) -> None: ...
    def multi_append(self, targets: Iterable[str], level: int) -> None: ...
    def append_writer(self, sink: Any, level: int) -> None: ...
    def multi_append_writer(self, sinks: Iterable[Any], level: int) -> None: ...
    def flush(self) -> None: ...
    def close(self) -> None: ...
