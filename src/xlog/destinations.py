"""
Output destinations.

A destination is any object with a write() method. Text streams receive
str, binary streams receive UTF-8 bytes. Strings passed to Logger.append()
are either an alias from ALIASES or a filesystem path opened with the
process-wide FILE_FLAGS / FILE_MODE.

The module-level defaults are read at call time, so assigning to them
(or monkeypatching in tests) changes behaviour process-wide.
"""

import io
import os
import sys
from typing import IO, Any

from xlog.errors import DestinationOpenError

# Open flags and permission mode for file destinations.
FILE_FLAGS: int = os.O_RDWR | os.O_CREAT | os.O_APPEND
FILE_MODE: int = 0o666
FILE_ENCODING: str = "utf-8"

# True: a file that cannot be opened raises DestinationOpenError.
# False: the destination is skipped without error.
PANIC_ON_FILE_ERRORS: bool = True


class StandardStream:
    """
    Proxy for one of sys.stdout / sys.stdin / sys.stderr.

    Looks the stream up at write time so a replaced sys.stdout (pytest
    capture, contextlib.redirect_stdout) still receives the output.
    """

    def __init__(self, attr: str):
        self.attr = attr

    @property
    def stream(self) -> IO[str]:
        return getattr(sys, self.attr)

    def write(self, text: str) -> int:
        return self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()

    def __repr__(self) -> str:
        return f"StandardStream({self.attr!r})"


def default_aliases() -> dict[str, Any]:
    return {
        "stdout": StandardStream("stdout"),
        "stdin": StandardStream("stdin"),
        "stderr": StandardStream("stderr"),
    }


# Alias → sink. Mutable: point "stdout" at a StringIO to capture output.
ALIASES: dict[str, Any] = default_aliases()


def open_file(path: str | os.PathLike) -> IO[str]:
    """
    Open a log file with the process-wide flags and mode.

    Raises DestinationOpenError on failure; the caller decides whether the
    file-error policy lets it escape.
    """
    try:
        fd = os.open(path, FILE_FLAGS, FILE_MODE)
    except OSError as exc:
        raise DestinationOpenError(os.fspath(path), exc) from exc
    try:
        return os.fdopen(fd, "a+", encoding=FILE_ENCODING)
    except OSError as exc:
        os.close(fd)
        raise DestinationOpenError(os.fspath(path), exc) from exc


def is_binary(sink: Any) -> bool:
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(sink, "mode", "")
    return isinstance(mode, str) and "b" in mode


class LineWriter:
    """
    Line-oriented wrapper around one sink.

    Adds the line terminator and nothing else; the formatter has already
    produced the whole line. Each Container.append() creates its own
    LineWriter, even for a sink that is already registered.
    """

    def __init__(self, sink: Any):
        self.sink = sink
        self._binary = is_binary(sink)

    def write_line(self, line: str) -> None:
        text = line + "\n"
        if self._binary:
            self.sink.write(text.encode(FILE_ENCODING))
        else:
            self.sink.write(text)

    def flush(self) -> None:
        if getattr(self.sink, "closed", False):
            return
        flush = getattr(self.sink, "flush", None)
        if flush is not None:
            flush()

    def __repr__(self) -> str:
        return f"LineWriter({self.sink!r})"
