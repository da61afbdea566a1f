"""
LoggerWriter: a logger seen as a writable text stream.

    w = log.writer(Level.INFO)
    print("migrated", 42, "rows", file=w)     # one INFO line
    other_logger.append_writer(w, Level.ERROR)  # chain loggers
"""

from xlog.loggable import Loggable


class LoggerWriter:
    """
    File-like object that logs every non-blank line written to it.

    Text is buffered until a newline arrives (print() writes each argument
    separately); flush() logs whatever partial line is left.
    """

    def __init__(self, logger: Loggable, level: int):
        self.logger = logger
        self.level = level
        self._pending = ""

    def write(self, text: str) -> int:
        self._pending += text
        *lines, self._pending = self._pending.split("\n")
        for line in lines:
            self._emit(line)
        return len(text)

    def writelines(self, lines) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        line, self._pending = self._pending, ""
        self._emit(line)

    def writable(self) -> bool:
        return True

    def _emit(self, line: str) -> None:
        line = line.rstrip("\r")
        if line.strip():
            self.logger.log(self.level, line)

    def __repr__(self) -> str:
        return f"LoggerWriter({self.logger!r}, level={self.level!r})"
