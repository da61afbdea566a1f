"""
Destination container.

Maps every canonical level to the sinks that receive messages logged at
that level. Membership is materialized at append time: a sink registered
at WARNING is inserted into the WARNING, ERROR, CRITICAL, ALERT and
EMERGENCY buckets, so get() on the logging path is a single dict lookup.
"""

from typing import Any

from xlog.destinations import LineWriter
from xlog.levels import LEVEL_ORDER, Level, level_name, routed_levels


class DestinationContainer:
    """
    Level → ordered sinks, with at-or-above routing.

    Buckets hold tuples, rebuilt on append, so get() can hand out the
    bucket itself without a copy.

    Not synchronized: the owning Logger serializes access.
    """

    def __init__(self) -> None:
        self._buckets: dict[Level, tuple[LineWriter, ...]] = {}
        self._owned: list[Any] = []
        self._closed = False
        self.clear()

    def append(self, sink: Any, threshold: int, owned: bool = False) -> LineWriter:
        """
        Register `sink` for `threshold` and every more severe level.

        `threshold` may be a combined mask (see levels.routed_levels).
        With owned=True the container closes the sink in close().
        """
        writer = LineWriter(sink)
        for level in routed_levels(threshold):
            self._buckets[level] = self._buckets[level] + (writer,)
        if owned:
            self._owned.append(sink)
        return writer

    def get(self, level: int) -> tuple[LineWriter, ...]:
        """Sinks registered for exactly `level`, in insertion order."""
        return self._buckets.get(level, ())

    def clear(self) -> None:
        """Discard all registrations: one fresh empty bucket per level."""
        self._buckets = {level: () for level in LEVEL_ORDER}

    def writers(self) -> list[LineWriter]:
        """Distinct registered writers, lowest bucket first."""
        seen: dict[int, LineWriter] = {}
        for level in LEVEL_ORDER:
            for writer in self._buckets[level]:
                seen.setdefault(id(writer), writer)
        return list(seen.values())

    def sinks(self) -> list[Any]:
        """Distinct underlying sinks."""
        seen: dict[int, Any] = {}
        for writer in self.writers():
            seen.setdefault(id(writer.sink), writer.sink)
        return list(seen.values())

    def flush(self) -> None:
        for writer in self.writers():
            writer.flush()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """
        Flush and close sinks this container owns, then drop every bucket.
        Sinks supplied by the caller are flushed but left open. Idempotent.

        Every owned sink gets its close() call even if an earlier one fails;
        the first failure is re-raised once the container is closed.
        """
        if self._closed:
            return
        first_error = None
        try:
            self.flush()
        except Exception as exc:
            first_error = exc
        for sink in self._owned:
            try:
                sink.close()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        self._owned = []
        self.clear()
        self._closed = True
        if first_error is not None:
            raise first_error

    def describe(self) -> dict:
        """Per-level sink counts for status output."""
        return {
            "closed": self._closed,
            "owned": len(self._owned),
            "levels": {
                level_name(level): len(self._buckets[level]) for level in LEVEL_ORDER
            },
        }
