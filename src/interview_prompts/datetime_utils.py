"""
Timezone-aware datetime helpers.

Session timestamps are UTC ISO 8601 strings. `MonotonicClock` guarantees that
successive timestamps handed out by one clock never go backwards, even if the
wall clock is adjusted between calls.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable, Optional


def now_utc() -> datetime:
    """Return the current UTC time with timezone awareness."""
    return datetime.now(timezone.utc)


def isoformat_utc(value: Optional[datetime] = None) -> str:
    """
    Convert a datetime to an ISO 8601 string with UTC timezone.

    Args:
        value: The datetime to format. When omitted, `now_utc()` is used.
    """
    dt = value or now_utc()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


class MonotonicClock:
    """Issues UTC timestamps that are non-decreasing for the clock's lifetime."""

    def __init__(self, source: Callable[[], datetime] = now_utc):
        self._source = source
        self._last: Optional[datetime] = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = self._source()
            if current.tzinfo is None:
                current = current.replace(tzinfo=timezone.utc)
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current

    def isoformat(self) -> str:
        return isoformat_utc(self.now())


__all__ = ["now_utc", "isoformat_utc", "MonotonicClock"]
