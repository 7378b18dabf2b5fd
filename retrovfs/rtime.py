"""Thread-safe conversion of timestamps to local broken-down time."""

from __future__ import annotations

import threading
import time

_LOCK = threading.Lock()


def localtime(timestamp: float) -> time.struct_time:
    """Convert seconds since the epoch to local time under a shared lock."""
    with _LOCK:
        return time.localtime(timestamp)