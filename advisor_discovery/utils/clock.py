"""Epoch-millisecond time helpers."""

import time

DAY_MS = 24 * 60 * 60 * 1000


def current_time_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
