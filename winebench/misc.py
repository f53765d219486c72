"""Miscellaneous helpers for the benchmark."""

from __future__ import annotations

import time
from datetime import UTC, datetime

from .constants import MEGABYTE


def tz_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)


def elapsed_ms(start: float) -> int:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - start) * 1000)


def format_megabytes(size_bytes: int) -> str:
    """Format a byte count the way the report shows it, e.g. ``4.50MB``."""
    return f"{size_bytes / MEGABYTE:.2f}MB"
