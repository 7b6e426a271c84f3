"""
Clock helpers.

The store and lifecycle engine take a clock callable so tests can drive
simulated time instead of the wall clock.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
