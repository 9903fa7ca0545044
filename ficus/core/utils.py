"""
Utility functions for Ficus.
"""

import time
from datetime import datetime, timezone, tzinfo
from typing import Optional


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def from_millis(ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert epoch milliseconds to a datetime.

    Without tz the result is in system local time.
    """
    if tz is None:
        return datetime.fromtimestamp(ms / 1000)
    return datetime.fromtimestamp(ms / 1000, tz=tz)


def to_millis(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive means UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def format_inr(amount: float) -> str:
    """
    Format an amount as Indian rupees without decimals.

    Uses Indian digit grouping (lakh, crore).

    Examples:
        500 -> "₹500"
        150000 -> "₹1,50,000"
        -12345678 -> "-₹1,23,45,678"
    """
    sign = "-" if round(amount) < 0 else ""
    digits = str(abs(int(round(amount))))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{sign}₹{digits}"
