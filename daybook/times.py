"""
Wall-clock time arithmetic.

Times are 'HH:MM' strings (24h, no seconds, no timezone).
There is no midnight rollover: adding minutes past 23:59 produces hours >= 24.
"""

from __future__ import annotations

from typing import Optional

from daybook.errors import InvalidTimeFormat


def to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises InvalidTimeFormat for invalid formats or out-of-range values.
    """
    if not isinstance(hhmm, str):
        raise InvalidTimeFormat(f"Invalid time format: {hhmm!r}")

    parts = hhmm.strip().split(":")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidTimeFormat(f"Invalid time format: {hhmm!r}")

    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise InvalidTimeFormat(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def add_minutes(hhmm: str, delta: int) -> str:
    """
    Add `delta` minutes to a time and format the result as 'HH:MM'.

    The result is not wrapped: add_minutes("23:30", 60) == "24:30" and
    add_minutes("00:00", -30) == "-1:30" (floor division).
    """
    hours, mins = divmod(to_minutes(hhmm) + delta, 60)
    return f"{hours:02d}:{mins:02d}"


def end_minutes(hhmm: str, duration: int) -> int:
    # Same value as to_minutes(add_minutes(...)), but valid past midnight too.
    return to_minutes(hhmm) + duration


def to_duration(value: object) -> Optional[int]:
    """
    Return `value` as whole minutes, or None if it is not an integral number.

    Accepts ints, integral floats (30.0) and digit strings ("45").
    Fractional values (30.9, "15.5") and booleans are rejected, never truncated.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("-") and s[1:].isascii() and s[1:].isdigit():
            return int(s)
        return int(s) if s.isascii() and s.isdigit() else None
    return None
