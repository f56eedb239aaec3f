"""
Event input validation.

These are the rules an event form enforces before anything reaches the
conflict engine. Callers get every failing field at once.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from daybook.errors import EventValidationError, InvalidTimeFormat
from daybook.times import to_duration, to_minutes

DEFAULT_TIME = "09:00"
DEFAULT_DURATION = 60
DEFAULT_CATEGORY = "meeting"
MIN_DURATION = 15

# strptime alone accepts "2024-1-1"; day buckets are keyed by the exact string
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def validate_event_input(data: dict[str, Any]) -> dict[str, str]:
    """
    Return field -> error message for every rule `data` breaks.
    An empty dict means the input is valid.
    """
    errors: dict[str, str] = {}

    title = str(data.get("title") or "").strip()
    if not title:
        errors["title"] = "Title is required"

    date_s = str(data.get("date") or "").strip()
    if not date_s:
        errors["date"] = "Date is required"
    else:
        try:
            if not DATE_RE.fullmatch(date_s):
                raise ValueError(date_s)
            datetime.strptime(date_s, "%Y-%m-%d")
        except ValueError:
            errors["date"] = "Date must be YYYY-MM-DD"

    time_s = str(data.get("time") or "").strip()
    if not time_s:
        errors["time"] = "Time is required"
    else:
        try:
            to_minutes(time_s)
        except InvalidTimeFormat:
            errors["time"] = "Time must be HH:MM (00:00-23:59)"

    duration = to_duration(data.get("duration"))
    if duration is None or duration < MIN_DURATION:
        errors["duration"] = f"Duration must be at least {MIN_DURATION} minutes"

    return errors


def ensure_valid_event_input(data: dict[str, Any]) -> None:
    errors = validate_event_input(data)
    if errors:
        raise EventValidationError(errors)
