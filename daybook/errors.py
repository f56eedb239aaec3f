"""
Exception types raised by daybook.

Only time parsing and event validation can fail; every other operation is
total over well-formed input.
"""

from __future__ import annotations


class DaybookError(Exception):
    """Base class for all daybook errors."""


class InvalidTimeFormat(DaybookError, ValueError):
    """A wall-clock string is not a valid 'HH:MM' time."""


class EventValidationError(DaybookError, ValueError):
    """
    Event input failed validation.

    `errors` maps field name -> human readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid event: {detail}")
