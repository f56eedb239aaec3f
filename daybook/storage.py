"""
Persistent storage for the user's events.

This module manages the file (by default):

    data/events.json

The file holds the event list verbatim as a JSON list of records. The
conflict engine never reads or writes it; EventBook owns the in-memory
list and hands snapshots to the engine on every query.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Iterable, Optional

from daybook.categories import DEFAULT_CATEGORIES, CategoryTable
from daybook.config import Config
from daybook.conflicts import build_conflict_index, event_conflict_level, event_conflicts, scan_day
from daybook.model import ConflictLevel, ConflictRecord, DayConflictSummary, Event
from daybook.search import events_for_date
from daybook.times import to_duration
from daybook.validation import DEFAULT_CATEGORY, DEFAULT_DURATION, DEFAULT_TIME, ensure_valid_event_input

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "date", "time", "duration", "category", "description", "location", "attendees")


def _default_events_path() -> Path:
    """
    Return the configured path of events.json.

    Using a function instead of a constant makes testing easier,
    because tests can override the path or the environment.
    """
    return Config.events_file()


def load_events(path: str | Path | None = None) -> list[Event]:
    """
    Load events from events.json.

    Returns an empty list if the file does not exist or is invalid.
    Single records that cannot be converted are skipped.
    """
    events_path = Path(path) if path is not None else _default_events_path()

    # First run: nothing stored yet
    if not events_path.exists():
        return []

    try:
        data = json.loads(events_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Could not load events from %s: %s", events_path, e)
        return []

    if not isinstance(data, list):
        logger.warning("Ignoring %s: expected a JSON list, got %s", events_path, type(data).__name__)
        return []

    out: list[Event] = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            logger.warning("Skipping record #%d in %s: not an object", i, events_path)
            continue
        try:
            out.append(Event.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping record #%d in %s: %s", i, events_path, e)
    return out


def save_events(events: Iterable[Event], path: str | Path | None = None) -> None:
    """
    Save events to events.json, creating parent directories if needed.
    """
    events_path = Path(path) if path is not None else _default_events_path()
    events_path.parent.mkdir(parents=True, exist_ok=True)

    payload = [ev.to_dict() for ev in events]
    events_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


class EventBook:
    """
    The caller-owned, mutable event collection.

    Every change replaces the internal list and is saved immediately.
    Conflict views are recomputed from a snapshot on each call.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        categories: CategoryTable = DEFAULT_CATEGORIES,
        events: Optional[Iterable[Event]] = None,
    ) -> None:
        self.path = Path(path) if path is not None else _default_events_path()
        self.categories = categories
        self._events: list[Event] = list(events) if events is not None else load_events(self.path)

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def get(self, event_id: str) -> Optional[Event]:
        for ev in self._events:
            if ev.id == event_id:
                return ev
        return None

    def save(self) -> None:
        save_events(self._events, self.path)

    def _build(self, event_id: str, data: dict[str, Any]) -> Event:
        ensure_valid_event_input(data)
        duration = to_duration(data["duration"])
        assert duration is not None
        category = str(data.get("category") or DEFAULT_CATEGORY)
        attendees = data.get("attendees") or ()
        return Event(
            id=event_id,
            title=str(data["title"]).strip(),
            date=str(data["date"]).strip(),
            time=str(data["time"]).strip(),
            duration=duration,
            category=category,
            description=str(data.get("description") or "").strip(),
            location=str(data.get("location") or "").strip(),
            color=self.categories.color_for(category),
            attendees=tuple(str(a) for a in attendees),
        )

    def create(self, data: dict[str, Any]) -> Event:
        """
        Validate `data`, add a new event with a fresh id and save.
        Raises EventValidationError for invalid input.
        """
        fields = {"time": DEFAULT_TIME, "duration": DEFAULT_DURATION, "category": DEFAULT_CATEGORY}
        fields.update({k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None})

        event = self._build(uuid.uuid4().hex, fields)
        self._events = [*self._events, event]
        self.save()
        logger.info("Created event %s (%s %s)", event.id, event.date, event.time)
        return event

    def edit(self, event_id: str, data: dict[str, Any]) -> Event:
        """
        Replace the fields given in `data` on an existing event and save.
        Raises KeyError for an unknown id, EventValidationError for invalid input.
        """
        current = self.get(event_id)
        if current is None:
            raise KeyError(event_id)

        fields = current.to_dict()
        fields.update({k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None})

        updated = self._build(event_id, fields)
        self._events = [updated if ev.id == event_id else ev for ev in self._events]
        self.save()
        logger.info("Edited event %s", event_id)
        return updated

    def delete(self, event_id: str) -> bool:
        remaining = [ev for ev in self._events if ev.id != event_id]
        if len(remaining) == len(self._events):
            return False
        self._events = remaining
        self.save()
        logger.info("Deleted event %s", event_id)
        return True

    def clear(self) -> None:
        self._events = []
        self.save()
        logger.info("Cleared all events")

    # -- conflict views -------------------------------------------------

    def conflict_index(self) -> dict[str, list[ConflictRecord]]:
        return build_conflict_index(self.events)

    def day_summary(self, date: str) -> DayConflictSummary:
        return scan_day(events_for_date(self._events, date))

    def conflict_level(self, event: Event) -> ConflictLevel:
        return event_conflict_level(event, events_for_date(self._events, event.date))

    def conflicts_for(self, event: Event) -> list[Event]:
        return event_conflicts(event, self.events)
