"""
Central data model definitions used across the project.

Event is the only externally owned entity. Everything else here is derived
by the conflict engine and recomputed on every query, never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from daybook.times import to_duration


class ConflictType(str, Enum):
    NONE = "none"
    ADJACENT = "adjacent"
    OVERLAP = "overlap"


class Severity(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Event:
    """
    One calendar event on a single date.

    `time` is the start as 'HH:MM', `duration` is in minutes.
    `category`, `color`, `title`, `description`, `location` and `attendees`
    are display data and never inspected by the conflict engine.
    """

    id: str
    title: str
    date: str
    time: str
    duration: int
    category: str = "meeting"
    description: str = ""
    location: str = ""
    color: str = ""
    attendees: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        """
        Build an Event from a stored JSON record.

        Raises KeyError / ValueError / TypeError for records that cannot be
        converted (missing id/date/time, missing or non-positive duration).
        """
        duration = to_duration(data.get("duration"))
        if duration is None or duration <= 0:
            raise ValueError(f"duration must be a positive integer, got {data.get('duration')!r}")
        attendees = data.get("attendees") or []
        if isinstance(attendees, str):
            attendees = [attendees]
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            date=str(data["date"]).strip(),
            time=str(data["time"]).strip(),
            duration=duration,
            category=str(data.get("category") or "meeting"),
            description=str(data.get("description") or ""),
            location=str(data.get("location") or ""),
            color=str(data.get("color") or ""),
            attendees=tuple(str(a) for a in attendees),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
            "category": self.category,
            "description": self.description,
            "location": self.location,
            "color": self.color,
            "attendees": list(self.attendees),
        }


@dataclass(frozen=True)
class PairClassification:
    """Result of comparing two same-date events, ordered by start time."""

    kind: ConflictType
    overlap_minutes: int
    earlier: Event
    later: Event


@dataclass(frozen=True)
class ConflictRecord:
    """Two events found to overlap on `date` (earlier event first)."""

    date: str
    events: tuple[Event, ...]
    overlap_minutes: int


@dataclass(frozen=True)
class DayConflictSummary:
    has_conflict: bool = False
    conflicting_events: tuple[Event, ...] = ()
    conflict_type: ConflictType = ConflictType.NONE
    severity: Severity = Severity.NONE
    max_overlap: int = 0
    conflicts: tuple[ConflictRecord, ...] = field(default_factory=tuple)

    @property
    def conflicting_ids(self) -> set[str]:
        return {ev.id for ev in self.conflicting_events}


# Optional alias used by UI callers for the per-event badge.
ConflictLevel = Optional[str]
