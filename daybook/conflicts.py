"""
Conflict detection.

Given calendar events, detect overlaps on the same date.
Overlap rule for two events ordered by start time:
    later_start < earlier_end      -> overlap
    later_start == earlier_end     -> adjacent (touching, not a conflict)

Two views exist and are intentionally different:
- scan_day() sweeps only neighbouring events after sorting by start time
  (day badges, severity, the global index)
- event_conflict_level() / event_conflicts() compare one event against
  every other event of its date (per-event highlighting)

A day like 09:00/180min, 10:00/15min, 11:00/30min therefore has an A-C
overlap that scan_day() does not report, while event_conflict_level(A)
still returns "high".
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from daybook.model import (
    ConflictLevel,
    ConflictRecord,
    ConflictType,
    DayConflictSummary,
    Event,
    PairClassification,
    Severity,
)
from daybook.times import end_minutes, to_minutes

CONFLICT_LEVEL_HIGH = "high"


def _sorted_by_start(events: Iterable[Event]) -> list[Event]:
    # sorted() is stable: equal start times keep their input order
    return sorted(events, key=lambda ev: to_minutes(ev.time))


def classify_pair(a: Event, b: Event) -> PairClassification:
    """
    Classify two events assumed to share the same date.

    The date is not checked here; callers compare only events of one day.
    """
    earlier, later = _sorted_by_start((a, b))
    earlier_end = end_minutes(earlier.time, earlier.duration)
    later_start = to_minutes(later.time)

    if later_start < earlier_end:
        return PairClassification(ConflictType.OVERLAP, earlier_end - later_start, earlier, later)
    if later_start == earlier_end:
        return PairClassification(ConflictType.ADJACENT, 0, earlier, later)
    return PairClassification(ConflictType.NONE, 0, earlier, later)


def severity_for(max_overlap: int) -> Severity:
    if max_overlap <= 0:
        return Severity.NONE
    if max_overlap >= 60:
        return Severity.HIGH
    if max_overlap >= 30:
        return Severity.MEDIUM
    return Severity.LOW


def group_by_date(events: Iterable[Event]) -> dict[str, list[Event]]:
    """
    Partition events by date, keeping input order inside each bucket.
    Keys appear in order of first occurrence.
    """
    by_date: dict[str, list[Event]] = defaultdict(list)
    for ev in events:
        by_date[ev.date].append(ev)
    return dict(by_date)


def scan_day(events: Sequence[Event]) -> DayConflictSummary:
    """
    Summarize conflicts of one day's events.

    Only neighbouring events in start-time order are compared (i vs i+1).
    The input sequence is left untouched.
    """
    if len(events) <= 1:
        return DayConflictSummary()

    ordered = _sorted_by_start(events)

    conflicting: list[Event] = []
    seen_ids: set[str] = set()
    records: list[ConflictRecord] = []
    conflict_type = ConflictType.NONE
    max_overlap = 0

    for current, following in zip(ordered, ordered[1:]):
        result = classify_pair(current, following)

        if result.kind is ConflictType.OVERLAP:
            conflict_type = ConflictType.OVERLAP
            max_overlap = max(max_overlap, result.overlap_minutes)
            records.append(
                ConflictRecord(
                    date=current.date,
                    events=(result.earlier, result.later),
                    overlap_minutes=result.overlap_minutes,
                )
            )
            for ev in (result.earlier, result.later):
                if ev.id not in seen_ids:
                    seen_ids.add(ev.id)
                    conflicting.append(ev)
        elif result.kind is ConflictType.ADJACENT and conflict_type is ConflictType.NONE:
            conflict_type = ConflictType.ADJACENT

    return DayConflictSummary(
        has_conflict=bool(conflicting),
        conflicting_events=tuple(conflicting),
        conflict_type=conflict_type,
        severity=severity_for(max_overlap),
        max_overlap=max_overlap,
        conflicts=tuple(records),
    )


def build_conflict_index(events: Iterable[Event]) -> dict[str, list[ConflictRecord]]:
    """
    Map date -> conflict records for every date with at least one overlap.
    Dates without overlaps (or without events) have no entry.
    """
    index: dict[str, list[ConflictRecord]] = {}
    for date, day_events in group_by_date(events).items():
        summary = scan_day(day_events)
        if summary.conflicting_events:
            index[date] = list(summary.conflicts)
    return index


def flatten_conflicts(index: dict[str, list[ConflictRecord]]) -> list[ConflictRecord]:
    """All records of an index in date-key order (the notification list)."""
    out: list[ConflictRecord] = []
    for records in index.values():
        out.extend(records)
    return out


def _overlapping_others(event: Event, day_events: Iterable[Event]) -> list[Event]:
    out: list[Event] = []
    for other in day_events:
        if other.id == event.id:
            continue
        if classify_pair(event, other).kind is ConflictType.OVERLAP:
            out.append(other)
    return out


def event_conflict_level(event: Event, day_events: Iterable[Event]) -> ConflictLevel:
    """
    Return "high" if `event` overlaps any other event of `day_events`, else None.

    Exhaustive check against every other event; touching events do not count.
    `day_events` must already be limited to the event's date.
    """
    return CONFLICT_LEVEL_HIGH if _overlapping_others(event, day_events) else None


def event_conflicts(event: Event, events: Iterable[Event]) -> list[Event]:
    """
    Other events on the same date that overlap `event`.
    `events` may span several dates.
    """
    same_day = [ev for ev in events if ev.date == event.date]
    return _overlapping_others(event, same_day)
