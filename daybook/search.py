"""
Filtering helpers for event lists (search box + category selector).
"""

from __future__ import annotations

from typing import Iterable

from daybook.model import Event

ALL_CATEGORIES = "all"


def filter_events(events: Iterable[Event], search: str = "", category: str = ALL_CATEGORIES) -> list[Event]:
    """
    Keep events whose title, description or location contains `search`
    (case-insensitive) and whose category matches, unless category is "all".
    """
    query = (search or "").strip().lower()
    out: list[Event] = []
    for ev in events:
        if category and category != ALL_CATEGORIES and ev.category != category:
            continue
        if query:
            hay = f"{ev.title}\n{ev.description}\n{ev.location}".lower()
            if query not in hay:
                continue
        out.append(ev)
    return out


def events_for_date(events: Iterable[Event], date: str) -> list[Event]:
    return [ev for ev in events if ev.date == date]
