"""
iCalendar (.ics) export.

We convert events into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable

from daybook.model import Event

logger = logging.getLogger(__name__)


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _event_span(ev: Event) -> tuple[str, str]:
    """
    Return (DTSTART, DTEND) as local 'YYYYMMDDTHHMM00' strings.

    The end uses real datetime arithmetic, so events running past
    midnight end on the following day in the file.
    """
    start = datetime.strptime(f"{ev.date} {ev.time}", "%Y-%m-%d %H:%M")
    end = start + timedelta(minutes=ev.duration)
    return start.strftime("%Y%m%dT%H%M00"), end.strftime("%Y%m%dT%H%M00")


def export_events_to_ics(events: Iterable[Event], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//daybook//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for ev in events:
        try:
            dtstart, dtend = _event_span(ev)
        except ValueError:
            logger.warning("Skipping event %s: bad date/time %r %r", ev.id, ev.date, ev.time)
            continue

        summary = ev.title.strip() or "daybook event"

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(ev.id)}@daybook")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(summary)}")
        if ev.location.strip():
            lines.append(f"LOCATION:{_ics_escape(ev.location.strip())}")
        if ev.description.strip():
            lines.append(f"DESCRIPTION:{_ics_escape(ev.description.strip())}")
        if ev.category:
            lines.append(f"CATEGORIES:{_ics_escape(ev.category.upper())}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
