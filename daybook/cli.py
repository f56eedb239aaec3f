"""
CLI (Command Line Interface).

This module is the user-facing side of daybook, e.g.:

    daybook list [--date 2024-01-01] [--search text] [--category work]
    daybook add --title "Standup" --date 2024-01-01 --time 09:00 --duration 30
    daybook edit <event_id> --time 10:00
    daybook remove <event_id>
    daybook day 2024-01-01
    daybook conflicts
    daybook export <file.ics>
    daybook categories

All conflict information is recomputed from the stored events on every
command; nothing derived is ever written to disk.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daybook.categories import DEFAULT_CATEGORIES
from daybook.conflicts import flatten_conflicts, group_by_date
from daybook.errors import DaybookError, EventValidationError
from daybook.export_ics import export_events_to_ics
from daybook.logger import setup_logger
from daybook.model import Event
from daybook.search import ALL_CATEGORIES, events_for_date, filter_events
from daybook.storage import EventBook
from daybook.times import add_minutes, to_minutes

console = Console()
logger = logging.getLogger(__name__)

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _println(msg: str = "") -> None:
    console.print(msg, highlight=False, soft_wrap=True)


def _span(ev: Event) -> str:
    return f"{ev.time}-{add_minutes(ev.time, ev.duration)}"


def _date_heading(d: str) -> str:
    try:
        dd = datetime.strptime(d, "%Y-%m-%d").date()
    except ValueError:
        return d
    return f"{d} ({WEEKDAYS[dd.weekday()]})"


def _event_line(ev: Event, conflict: bool = False) -> str:
    bits = [_span(ev), f"[bold]{escape(ev.title)}[/]"]
    if ev.category:
        bits.append(f"[green]{escape(ev.category)}[/]")
    if ev.location:
        bits.append(f"@ {escape(ev.location)}")
    if conflict:
        bits.append("[bold red]CONFLICT[/]")
    bits.append(f"[dim]{ev.id}[/]")
    return " | ".join(bits)


def _event_fields(args: argparse.Namespace) -> dict[str, Any]:
    """
    Collect event fields given on the command line (None = not given).
    """
    return {
        "title": args.title,
        "date": args.date,
        "time": args.time,
        "duration": args.duration,
        "category": args.category,
        "location": args.location,
        "description": args.description,
    }


def _print_validation_errors(err: EventValidationError) -> None:
    _println("[red]Invalid event:[/]")
    for field, msg in err.errors.items():
        _println(f"  - {field}: {escape(msg)}")


def _warn_conflicts(book: EventBook, ev: Event) -> None:
    others = book.conflicts_for(ev)
    if others:
        names = ", ".join(escape(o.title) for o in others)
        _println(f"[yellow]Warning:[/] This event conflicts with: {names}")


def _cmd_list(args: argparse.Namespace, book: EventBook) -> int:
    """
    Print the agenda grouped by date, with a conflict badge per event.
    """
    events = filter_events(book.events, args.search or "", args.category or ALL_CATEGORIES)
    if args.date:
        events = events_for_date(events, args.date.strip())

    if not events:
        _println("No events.")
        return 0

    by_date = group_by_date(events)
    for d in sorted(by_date):
        _println(f"\n[bold]{_date_heading(d)}[/]")
        for ev in sorted(by_date[d], key=lambda x: to_minutes(x.time)):
            _println(f"  - {_event_line(ev, conflict=book.conflict_level(ev) is not None)}")
    return 0


def _cmd_add(args: argparse.Namespace, book: EventBook) -> int:
    fields = _event_fields(args)
    try:
        ev = book.create(fields)
    except EventValidationError as e:
        _print_validation_errors(e)
        return 1

    _warn_conflicts(book, ev)
    _println(f"Created: {ev.id} ({ev.date} {_span(ev)} {escape(ev.title)})")
    return 0


def _cmd_edit(args: argparse.Namespace, book: EventBook) -> int:
    event_id = (args.event_id or "").strip()
    try:
        ev = book.edit(event_id, _event_fields(args))
    except KeyError:
        _println(f"Event not found: {escape(event_id)}")
        return 1
    except EventValidationError as e:
        _print_validation_errors(e)
        return 1

    _warn_conflicts(book, ev)
    _println(f"Updated: {ev.id} ({ev.date} {_span(ev)} {escape(ev.title)})")
    return 0


def _cmd_remove(args: argparse.Namespace, book: EventBook) -> int:
    event_id = (args.event_id or "").strip()
    if not book.delete(event_id):
        _println(f"Event not found: {escape(event_id)}")
        return 1
    _println(f"Removed: {event_id} (remaining: {len(book)})")
    return 0


def _cmd_clear(args: argparse.Namespace, book: EventBook) -> int:
    if not args.yes:
        _println("This removes all events. Re-run with --yes to confirm.")
        return 1
    n = len(book)
    book.clear()
    _println(f"Cleared {n} events.")
    return 0


def _cmd_day(args: argparse.Namespace, book: EventBook) -> int:
    """
    Print the conflict summary of one date (the calendar cell view).
    """
    d = args.date.strip()
    day_events = events_for_date(book.events, d)
    summary = book.day_summary(d)

    _println(f"[bold]{_date_heading(d)}[/]: {len(day_events)} events")
    _println(
        f"Conflict type: {summary.conflict_type.value} | "
        f"severity: {summary.severity.value} | max overlap: {summary.max_overlap} min"
    )
    if summary.has_conflict:
        _println("Conflicting events:")
        for ev in summary.conflicting_events:
            _println(f"  - {_event_line(ev)}")
    return 0


def _cmd_conflicts(args: argparse.Namespace, book: EventBook) -> int:
    """
    Print all detected conflicts, grouped by date (the notification banner).
    """
    index = book.conflict_index()
    records = flatten_conflicts(index)
    if not records:
        _println("No conflicts found.")
        return 0

    _println(f"[bold red]Schedule conflicts detected: {len(index)} date(s), {len(records)} pair(s)[/]")
    for d in sorted(index):
        _println(f"\n[bold]{_date_heading(d)}[/] - {len(index[d])} conflicting pair(s):")
        for rec in index[d]:
            left, right = rec.events[0], rec.events[-1]
            _println(
                f"  - {_span(left)}: {escape(left.title)}  <->  "
                f"{_span(right)}: {escape(right.title)}  ({rec.overlap_minutes} min overlap)"
            )
    return 0


def _cmd_export(args: argparse.Namespace, book: EventBook) -> int:
    """
    Export all events into an iCalendar (.ics) file.
    """
    if not len(book):
        _println("No events to export.")
        return 0

    out_path = (args.out or "").strip()
    if not out_path:
        _println("Please provide output .ics path.")
        return 1

    n = export_events_to_ics(book.events, out_path)
    _println(f"Exported {n} events to: {escape(out_path)}")
    return 0


def _cmd_categories(args: argparse.Namespace, book: EventBook) -> int:
    table = Table(title="Categories", box=box.SIMPLE)
    table.add_column("Value")
    table.add_column("Label")
    table.add_column("Color")
    for cat in book.categories:
        table.add_row(cat.value, cat.label, cat.color)
    console.print(table)
    return 0


def _add_event_options(p: argparse.ArgumentParser, required: bool) -> None:
    p.add_argument("--title", type=str, required=required, help="Event title")
    p.add_argument("--date", type=str, required=required, help="Date (YYYY-MM-DD)")
    p.add_argument("--time", type=str, help="Start time (HH:MM, default 09:00)")
    p.add_argument("--duration", type=int, help="Duration in minutes (default 60, min 15)")
    p.add_argument("--category", type=str, choices=DEFAULT_CATEGORIES.values(), help="Category")
    p.add_argument("--location", type=str, help="Location")
    p.add_argument("--description", type=str, help="Description")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="daybook", description="daybook calendar CLI")
    parser.add_argument("--file", type=str, default=None, help="Events JSON file (default: DAYBOOK_EVENTS_FILE)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List events grouped by date")
    p_list.add_argument("--date", type=str, help="Only this date (YYYY-MM-DD)")
    p_list.add_argument("--search", type=str, help="Text in title, description or location")
    p_list.add_argument("--category", type=str, default=ALL_CATEGORIES, help="Category or 'all'")

    p_add = sub.add_parser("add", help="Create an event")
    _add_event_options(p_add, required=True)

    p_edit = sub.add_parser("edit", help="Edit an event")
    p_edit.add_argument("event_id", type=str, help="Event id")
    _add_event_options(p_edit, required=False)

    p_remove = sub.add_parser("remove", help="Delete an event")
    p_remove.add_argument("event_id", type=str, help="Event id")

    p_clear = sub.add_parser("clear", help="Delete all events")
    p_clear.add_argument("--yes", action="store_true", help="Confirm")

    p_day = sub.add_parser("day", help="Show the conflict summary of one date")
    p_day.add_argument("date", type=str, help="Date (YYYY-MM-DD)")

    sub.add_parser("conflicts", help="Show all schedule conflicts")

    p_export = sub.add_parser("export", help="Export events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    sub.add_parser("categories", help="List event categories")

    return parser


COMMANDS = {
    "list": _cmd_list,
    "add": _cmd_add,
    "edit": _cmd_edit,
    "remove": _cmd_remove,
    "clear": _cmd_clear,
    "day": _cmd_day,
    "conflicts": _cmd_conflicts,
    "export": _cmd_export,
    "categories": _cmd_categories,
}


def main(argv: Optional[Iterable[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    setup_logger(level=logging.DEBUG if args.verbose else None)

    book = EventBook(args.file)
    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        rc = handler(args, book)
    except DaybookError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        _println(f"[red]Error:[/] {escape(str(e))}")
        rc = 1
    raise SystemExit(rc)
