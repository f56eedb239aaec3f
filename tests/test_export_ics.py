import tempfile
import unittest
from pathlib import Path

from daybook.export_ics import export_events_to_ics
from daybook.model import Event


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        events = [
            Event(
                id="abc123",
                title="Public Economics",
                date="2024-02-19",
                time="10:15",
                duration=105,
                category="work",
                location="HS 8, Room 2",
            )
        ]

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            n = export_events_to_ics(events, out)
            self.assertEqual(n, 1)
            text = out.read_text(encoding="utf-8")
            self.assertIn("BEGIN:VCALENDAR", text)
            self.assertIn("BEGIN:VEVENT", text)
            self.assertIn("SUMMARY:Public Economics", text)
            self.assertIn("DTSTART:20240219T101500", text)
            self.assertIn("DTEND:20240219T120000", text)
            self.assertIn("LOCATION:HS 8\\, Room 2", text)
            self.assertIn("CATEGORIES:WORK", text)

    def test_event_past_midnight_ends_next_day(self) -> None:
        events = [Event(id="late", title="Party", date="2024-12-31", time="23:30", duration=90)]
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            export_events_to_ics(events, out)
            text = out.read_text(encoding="utf-8")
            self.assertIn("DTEND:20250101T010000", text)

    def test_bad_events_are_skipped(self) -> None:
        events = [
            Event(id="ok", title="OK", date="2024-01-01", time="09:00", duration=30),
            Event(id="bad", title="Bad", date="2024-13-01", time="09:00", duration=30),
        ]
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            with self.assertLogs("daybook.export_ics", level="WARNING"):
                n = export_events_to_ics(events, out)
            self.assertEqual(n, 1)
            self.assertNotIn("SUMMARY:Bad", out.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
