"""
Tests for CLI entry points.

Every test points the CLI at a temporary events file via --file
(to avoid touching real user data during tests) and captures stdout.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from daybook.cli import main
from daybook.storage import load_events


def _run(*argv: str) -> tuple[int, str]:
    buf = io.StringIO()
    code: object = 0
    with redirect_stdout(buf):
        try:
            main(list(argv))
        except SystemExit as e:
            code = e.code
    return (0 if code is None else int(code)), buf.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "events.json"
        self.file_args = ["--file", str(self.path)]

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _add(self, title: str, time: str, duration: int, date: str = "2024-01-01") -> tuple[int, str]:
        return _run(
            *self.file_args, "add", "--title", title, "--date", date, "--time", time, "--duration", str(duration)
        )

    def test_add_requires_title(self) -> None:
        # argparse usage errors exit with a nonzero code
        with self.assertRaises(SystemExit) as ctx:
            with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
                main([*self.file_args, "add", "--date", "2024-01-01"])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_add_invalid_time_fails_validation(self) -> None:
        code, out = self._add("Bad", "25:00", 30)
        self.assertEqual(code, 1)
        self.assertIn("time", out)
        self.assertEqual(load_events(self.path), [])

    def test_add_then_list(self) -> None:
        code, out = self._add("Standup", "09:00", 30)
        self.assertEqual(code, 0)
        self.assertIn("Created:", out)

        code, out = _run(*self.file_args, "list")
        self.assertEqual(code, 0)
        self.assertIn("2024-01-01 (Mon)", out)
        self.assertIn("09:00-09:30", out)
        self.assertIn("Standup", out)
        self.assertNotIn("CONFLICT", out)

    def test_add_overlapping_event_warns_and_saves(self) -> None:
        self._add("Planning", "09:00", 60)
        code, out = self._add("Review", "09:30", 30)
        self.assertEqual(code, 0)
        self.assertIn("This event conflicts with: Planning", out)
        self.assertEqual(len(load_events(self.path)), 2)

        _, out = _run(*self.file_args, "list")
        self.assertEqual(out.count("CONFLICT"), 2)

    def test_conflicts_banner(self) -> None:
        code, out = _run(*self.file_args, "conflicts")
        self.assertEqual(code, 0)
        self.assertIn("No conflicts found.", out)

        self._add("Planning", "09:00", 60)
        self._add("Review", "09:30", 30)
        self._add("Lunch", "12:00", 30, date="2024-01-02")

        code, out = _run(*self.file_args, "conflicts")
        self.assertEqual(code, 0)
        self.assertIn("Schedule conflicts detected: 1 date(s), 1 pair(s)", out)
        self.assertIn("09:00-10:00: Planning", out)
        self.assertIn("(30 min overlap)", out)
        self.assertNotIn("Lunch", out)

    def test_conflicts_banner_counts_dates_and_pairs(self) -> None:
        self._add("A", "09:00", 60)
        self._add("B", "09:30", 60)
        self._add("C", "10:00", 30)
        self._add("D", "14:00", 60, date="2024-01-02")
        self._add("E", "14:45", 30, date="2024-01-02")

        _, out = _run(*self.file_args, "conflicts")
        self.assertIn("Schedule conflicts detected: 2 date(s), 3 pair(s)", out)
        self.assertIn("2024-01-01 (Mon) - 2 conflicting pair(s):", out)
        self.assertIn("2024-01-02 (Tue) - 1 conflicting pair(s):", out)

    def test_day_summary(self) -> None:
        self._add("A", "09:00", 60)
        self._add("B", "10:00", 30)
        code, out = _run(*self.file_args, "day", "2024-01-01")
        self.assertEqual(code, 0)
        self.assertIn("2 events", out)
        self.assertIn("Conflict type: adjacent", out)
        self.assertIn("severity: none", out)

    def test_edit_and_remove(self) -> None:
        self._add("A", "09:00", 60)
        event_id = load_events(self.path)[0].id

        code, out = _run(*self.file_args, "edit", event_id, "--time", "11:00")
        self.assertEqual(code, 0)
        self.assertEqual(load_events(self.path)[0].time, "11:00")

        code, out = _run(*self.file_args, "edit", "missing", "--time", "11:00")
        self.assertEqual(code, 1)
        self.assertIn("Event not found", out)

        code, out = _run(*self.file_args, "remove", event_id)
        self.assertEqual(code, 0)
        self.assertEqual(load_events(self.path), [])

        code, _ = _run(*self.file_args, "remove", event_id)
        self.assertEqual(code, 1)

    def test_clear_requires_confirmation(self) -> None:
        self._add("A", "09:00", 60)
        code, _ = _run(*self.file_args, "clear")
        self.assertEqual(code, 1)
        self.assertEqual(len(load_events(self.path)), 1)

        code, _ = _run(*self.file_args, "clear", "--yes")
        self.assertEqual(code, 0)
        self.assertEqual(load_events(self.path), [])

    def test_list_filters(self) -> None:
        self._add("Gym", "07:00", 60)
        self._add("Budget review", "10:00", 60, date="2024-01-02")

        _, out = _run(*self.file_args, "list", "--search", "budget")
        self.assertIn("Budget review", out)
        self.assertNotIn("Gym", out)

        _, out = _run(*self.file_args, "list", "--date", "2024-01-01")
        self.assertIn("Gym", out)
        self.assertNotIn("Budget", out)

    def test_stored_malformed_time_reports_error(self) -> None:
        record = {"id": "1", "title": "Broken", "date": "2024-01-01", "time": "9h", "duration": 30}
        self.path.write_text(json.dumps([record]), encoding="utf-8")
        code, out = _run(*self.file_args, "conflicts")
        self.assertEqual(code, 0)
        code, out = _run(*self.file_args, "list")
        self.assertEqual(code, 1)
        self.assertIn("Invalid time format", out)

    def test_export(self) -> None:
        self._add("A", "09:00", 60)
        out_file = Path(self._tmp.name) / "out.ics"
        code, out = _run(*self.file_args, "export", str(out_file))
        self.assertEqual(code, 0)
        self.assertIn("Exported 1 events", out)
        self.assertTrue(out_file.exists())


if __name__ == "__main__":
    unittest.main()
