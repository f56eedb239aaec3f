"""
Unit tests for wall-clock time arithmetic.

There is no midnight rollover: add_minutes() keeps counting past 23:59
and below 00:00 instead of wrapping. These tests pin that behavior.
"""

import unittest

from daybook.errors import InvalidTimeFormat
from daybook.times import add_minutes, end_minutes, to_duration, to_minutes


class TestToMinutes(unittest.TestCase):
    def test_valid_times(self) -> None:
        self.assertEqual(to_minutes("00:00"), 0)
        self.assertEqual(to_minutes("09:30"), 570)
        self.assertEqual(to_minutes("23:59"), 1439)

    def test_non_zero_padded_is_accepted(self) -> None:
        self.assertEqual(to_minutes("9:5"), 545)

    def test_surrounding_whitespace_is_ignored(self) -> None:
        self.assertEqual(to_minutes(" 10:15 "), 615)

    def test_out_of_range_rejected(self) -> None:
        for bad in ("25:00", "24:00", "12:60", "-1:30"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidTimeFormat):
                    to_minutes(bad)

    def test_malformed_rejected(self) -> None:
        for bad in ("", "0900", "09:00:00", "ab:cd", "9:", ":30", "+9:00", "09 :00"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidTimeFormat):
                    to_minutes(bad)

    def test_non_string_rejected(self) -> None:
        with self.assertRaises(InvalidTimeFormat):
            to_minutes(900)  # type: ignore[arg-type]

    def test_invalid_time_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            to_minutes("25:00")


class TestAddMinutes(unittest.TestCase):
    def test_simple_add(self) -> None:
        self.assertEqual(add_minutes("09:00", 60), "10:00")
        self.assertEqual(add_minutes("09:45", 30), "10:15")
        self.assertEqual(add_minutes("9:5", 0), "09:05")

    def test_no_wrap_past_midnight(self) -> None:
        self.assertEqual(add_minutes("23:30", 60), "24:30")
        self.assertEqual(add_minutes("23:00", 60), "24:00")

    def test_negative_result_is_not_wrapped(self) -> None:
        # floor division: -30 minutes -> hour -1, minute 30
        self.assertEqual(add_minutes("00:00", -30), "-1:30")
        self.assertEqual(add_minutes("01:00", -30), "00:30")

    def test_to_duration(self) -> None:
        self.assertEqual(to_duration(45), 45)
        self.assertEqual(to_duration(30.0), 30)
        self.assertEqual(to_duration(" 90 "), 90)
        self.assertEqual(to_duration("-5"), -5)
        for bad in (30.9, "15.5", "abc", "", None, True, [30]):
            with self.subTest(value=bad):
                self.assertIsNone(to_duration(bad))

    def test_invalid_start_propagates(self) -> None:
        with self.assertRaises(InvalidTimeFormat):
            add_minutes("25:00", 10)

    def test_end_minutes_matches_roundtrip_before_midnight(self) -> None:
        self.assertEqual(end_minutes("09:00", 90), to_minutes(add_minutes("09:00", 90)))
        self.assertEqual(end_minutes("23:30", 60), 1470)


if __name__ == "__main__":
    unittest.main()
