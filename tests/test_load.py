"""Tests for duration parsing and the CPU load loop."""

import unittest
from unittest.mock import MagicMock

from probe_service.load import (
    DEFAULT_DURATION_SECONDS,
    MAX_DURATION_SECONDS,
    parse_duration,
    run_load,
)


class TestParseDuration(unittest.TestCase):

    def test_missing_uses_default(self):
        self.assertEqual(parse_duration(None), DEFAULT_DURATION_SECONDS)

    def test_plain_integer(self):
        for value in range(1, MAX_DURATION_SECONDS + 1):
            self.assertEqual(parse_duration(str(value)), value)

    def test_clamped_to_maximum(self):
        self.assertEqual(parse_duration("31"), 30)
        self.assertEqual(parse_duration("100"), 30)

    def test_non_numeric_uses_default(self):
        self.assertEqual(parse_duration("abc"), DEFAULT_DURATION_SECONDS)
        self.assertEqual(parse_duration(""), DEFAULT_DURATION_SECONDS)

    def test_leading_integer_is_used(self):
        self.assertEqual(parse_duration("7s"), 7)
        self.assertEqual(parse_duration("2.9"), 2)
        self.assertEqual(parse_duration(" 3"), 3)

    def test_zero_and_negative_use_default(self):
        self.assertEqual(parse_duration("0"), DEFAULT_DURATION_SECONDS)
        self.assertEqual(parse_duration("-4"), DEFAULT_DURATION_SECONDS)

    def test_non_ascii_digits_use_default(self):
        self.assertEqual(parse_duration("\u0663"), DEFAULT_DURATION_SECONDS)
        self.assertEqual(parse_duration("\uff17"), DEFAULT_DURATION_SECONDS)


class TestRunLoad(unittest.TestCase):

    def test_runs_at_least_requested_duration(self):
        run = run_load(1, batch_size=100)
        self.assertEqual(run.requested_seconds, 1)
        self.assertGreaterEqual(run.actual_seconds, 1)
        self.assertGreaterEqual(run.iterations, 1)

    def test_deadline_checked_between_batches(self):
        # start=0, then three checks before the deadline and one after it
        clock = MagicMock(side_effect=[0.0, 0.4, 0.8, 0.99, 1.2, 1.2])
        run = run_load(1, batch_size=1, clock=clock)
        self.assertEqual(run.iterations, 3)
        self.assertEqual(run.actual_seconds, 1.2)


if __name__ == "__main__":
    unittest.main()
