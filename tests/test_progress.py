"""
Unit tests for the progress calculator.
"""

import datetime as dt
import unittest

from mileage_heatmap.progress import compute, elapsed_days
from mileage_heatmap.schema import Record


def rec(v, d=dt.date(2024, 2, 1)):
    return Record(date=d, value=v)


class TestCompute(unittest.TestCase):
    """Totals and the linear, 365-day goal pace."""

    def test_total_is_exact_sum(self):
        state = compute([rec(3.5), rec(2.25)], dt.date(2024, 7, 1), dt.date(2024, 1, 1), 1000)
        self.assertEqual(state.total_value, 5.75)

    def test_target_mid_year(self):
        state = compute([], dt.date(2024, 7, 1), dt.date(2024, 1, 1), 1000)
        self.assertEqual(state.elapsed_days, 182)
        self.assertAlmostEqual(state.target_value, 498.63, places=2)

    def test_target_on_new_year(self):
        state = compute([], dt.date(2024, 1, 1), dt.date(2024, 1, 1), 1000)
        self.assertEqual(state.target_value, 0.0)

    def test_leap_year_keeps_365_denominator(self):
        state = compute([], dt.date(2024, 12, 31), dt.date(2024, 1, 1), 1000)
        self.assertEqual(state.elapsed_days, 365)
        self.assertEqual(state.target_value, 1000.0)

    def test_custom_goal(self):
        state = compute([rec(10.0)], dt.date(2023, 7, 2), dt.date(2023, 1, 1), 730)
        self.assertEqual(state.elapsed_days, 182)
        self.assertAlmostEqual(state.target_value, 364.0)
        self.assertAlmostEqual(state.fill_ratio, 10.0 / 730)

    def test_goal_must_be_positive(self):
        with self.assertRaises(ValueError):
            compute([], dt.date(2024, 7, 1), dt.date(2024, 1, 1), 0)

    def test_fill_ratio_not_clamped(self):
        state = compute([rec(1500.0)], dt.date(2024, 7, 1), dt.date(2024, 1, 1), 1000)
        self.assertEqual(state.fill_ratio, 1.5)
        self.assertAlmostEqual(state.marker_ratio, 182 / 365)

    def test_summary_two_decimals(self):
        state = compute([rec(3.5), rec(2.25)], dt.date(2024, 7, 1), dt.date(2024, 1, 1), 1000)
        self.assertEqual(state.summary, "Total Mileage: 5.75 miles | Goal Pace: 498.63 miles")


class TestElapsedDays(unittest.TestCase):
    """Whole days, partial days truncated."""

    def test_dates(self):
        self.assertEqual(elapsed_days(dt.date(2024, 1, 1), dt.date(2024, 3, 1)), 60)

    def test_partial_day_truncates(self):
        start = dt.datetime(2024, 1, 1)
        self.assertEqual(elapsed_days(start, dt.datetime(2024, 1, 1, 23, 59)), 0)
        self.assertEqual(elapsed_days(start, dt.datetime(2024, 1, 3, 18, 0)), 2)

    def test_mixed_date_and_datetime(self):
        self.assertEqual(elapsed_days(dt.datetime(2024, 1, 1), dt.date(2024, 1, 11)), 10)


if __name__ == "__main__":
    unittest.main()
