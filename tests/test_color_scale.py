"""
Unit tests for the quantile cell scale and the linear legend ticks.
"""

import math
import random
import unittest
from collections import Counter

from mileage_heatmap.color_scale import PALETTE, build, legend_label, legend_ticks


class TestQuantileScale(unittest.TestCase):
    """Buckets split the sorted values into equal-count groups."""

    def _group_sizes(self, values):
        scale = build(values)
        buckets = [scale.bucket(v) for v in sorted(values)]
        self.assertEqual(buckets, sorted(buckets), "buckets must be contiguous over sorted values")
        counts = Counter(buckets)
        return [counts.get(i, 0) for i in range(len(PALETTE))]

    def test_ten_values(self):
        self.assertEqual(self._group_sizes([float(v) for v in range(1, 11)]), [2, 2, 2, 2, 2])

    def test_uneven_counts(self):
        for n in (7, 12, 23, 48):
            with self.subTest(n=n):
                rng = random.Random(n)
                values = rng.sample(range(1, 1000), n)
                sizes = self._group_sizes([v / 10 for v in values])
                self.assertEqual(sum(sizes), n)
                self.assertTrue(all(s in (n // 5, math.ceil(n / 5)) for s in sizes), sizes)

    def test_rank_not_width(self):
        # One long run among short ones: a linear scale would put everything else in bucket 0.
        values = [1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0, 26.2]
        scale = build(values)
        self.assertEqual(scale(1.0), PALETTE[0])
        self.assertEqual(scale(5.0), PALETTE[4])
        self.assertEqual(scale(3.0), PALETTE[2])

    def test_domain(self):
        self.assertEqual(build([3.0, 9.5, 1.0]).domain, (0.0, 9.5))

    def test_non_positive_values_ignored(self):
        self.assertEqual(build([0.0, -1.0, 5.0]).domain, (0.0, 5.0))

    def test_empty_defaults_to_unit_domain(self):
        scale = build([])
        self.assertEqual(scale.domain, (0.0, 1.0))
        self.assertEqual(scale(0.5), PALETTE[2])
        self.assertEqual(scale(1.0), PALETTE[4])

    def test_single_value(self):
        scale = build([4.0])
        self.assertEqual(scale(4.0), PALETTE[-1])


class TestLegendTicks(unittest.TestCase):
    """Linear legend axis over [0, max]."""

    def test_round_steps(self):
        self.assertEqual(legend_ticks(10), [0, 2, 4, 6, 8, 10])
        self.assertEqual(legend_ticks(37), [0, 10, 20, 30])
        self.assertEqual(legend_ticks(13.1), [0, 2, 4, 6, 8, 10, 12])

    def test_empty_domain(self):
        self.assertEqual(legend_ticks(0), [0.0, 0.2, 0.4, 0.6, 0.8, 1.0])

    def test_label(self):
        self.assertEqual(legend_label(2), "2.0 miles")
        self.assertEqual(legend_label(12.345), "12.3 miles")


if __name__ == "__main__":
    unittest.main()
