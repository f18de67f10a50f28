"""
Colour scales for the heatmap.

Cells are coloured by rank (quantile scale) while the legend axis is a plain
linear scale over the same [0, max] domain, so the legend reads in absolute
miles. The two scales share nothing but the domain.
"""

import math
from bisect import bisect_right
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

# Light -> dark.
PALETTE = [
    "#e5f5e0",
    "#a1d99b",
    "#31a354",
    "#004225",  # British racing green
    "#00260f",
]


class QuantileScale:
    def __init__(self, values: Iterable[float], palette: Sequence[str] = PALETTE) -> None:
        self.palette = list(palette)
        sample = sorted(float(v) for v in values if v is not None and math.isfinite(float(v)) and float(v) > 0)
        self.domain: Tuple[float, float] = (0.0, sample[-1] if sample else 1.0)
        if not sample:
            sample = list(self.domain)
        n = len(self.palette)
        qs = pd.Series(sample, dtype=float).quantile([i / n for i in range(1, n)], interpolation="linear")
        self.thresholds: List[float] = [float(q) for q in qs]

    def bucket(self, v: float) -> int:
        return bisect_right(self.thresholds, float(v))

    def __call__(self, v: float) -> str:
        return self.palette[self.bucket(v)]


def build(values: Iterable[float]) -> QuantileScale:
    return QuantileScale(values)


def legend_ticks(max_value: float, count: int = 5) -> List[float]:
    """Round 1/2/5 x 10^k ticks covering [0, max_value]."""
    stop = float(max_value) if max_value and max_value > 0 else 1.0
    step = stop / count
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    inc = factor * 10.0 ** power
    return [round(i * inc, 10) for i in range(0, int(math.floor(stop / inc + 1e-9)) + 1)]


def legend_label(tick: float) -> str:
    return f"{tick:.1f} miles"
