import datetime as dt
import math
from dataclasses import dataclass
from typing import Iterable, Union

from mileage_heatmap.schema import Record

DEFAULT_YEARLY_GOAL = 1000.0
# Pace ignores leap days: the goal is spread over 365 days every year.
DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class ProgressState:
    total_value: float
    target_value: float
    elapsed_days: int
    yearly_goal: float

    @property
    def fill_ratio(self) -> float:
        # Not clamped: past the goal the bar runs beyond its track.
        return self.total_value / self.yearly_goal

    @property
    def marker_ratio(self) -> float:
        return self.target_value / self.yearly_goal

    @property
    def summary(self) -> str:
        return f"Total Mileage: {self.total_value:.2f} miles | Goal Pace: {self.target_value:.2f} miles"


def elapsed_days(year_start: Union[dt.date, dt.datetime], today: Union[dt.date, dt.datetime]) -> int:
    if isinstance(today, dt.datetime) or isinstance(year_start, dt.datetime):
        a = year_start if isinstance(year_start, dt.datetime) else dt.datetime.combine(year_start, dt.time())
        b = today if isinstance(today, dt.datetime) else dt.datetime.combine(today, dt.time())
        return math.floor((b - a).total_seconds() / 86400)
    return (today - year_start).days


def compute(
    records: Iterable[Record],
    today: Union[dt.date, dt.datetime],
    year_start: Union[dt.date, dt.datetime],
    yearly_goal: float = DEFAULT_YEARLY_GOAL,
) -> ProgressState:
    if yearly_goal <= 0:
        raise ValueError("yearly_goal must be positive")
    total = sum(float(r.value) for r in records)
    days = elapsed_days(year_start, today)
    return ProgressState(
        total_value=total,
        target_value=(days / DAYS_PER_YEAR) * yearly_goal,
        elapsed_days=days,
        yearly_goal=float(yearly_goal),
    )
