import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from mileage_heatmap.schema import Record

# Weeks start on Sunday; wd 0 is Sunday.
WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class DayCell:
    date: dt.date
    week: int
    wd: int
    value: Optional[float] = None


def weekday_index(d: dt.date) -> int:
    return (d.weekday() + 1) % 7


def week_index(d: dt.date) -> int:
    """Sunday boundaries crossed since Jan 1 of the same year."""
    jan1 = dt.date(d.year, 1, 1)
    return ((d - jan1).days + weekday_index(jan1)) // 7


def week_count(year: int) -> int:
    return week_index(dt.date(year, 12, 31)) + 1


def month_starts(year: int) -> List[Tuple[int, str]]:
    out = []
    for m in range(1, 13):
        first = dt.date(year, m, 1)
        out.append((week_index(first), first.strftime("%B")))
    return out


def records_frame(records: Iterable[Record]) -> pd.DataFrame:
    rows = [(r.date, float(r.value)) for r in records]
    return pd.DataFrame(
        {
            "Date": pd.to_datetime([d for d, _ in rows]),
            "value": pd.Series([v for _, v in rows], dtype=float),
        }
    )


def bin_year(year: int, records: Iterable[Record]) -> pd.DataFrame:
    idx = pd.date_range(dt.date(year, 1, 1), dt.date(year, 12, 31), freq="D")
    out = pd.DataFrame({"Date": idx})
    jan1_wd = weekday_index(dt.date(year, 1, 1))
    out["wd"] = (out["Date"].dt.weekday + 1) % 7
    out["week"] = (out["Date"].dt.dayofyear - 1 + jan1_wd) // 7
    # First record for a day wins.
    rec = records_frame(records).drop_duplicates(subset="Date", keep="first")
    out = out.merge(rec, on="Date", how="left")
    return out[["Date", "week", "wd", "value"]].reset_index(drop=True)


def day_cells(year: int, records: Iterable[Record]) -> List[DayCell]:
    grid = bin_year(year, records)
    return [
        DayCell(
            date=r.Date.date(),
            week=int(r.week),
            wd=int(r.wd),
            value=None if pd.isna(r.value) else float(r.value),
        )
        for r in grid.itertuples(index=False)
    ]
