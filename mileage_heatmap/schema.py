import datetime as dt
import math
import re
from typing import Any, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mileage_heatmap.errors import RowParseError

DATE_COL = "Date"
MILEAGE_COL = "Total Mileage"

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_sheet_date(value: object) -> Optional[dt.date]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value.date()
    if isinstance(value, dt.date):
        return value
    s = str(value).strip()
    # Relative words such as "now" or "today" carry no digit and are not dates.
    if not s or not re.search(r"\d", s):
        return None
    # Sheets serial day numbers first, then the pandas parser.
    if re.fullmatch(r"\d+(\.0+)?", s):
        try:
            serial = int(float(s))
        except (ValueError, OverflowError):
            return None
        if 20000 <= serial <= 80000:
            parsed = pd.to_datetime(serial, unit="D", origin="1899-12-30", errors="coerce")
            if not pd.isna(parsed):
                return parsed.date()
    # Offsets are converted to UTC before truncating to the day; naive values count as UTC.
    try:
        parsed = pd.to_datetime(s, errors="coerce", utc=True)
    except (ValueError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_mileage(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            v = float(value)
        except OverflowError:
            return None
    else:
        m = _LEADING_NUMBER.match(str(value).strip().replace(",", ""))
        if m is None:
            return None
        v = float(m.group(0))
    return v if math.isfinite(v) else None


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    value: float = Field(gt=0)


class UpstreamRow(BaseModel):
    """One spreadsheet row as the Apps Script endpoint (or gspread) returns it."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date: Optional[dt.date] = Field(default=None, alias=DATE_COL)
    mileage: Optional[float] = Field(default=None, alias=MILEAGE_COL)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Optional[dt.date]:
        return parse_sheet_date(v)

    @field_validator("mileage", mode="before")
    @classmethod
    def _mileage(cls, v: Any) -> Optional[float]:
        return parse_mileage(v)

    def to_record(self) -> Record:
        if self.date is None:
            raise RowParseError("missing or unparseable Date")
        if self.mileage is None or self.mileage <= 0:
            raise RowParseError(f"no positive mileage ({self.mileage!r})")
        return Record(date=self.date, value=self.mileage)
