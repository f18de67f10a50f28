import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Union

import pandas as pd
import plotly.graph_objects as go

from mileage_heatmap import charts, color_scale, progress
from mileage_heatmap.calendar_grid import bin_year
from mileage_heatmap.color_scale import QuantileScale
from mileage_heatmap.progress import ProgressState
from mileage_heatmap.schema import Record


@dataclass
class Report:
    year: int
    cells: pd.DataFrame
    scale: QuantileScale
    progress: ProgressState

    def heatmap_figure(self) -> go.Figure:
        return charts.heatmap(self.cells, self.scale, self.year)

    def progress_figure(self) -> go.Figure:
        return charts.progress_chart(self.progress)


def build_report(
    records: List[Record],
    today: Optional[Union[dt.date, dt.datetime]] = None,
    yearly_goal: float = progress.DEFAULT_YEARLY_GOAL,
) -> Report:
    """Everything one page load shows. The year is fixed here and passed down."""
    now = today or dt.datetime.now()
    year = now.year
    return Report(
        year=year,
        cells=bin_year(year, records),
        scale=color_scale.build(r.value for r in records if r.date.year == year),
        progress=progress.compute(records, now, dt.datetime(year, 1, 1), yearly_goal),
    )
