from typing import Dict

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from mileage_heatmap.calendar_grid import WEEKDAYS, month_starts, week_count
from mileage_heatmap.color_scale import QuantileScale, legend_label, legend_ticks
from mileage_heatmap.progress import ProgressState

COL: Dict[str, str] = {
    "text": "#e8eef8",
    "muted": "#9db0cc",
    "empty": "#1f2430",
    "track": "rgba(125,150,180,.22)",
    "bar": "#31a354",
    "pace": "#FFC75A",
}
CHART_CFG = {"displayModeBar": False}
CELL_SIZE = 14
LEGEND_STEPS = 100


def fig_style(fig: go.Figure, h: int) -> go.Figure:
    fig.update_layout(
        height=h,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=0, r=0, t=28, b=0),
        font=dict(family="Outfit, sans-serif", size=12, color=COL["text"]),
        showlegend=False,
        hoverlabel=dict(bgcolor="rgba(10,14,28,.92)", font=dict(color=COL["text"])),
    )
    fig.update_xaxes(showgrid=False, zeroline=False, tickfont=dict(color=COL["muted"]))
    fig.update_yaxes(showgrid=False, zeroline=False, tickfont=dict(color=COL["muted"]))
    return fig


def heatmap(cells: pd.DataFrame, scale: QuantileScale, year: int) -> go.Figure:
    x = cells.copy()
    has = x["value"].notna()
    fig = make_subplots(rows=2, cols=1, row_heights=[0.78, 0.22], vertical_spacing=0.16)

    empty = x.loc[~has]
    fig.add_trace(
        go.Scatter(
            x=empty["week"],
            y=empty["wd"],
            mode="markers",
            name="No entry",
            marker=dict(size=CELL_SIZE, symbol="square", color=COL["empty"]),
            hoverinfo="skip",
        ),
        row=1,
        col=1,
    )

    filled = x.loc[has].copy()
    filled["color"] = filled["value"].apply(scale)
    filled["label"] = filled["Date"].dt.strftime("%Y-%m-%d")
    fig.add_trace(
        go.Scatter(
            x=filled["week"],
            y=filled["wd"],
            mode="markers",
            name="Mileage",
            marker=dict(size=CELL_SIZE, symbol="square", color=filled["color"].tolist()),
            customdata=filled[["label", "value"]],
            hovertemplate="Date: %{customdata[0]}<br>Value: %{customdata[1]}<extra></extra>",
        ),
        row=1,
        col=1,
    )

    starts = month_starts(year)
    fig.update_xaxes(
        tickmode="array",
        tickvals=[w for w, _ in starts],
        ticktext=[label for _, label in starts],
        side="top",
        range=[-0.6, week_count(year) - 0.4],
        row=1,
        col=1,
    )
    fig.update_yaxes(tickmode="array", tickvals=list(range(7)), ticktext=WEEKDAYS, autorange="reversed", row=1, col=1)

    # Legend: gradient over the linear [0, max] axis, independent of the cell buckets.
    lo, hi = scale.domain
    ramp = [lo + (hi - lo) * i / (LEGEND_STEPS - 1) for i in range(LEGEND_STEPS)]
    n = len(scale.palette)
    fig.add_trace(
        go.Heatmap(
            z=[ramp],
            x=ramp,
            y=[0],
            colorscale=[[i / (n - 1), c] for i, c in enumerate(scale.palette)],
            showscale=False,
            hoverinfo="skip",
        ),
        row=2,
        col=1,
    )
    ticks = legend_ticks(hi)
    fig.update_xaxes(
        tickmode="array",
        tickvals=ticks,
        ticktext=[legend_label(t) for t in ticks],
        range=[lo, hi],
        row=2,
        col=1,
    )
    fig.update_yaxes(showticklabels=False, row=2, col=1)
    return fig_style(fig, 260)


def progress_chart(state: ProgressState) -> go.Figure:
    fig = go.Figure()
    # Paper coordinates so an overshoot past the goal is drawn, not clipped to the axis.
    fig.add_shape(type="rect", xref="paper", yref="y", x0=0, x1=1, y0=0, y1=1, fillcolor=COL["track"], line=dict(width=0))
    fig.add_shape(
        type="rect",
        xref="paper",
        yref="y",
        x0=0,
        x1=state.fill_ratio,
        y0=0,
        y1=1,
        fillcolor=COL["bar"],
        line=dict(width=0),
    )
    fig.add_shape(
        type="line",
        xref="paper",
        yref="y",
        x0=state.marker_ratio,
        x1=state.marker_ratio,
        y0=-0.15,
        y1=1.15,
        line=dict(color=COL["pace"], width=2),
    )
    fig.add_annotation(text=state.summary, xref="paper", yref="y", x=0.5, y=-0.55, showarrow=False)
    fig.update_layout(
        title=dict(text="Progress Bar", x=0.01, font=dict(size=14)),
        xaxis=dict(range=[0, 1], visible=False),
        yaxis=dict(range=[-0.8, 1.3], visible=False),
    )
    return fig_style(fig, 140)
