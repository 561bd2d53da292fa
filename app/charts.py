from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from models.view import ChartPayload, Tick
from services.colors import color_for
from services.formatting import DateFormatter


def build_temperature_figure(
    payload: ChartPayload,
    ticks: Sequence[Tick],
    formatter: DateFormatter,
    *,
    height: int = 500,
) -> go.Figure:
    fig = go.Figure()
    positions = list(range(len(payload.values)))
    # Markers colored by calendar day; the line itself keeps one color
    point_colors = [color_for(index).rgb for index in payload.point_colors]
    hover_titles = [formatter.pretty_long_form(date) for date in payload.tooltip_dates]
    hover_values = [formatter.temperature_label(value) for value in payload.values]

    fig.add_trace(
        go.Scatter(
            x=positions,
            y=list(payload.values),
            mode="lines+markers",
            name="Temperature (°C)",
            line=dict(color="rgb(75, 192, 192)", width=2, shape="spline", smoothing=0.3),
            marker=dict(size=7, color=point_colors, line=dict(color=point_colors, width=1)),
            text=hover_titles,
            customdata=hover_values,
            hovertemplate="%{text}<br>%{customdata}<extra></extra>",
        )
    )

    fig.update_layout(
        template="simple_white",
        height=height,
        title=payload.title,
        margin=dict(l=40, r=20, t=60, b=40),
        showlegend=False,
        hovermode="x unified",
        xaxis_title=payload.axis_title,
        yaxis_title="°C",
    )
    fig.update_xaxes(
        tickmode="array",
        tickvals=[tick.index for tick in ticks],
        ticktext=[tick.label for tick in ticks],
    )
    fig.update_yaxes(rangemode="tozero")
    return fig
