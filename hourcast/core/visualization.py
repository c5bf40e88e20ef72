"""
visualization.py
Charts for the hourly forecast
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from hourcast.core.chart_config import apply_forecast_layout, get_standard_colors
from hourcast.utils.weather_utils import format_hour_label


def create_forecast_chart(
    df: pd.DataFrame, current_hour: Optional[int] = None, title: Optional[str] = None
) -> go.Figure:
    """
    Temperature line over precipitation probability bars.

    :param df: DataFrame from ``forecast_to_dataframe`` (indexed by hour slot).
    :param current_hour: Hour slot to mark as "now", if any.
    :param title: Chart title.
    :return: Plotly figure (empty figure when df is empty).
    """
    fig = go.Figure()
    if df.empty:
        return apply_forecast_layout(fig, title=title)

    colors = get_standard_colors()
    fig.add_trace(
        go.Bar(
            x=df.index,
            y=df["precipitation_probability"],
            name="Rain %",
            marker_color=colors["precipitation_bar"],
            yaxis="y2",
            customdata=[format_hour_label(h) for h in df.index],
            hovertemplate="%{customdata}: %{y}%<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df.index,
            y=df["temperature"],
            name="Temperature",
            mode="lines",
            line=dict(color=colors["temperature_line"], width=2),
            customdata=df["conditions"],
            hovertemplate="%{y}°C %{customdata}<extra></extra>",
        )
    )
    if current_hour is not None and current_hour in df.index:
        fig.add_vline(x=current_hour, line_dash="dot", line_color=colors["now_marker"])

    return apply_forecast_layout(fig, title=title)
