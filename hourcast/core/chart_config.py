"""
chart_config.py

Plotly layout helpers shared by the forecast charts.
"""

from typing import Dict, Optional

import plotly.graph_objects as go


def get_default_margins(compact: bool = False) -> Dict[str, int]:
    """
    Get standard margin configurations for charts.

    :param compact: If True, returns reduced margins
    :return: Dictionary with margin settings
    """
    if compact:
        return dict(l=30, r=20, t=30, b=40)
    else:
        return dict(l=50, r=50, t=40, b=40)


def get_standard_colors() -> Dict[str, str]:
    return {
        "temperature_line": "#FF6347",
        "precipitation_bar": "rgba(70, 130, 180, 0.5)",
        "now_marker": "#2ca02c",
    }


def apply_forecast_layout(
    fig: go.Figure,
    height: int = 400,
    title: Optional[str] = None,
    compact: bool = False,
) -> go.Figure:
    """
    Apply the two-axis layout used by the hourly forecast chart.

    Temperature goes on the left axis, precipitation probability (0-100 %)
    on the right axis.

    :param fig: Plotly figure to configure
    :param height: Chart height in pixels
    :param title: Chart title (optional)
    :param compact: Use compact margins if True
    :return: Configured figure
    """
    layout_config = {
        "height": height,
        "margin": get_default_margins(compact),
        "showlegend": True,
        "hovermode": "x unified",
        "template": "plotly_white",
        "legend": dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        "yaxis": dict(title="°C", showgrid=True, gridcolor="lightgray"),
        "yaxis2": dict(
            title="Rain %",
            overlaying="y",
            side="right",
            range=[0, 100],
            showgrid=False,
        ),
        "xaxis": dict(title="", showgrid=False),
    }
    if title:
        layout_config["title"] = title

    fig.update_layout(**layout_config)
    return fig
