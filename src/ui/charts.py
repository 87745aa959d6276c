"""
Standard chart wrappers using Plotly.
"""
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Optional


# =============================================================================
# CHART THEME
# =============================================================================

CHART_COLORS = {
    "primary": "#1e1b4b",
    "success": "#28a745",
    "danger": "#dc3545",
    "neutral": "#6c757d",
}

CHART_TEMPLATE = "plotly_white"

DEFAULT_LAYOUT = {
    "template": CHART_TEMPLATE,
    "font": {"family": "Cairo, Arial, sans-serif", "size": 12},
    "margin": {"l": 50, "r": 30, "t": 40, "b": 50},
    "hoverlabel": {"bgcolor": "white"},
}


def apply_layout(fig: go.Figure, **kwargs) -> go.Figure:
    """Apply standard layout to figure."""
    layout = {**DEFAULT_LAYOUT, **kwargs}
    fig.update_layout(**layout)
    return fig


def location_bar(locations: pd.DataFrame, title: str = "") -> go.Figure:
    """Headcount per location, largest at the top."""
    fig = px.bar(
        locations, x="count", y="name", orientation="h",
        title=title,
        text="count",
        color_discrete_sequence=[CHART_COLORS["primary"]],
    )
    fig.update_traces(textposition="outside")
    fig.update_layout(yaxis={"categoryorder": "total ascending", "title": ""},
                      xaxis={"title": "Staff"})
    return apply_layout(fig)


def coverage_bar(coverage: pd.DataFrame, threshold: Optional[int] = None,
                 title: str = "Staff per supervisor") -> go.Figure:
    """Coverage ratio per region, coloured by capacity flag, with threshold line."""
    colors = [
        CHART_COLORS["danger"] if over else CHART_COLORS["success"]
        for over in coverage["over_capacity"]
    ]
    fig = go.Figure(go.Bar(
        x=coverage["region_name"],
        y=coverage["ratio"],
        marker_color=colors,
        text=coverage["ratio"],
        textposition="outside",
        hovertemplate="%{x}<br>1 : %{y}<extra></extra>",
    ))
    if threshold is not None:
        fig.add_hline(y=threshold, line_dash="dash", line_color=CHART_COLORS["neutral"],
                      annotation_text=f"Threshold 1 : {threshold}")
    fig.update_layout(title=title, xaxis={"title": ""}, yaxis={"title": "Staff per supervisor"})
    return apply_layout(fig)
