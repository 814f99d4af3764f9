"""Plotly figures for the analytics page."""
from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

STATUS_COLORS = {"pending": "#94a3b8", "in-progress": "#3b82f6", "completed": "#10b981", "overdue": "#ef4444"}
STATUS_LABELS = {"pending": "Pending", "in-progress": "In Progress", "completed": "Completed", "overdue": "Overdue"}
PRIORITY_COLORS = {"high": "#ef4444", "medium": "#f59e0b", "low": "#10b981"}
TEAM_COLORS = ["#6366f1", "#8b5cf6", "#10b981", "#f59e0b", "#ef4444"]

_LAYOUT = dict(template="plotly_white", margin=dict(l=6, r=6, t=30, b=10), height=320)


def status_pie(status_counts: Dict[str, int]) -> go.Figure:
    keys = [k for k in STATUS_LABELS if k in status_counts]
    fig = go.Figure(
        data=go.Pie(
            labels=[STATUS_LABELS[k] for k in keys],
            values=[status_counts[k] for k in keys],
            marker_colors=[STATUS_COLORS[k] for k in keys],
            sort=False,
            hovertemplate="%{label}: %{value} (%{percent})<extra></extra>",
        )
    )
    fig.update_layout(**_LAYOUT, legend=dict(orientation="h", yanchor="bottom", y=-0.2))
    return fig


def priority_bar(priority_counts: Dict[str, int]) -> go.Figure:
    keys = [k for k in ("high", "medium", "low") if k in priority_counts]
    fig = go.Figure()
    fig.add_bar(
        x=[f"{k.title()} Priority" for k in keys],
        y=[priority_counts[k] for k in keys],
        marker_color=[PRIORITY_COLORS[k] for k in keys],
        hovertemplate="Tasks: %{y}<extra></extra>",
    )
    fig.update_layout(**_LAYOUT, showlegend=False, yaxis=dict(rangemode="tozero", dtick=1))
    return fig


def weekly_line(series: Sequence[int]) -> go.Figure:
    df = pd.DataFrame({
        "week": [f"Week {i + 1}" for i in range(len(series))],
        "completed": list(series),
    })
    fig = px.line(df, x="week", y="completed", markers=True)
    fig.update_traces(line_color="#6366f1", fill="tozeroy", hovertemplate="Completed: %{y} tasks<extra></extra>")
    fig.update_layout(**_LAYOUT, xaxis_title=None, yaxis_title=None, yaxis=dict(rangemode="tozero", dtick=1))
    return fig


def team_donut(distribution: Dict[str, int]) -> go.Figure:
    fig = go.Figure(
        data=go.Pie(
            labels=list(distribution.keys()),
            values=list(distribution.values()),
            hole=0.6,
            sort=False,
            marker_colors=[TEAM_COLORS[i % len(TEAM_COLORS)] for i in range(len(distribution))],
            hovertemplate="%{label}: %{value} tasks<extra></extra>",
        )
    )
    fig.update_layout(**_LAYOUT, legend=dict(orientation="h", yanchor="bottom", y=-0.2))
    return fig
