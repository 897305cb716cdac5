"""Plotly and Matplotlib figures for the fault dashboard."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import seaborn as sns
from matplotlib import pyplot as plt

from .chart_data import ChartData, ChartDataset

sns.set_theme(style="whitegrid")
_TREND_COLOR = "#FF6B6B"
_HIST_COLOR = "#2563eb"


def _empty_figure(message: str):
    fig = px.scatter()
    fig.add_annotation(text=message, showarrow=False)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def _primary(chart: ChartData) -> ChartDataset | None:
    return chart.datasets[0] if chart.datasets else None


def build_bar_chart(chart: ChartData, title: str):
    """Bar chart from a payload; bars are positional so repeated labels stay separate."""
    dataset = _primary(chart)
    if chart.is_empty or dataset is None:
        return _empty_figure("No faults match the current filters.")

    positions = list(range(len(chart.labels)))
    fig = px.bar(
        x=positions,
        y=list(dataset.data),
        labels={"x": "Alarm code", "y": dataset.label},
        title=title,
    )
    fig.update_traces(
        marker_color=dataset.background_color,
        marker_line_color=dataset.border_color,
        marker_line_width=dataset.border_width,
        name=dataset.label,
    )
    fig.update_xaxes(tickmode="array", tickvals=positions, ticktext=list(chart.labels))
    fig.update_layout(height=400)
    return fig


def build_pie_chart(chart: ChartData, title: str):
    dataset = _primary(chart)
    if chart.is_empty or dataset is None:
        return _empty_figure("No faults match the current filters.")

    fig = px.pie(names=list(chart.labels), values=list(dataset.data), title=title)
    fills = dataset.background_color
    borders = dataset.border_color
    fig.update_traces(
        sort=False,
        textposition="inside",
        textinfo="percent+label",
        marker=dict(
            colors=list(fills) if isinstance(fills, tuple) else None,
            line=dict(color=list(borders) if isinstance(borders, tuple) else borders, width=dataset.border_width),
        ),
    )
    fig.update_layout(height=400)
    return fig


def build_fault_trend_chart(ts_frame: pd.DataFrame):
    """Faults per period with the OLS trend when one was fitted."""
    if ts_frame.empty or "fault_count" not in ts_frame.columns:
        return _empty_figure("Insufficient data for a trend.")

    fig = px.line(
        ts_frame,
        x="period",
        y="fault_count",
        title="Fault volume over time",
        labels={"period": "Period", "fault_count": "Faults"},
    )
    if "trend" in ts_frame.columns and ts_frame["trend"].notna().any():
        fig.add_trace(px.line(ts_frame, x="period", y="trend").data[0])
        fig.data[-1].name = "Trend (OLS)"
        fig.data[-1].line.color = _TREND_COLOR
    fig.update_layout(height=420, legend_title_text="")
    return fig


def create_duration_distribution_plot(df: pd.DataFrame):
    """Matplotlib histogram of fault durations."""
    fig, ax = plt.subplots(figsize=(6, 4))
    series = df["duration_seconds"].dropna() if "duration_seconds" in df.columns else pd.Series(dtype="float")
    if series.empty:
        ax.text(0.5, 0.5, "No fault durations available.", ha="center", va="center")
        ax.axis("off")
        return fig

    sns.histplot(series.astype(float), bins=20, color=_HIST_COLOR, ax=ax)
    ax.set_title("Distribution of fault durations")
    ax.set_xlabel("Duration (seconds)")
    ax.set_ylabel("Faults")
    fig.tight_layout()
    return fig
