"""Typed chart payloads handed to the rendering layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from .pipeline import DerivedView

DURATION_FILL = "rgba(75,192,192,0.4)"
DURATION_BORDER = "rgba(75,192,192,1)"
FREQUENCY_FILL = "rgba(153,102,255,0.4)"
FREQUENCY_BORDER = "rgba(153,102,255,1)"

# (fill, border) pairs, cycled when there are more categories than colours
PALETTE: tuple[tuple[str, str], ...] = (
    ("rgba(255,99,132,0.2)", "rgba(255,99,132,1)"),
    ("rgba(54,162,235,0.2)", "rgba(54,162,235,1)"),
    ("rgba(255,206,86,0.2)", "rgba(255,206,86,1)"),
    ("rgba(75,192,192,0.2)", "rgba(75,192,192,1)"),
    ("rgba(153,102,255,0.2)", "rgba(153,102,255,1)"),
    ("rgba(255,159,64,0.2)", "rgba(255,159,64,1)"),
)


@dataclass(frozen=True, slots=True)
class ChartDataset:
    label: str
    data: tuple[float, ...]
    background_color: str | tuple[str, ...]
    border_color: str | tuple[str, ...]
    border_width: int = 1


@dataclass(frozen=True, slots=True)
class ChartData:
    labels: tuple[str, ...]
    datasets: tuple[ChartDataset, ...]

    @property
    def is_empty(self) -> bool:
        return not self.labels


@dataclass(frozen=True, slots=True)
class DashboardCharts:
    duration: ChartData
    frequency: ChartData
    category_duration: ChartData
    category_frequency: ChartData


def palette_colors(count: int) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Fill and border colours for ``count`` slices."""
    pairs = [PALETTE[index % len(PALETTE)] for index in range(count)]
    return tuple(fill for fill, _ in pairs), tuple(border for _, border in pairs)


def _labels(values: Sequence[object]) -> tuple[str, ...]:
    return tuple("" if pd.isna(value) else str(value) for value in values)


def _numbers(series: pd.Series) -> tuple[float, ...]:
    return tuple(float(value) for value in series)


def duration_chart_data(top_duration: pd.DataFrame) -> ChartData:
    """One bar per fault, labelled by code; repeated codes stay repeated."""
    return ChartData(
        labels=_labels(top_duration.get("code", pd.Series(dtype="object")).tolist()),
        datasets=(
            ChartDataset(
                label="Duration (seconds)",
                data=_numbers(top_duration.get("duration_seconds", pd.Series(dtype="float"))),
                background_color=DURATION_FILL,
                border_color=DURATION_BORDER,
            ),
        ),
    )


def frequency_chart_data(top_frequency: pd.DataFrame) -> ChartData:
    return ChartData(
        labels=_labels(top_frequency.get("code", pd.Series(dtype="object")).tolist()),
        datasets=(
            ChartDataset(
                label="Frequency",
                data=_numbers(top_frequency.get("count", pd.Series(dtype="int64"))),
                background_color=FREQUENCY_FILL,
                border_color=FREQUENCY_BORDER,
            ),
        ),
    )


def _category_chart(categories: pd.DataFrame, *, value_column: str, label: str) -> ChartData:
    labels = _labels(categories.get("category", pd.Series(dtype="string")).tolist())
    fills, borders = palette_colors(len(labels))
    return ChartData(
        labels=labels,
        datasets=(
            ChartDataset(
                label=label,
                data=_numbers(categories.get(value_column, pd.Series(dtype="float"))),
                background_color=fills,
                border_color=borders,
            ),
        ),
    )


def category_duration_chart_data(categories: pd.DataFrame) -> ChartData:
    return _category_chart(categories, value_column="duration_seconds", label="Duration")


def category_frequency_chart_data(categories: pd.DataFrame) -> ChartData:
    return _category_chart(categories, value_column="count", label="Frequency")


def build_dashboard_charts(view: DerivedView) -> DashboardCharts:
    return DashboardCharts(
        duration=duration_chart_data(view.top_duration),
        frequency=frequency_chart_data(view.top_frequency),
        category_duration=category_duration_chart_data(view.categories),
        category_frequency=category_frequency_chart_data(view.categories),
    )
