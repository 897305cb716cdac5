"""Filtering, aggregation and charting helpers for the fault collections."""

from .preparation import prepare_devices, prepare_faults, join_devices
from .filters import (
    FilterCriteria,
    apply_criteria,
    combine_picker,
    date_range_from_pickers,
    device_options,
    effective_date_range,
    filter_faults,
)
from .breakdowns import category_breakdown, top_codes_by_frequency, top_faults_by_duration
from .summaries import FaultSummary, build_summary, format_duration, summary_to_frame
from .pipeline import DerivedView, build_derived_view
from .chart_data import ChartData, ChartDataset, DashboardCharts, build_dashboard_charts, palette_colors
from .table import FAULT_COLUMNS, ColumnSpec, TablePage, TableState, build_fault_table, render_table
from .timeseries import build_fault_time_series
from .visuals import (
    build_bar_chart,
    build_pie_chart,
    build_fault_trend_chart,
    create_duration_distribution_plot,
)

__all__ = [
    "prepare_devices",
    "prepare_faults",
    "join_devices",
    "FilterCriteria",
    "apply_criteria",
    "combine_picker",
    "date_range_from_pickers",
    "device_options",
    "effective_date_range",
    "filter_faults",
    "category_breakdown",
    "top_codes_by_frequency",
    "top_faults_by_duration",
    "FaultSummary",
    "build_summary",
    "format_duration",
    "summary_to_frame",
    "DerivedView",
    "build_derived_view",
    "ChartData",
    "ChartDataset",
    "DashboardCharts",
    "build_dashboard_charts",
    "palette_colors",
    "FAULT_COLUMNS",
    "ColumnSpec",
    "TablePage",
    "TableState",
    "build_fault_table",
    "render_table",
    "build_fault_time_series",
    "build_bar_chart",
    "build_pie_chart",
    "build_fault_trend_chart",
    "create_duration_distribution_plot",
]
