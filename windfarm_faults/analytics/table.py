"""Fault table: column descriptors, per-column text filters, sorting and paging."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

import pandas as pd

from ..config import PAGE_SIZE, TIMESTAMP_FORMAT
from .preparation import join_devices


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """
    One displayed column.

    ``formatter`` maps the raw ``field`` value to its display value;
    ``value_getter`` derives the value from the whole row instead of ``field``.
    """

    header: str
    field: str
    formatter: Callable[[Any], Any] | None = None
    value_getter: Callable[[Mapping[str, Any]], Any] | None = None


@dataclass(slots=True)
class TablePage:
    rows: pd.DataFrame
    page: int
    page_count: int
    total_rows: int


@dataclass(slots=True)
class TableState:
    sort_by: str | None = None
    ascending: bool = True
    text_filters: dict[str, str] = field(default_factory=dict)
    page: int = 1
    page_size: int = PAGE_SIZE


def format_timestamp(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    return pd.Timestamp(value).strftime(TIMESTAMP_FORMAT)


def resolved_device_name(row: Mapping[str, Any]) -> str:
    name = row.get("device_name")
    if name is None or pd.isna(name):
        return ""
    return str(name)


FAULT_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Date", "time_stamp", formatter=format_timestamp),
    ColumnSpec("Duration (seconds)", "duration_seconds"),
    ColumnSpec("Alarm Code", "code"),
    ColumnSpec("Description", "description"),
    ColumnSpec("Device Name", "device_name", value_getter=resolved_device_name),
    ColumnSpec("Category", "category"),
    ColumnSpec("Resolution Time", "resolution_time_stamp", formatter=format_timestamp),
)


def build_fault_table(
    faults: pd.DataFrame,
    devices: pd.DataFrame | None = None,
    columns: Sequence[ColumnSpec] = FAULT_COLUMNS,
) -> pd.DataFrame:
    """
    Project faults onto the display columns.

    When ``devices`` is given the device join is (re)done here; otherwise the
    faults are expected to carry ``device_name`` from :func:`filter_faults`.
    """
    source = join_devices(devices, faults) if devices is not None else faults
    headers = [column.header for column in columns]
    if source.empty:
        return pd.DataFrame(columns=headers)

    data: dict[str, pd.Series] = {}
    records = source.to_dict("records")
    for column in columns:
        if column.value_getter is not None:
            values = pd.Series([column.value_getter(record) for record in records], index=source.index)
        else:
            values = source.get(column.field, pd.Series(pd.NA, index=source.index))
            if column.formatter is not None:
                values = values.map(column.formatter)
        data[column.header] = values
    return pd.DataFrame(data, columns=headers).reset_index(drop=True)


def apply_text_filters(table: pd.DataFrame, filters: Mapping[str, str]) -> pd.DataFrame:
    """Keep rows whose displayed text contains every filter (case-insensitive)."""
    mask = pd.Series(True, index=table.index)
    for header, text in filters.items():
        if header not in table.columns:
            raise KeyError(f"Unknown table column: {header!r}")
        needle = (text or "").strip()
        if not needle or table.empty:
            continue
        shown = table[header].map(lambda value: "" if value is None or pd.isna(value) else str(value))
        mask &= shown.str.contains(needle, case=False, regex=False)
    return table.loc[mask].reset_index(drop=True)


def _sort_key(values: pd.Series) -> pd.Series:
    # Mixed-type columns (numeric and text codes) order by their displayed text.
    if values.dtype == object:
        return values.map(lambda value: value if pd.isna(value) else str(value))
    return values


def sort_table(table: pd.DataFrame, column: str | None, *, ascending: bool = True) -> pd.DataFrame:
    if column is None:
        return table
    if column not in table.columns:
        raise KeyError(f"Unknown table column: {column!r}")
    ordered = table.sort_values(column, ascending=ascending, kind="stable", na_position="last", key=_sort_key)
    return ordered.reset_index(drop=True)


def paginate(table: pd.DataFrame, page: int = 1, *, page_size: int = PAGE_SIZE) -> TablePage:
    """Slice one page; out-of-range page numbers are clamped."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    total = len(table)
    page_count = max(1, math.ceil(total / page_size))
    current = min(max(1, int(page)), page_count)
    start = (current - 1) * page_size
    rows = table.iloc[start : start + page_size].reset_index(drop=True)
    return TablePage(rows=rows, page=current, page_count=page_count, total_rows=total)


def render_table(table: pd.DataFrame, state: TableState) -> TablePage:
    """Filter, then sort, then page: the order a grid applies them in."""
    filtered = apply_text_filters(table, state.text_filters)
    ordered = sort_table(filtered, state.sort_by, ascending=state.ascending)
    return paginate(ordered, state.page, page_size=state.page_size)
