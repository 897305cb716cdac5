from __future__ import annotations

import pandas as pd
import pytest

from windfarm_faults.analytics.preparation import prepare_devices, prepare_faults
from windfarm_faults.analytics.table import (
    FAULT_COLUMNS,
    TableState,
    apply_text_filters,
    build_fault_table,
    format_timestamp,
    paginate,
    render_table,
    sort_table,
)


def _sample_table() -> pd.DataFrame:
    devices = prepare_devices([{"id": 1, "asset": "Minneapolis", "device_name": "T1"}])
    faults = prepare_faults(
        [
            {
                "device_id": 1,
                "time_stamp": "2024-01-01T08:05:09Z",
                "resolution_time_stamp": "2024-01-01T09:00:00Z",
                "duration_seconds": 3291,
                "code": 120,
                "description": "Pitch system fault",
                "category": "Pitch",
            },
            {
                "device_id": 7,
                "time_stamp": "2024-01-02T00:00:00Z",
                "resolution_time_stamp": None,
                "duration_seconds": 45,
                "code": 310,
                "description": "Yaw misalignment",
                "category": "Yaw",
            },
        ]
    )
    return build_fault_table(faults, devices)


def _numbered_table(rows: int) -> pd.DataFrame:
    return pd.DataFrame({"Alarm Code": range(rows), "Description": [f"fault {index}" for index in range(rows)]})


def test_fault_table_columns_and_formatting():
    table = _sample_table()

    assert list(table.columns) == [column.header for column in FAULT_COLUMNS]
    first = table.iloc[0]
    assert first["Date"] == "2024-01-01 08:05:09"
    assert first["Resolution Time"] == "2024-01-01 09:00:00"
    assert first["Device Name"] == "T1"
    assert first["Alarm Code"] == 120


def test_fault_table_blanks_unresolved_device_and_missing_time():
    second = _sample_table().iloc[1]
    assert second["Device Name"] == ""
    assert second["Resolution Time"] == ""


def test_format_timestamp_missing_values():
    assert format_timestamp(pd.NaT) == ""
    assert format_timestamp(None) == ""


def test_text_filters_are_case_insensitive_contains():
    table = _sample_table()
    assert apply_text_filters(table, {"Description": "PITCH"})["Alarm Code"].tolist() == [120]
    assert apply_text_filters(table, {"Alarm Code": "31"})["Alarm Code"].tolist() == [310]
    assert len(apply_text_filters(table, {"Description": "  "})) == 2
    with pytest.raises(KeyError):
        apply_text_filters(table, {"Nope": "x"})


def test_sort_table_orders_by_column():
    table = _sample_table()
    ordered = sort_table(table, "Duration (seconds)", ascending=True)
    assert ordered["Alarm Code"].tolist() == [310, 120]
    assert sort_table(table, None) is table


def test_sort_table_handles_mixed_numeric_and_text_codes():
    table = pd.DataFrame({"Alarm Code": [200, "A7", None, 100], "Description": ["b", "c", "d", "a"]})

    ordered = sort_table(table, "Alarm Code")

    assert ordered["Description"].tolist() == ["a", "b", "c", "d"]
    assert ordered["Alarm Code"].tolist()[:3] == [100, 200, "A7"]


def test_paginate_clamps_pages():
    table = _numbered_table(25)

    page = paginate(table, 3)
    assert page.page_count == 3
    assert page.total_rows == 25
    assert page.rows["Alarm Code"].tolist() == [20, 21, 22, 23, 24]

    assert paginate(table, 99).page == 3
    assert paginate(table, 0).rows["Alarm Code"].tolist() == list(range(10))

    with pytest.raises(ValueError):
        paginate(table, 1, page_size=0)


def test_paginate_empty_table_has_one_page():
    page = paginate(_numbered_table(0))
    assert page.page == 1
    assert page.page_count == 1
    assert page.rows.empty


def test_render_table_filters_then_sorts_then_pages():
    table = _numbered_table(30)
    state = TableState(sort_by="Alarm Code", ascending=False, text_filters={"Description": "fault 1"}, page=2)
    page = render_table(table, state)

    # "fault 1" matches 1 and 10-19
    assert page.total_rows == 11
    assert page.page_count == 2
    assert page.rows["Alarm Code"].tolist() == [1]
