from __future__ import annotations

import json

import pandas as pd

from windfarm_faults.analytics.filters import FilterCriteria
from windfarm_faults.analytics.pipeline import build_derived_view
from windfarm_faults.analytics.preparation import prepare_devices, prepare_faults
from windfarm_faults.data_loader import load_devices, load_faults


def _scenario() -> tuple[pd.DataFrame, pd.DataFrame]:
    devices = prepare_devices([{"id": 1, "asset": "Minneapolis", "device_name": "T1"}])
    faults = prepare_faults(
        [
            {"device_id": 1, "code": 100, "duration_seconds": 30, "time_stamp": "2024-01-01T00:00:00Z", "category": "A"},
            {"device_id": 1, "code": 100, "duration_seconds": 90, "time_stamp": "2024-01-02T00:00:00Z", "category": "A"},
        ]
    )
    return devices, faults


def test_two_fault_scenario():
    devices, faults = _scenario()
    view = build_derived_view(devices, faults, FilterCriteria(site="Minneapolis"))

    assert len(view.faults) == 2
    assert view.summary.total_duration_seconds == 120.0
    assert view.summary.total_duration == "00:02:00"
    assert view.top_frequency.to_dict("records") == [{"code": 100, "count": 2}]
    assert view.categories.set_index("category").loc["A", "duration_seconds"] == 120.0
    assert view.top_duration["duration_seconds"].tolist() == [90.0, 30.0]


def test_unknown_device_name_yields_empty_view():
    devices, faults = _scenario()
    view = build_derived_view(devices, faults, FilterCriteria(site="Minneapolis", device_name="T2"))

    assert view.faults.empty
    assert view.summary.total_faults == 0
    assert view.top_duration.empty
    assert view.top_frequency.empty
    assert view.categories.empty


def test_view_is_idempotent_and_leaves_inputs_untouched():
    devices, faults = _scenario()
    devices_before, faults_before = devices.copy(), faults.copy()
    criteria = FilterCriteria(site="Minneapolis", code="100")

    first = build_derived_view(devices, faults, criteria)
    second = build_derived_view(devices, faults, criteria)

    pd.testing.assert_frame_equal(first.faults, second.faults)
    pd.testing.assert_frame_equal(first.top_frequency, second.top_frequency)
    pd.testing.assert_frame_equal(first.categories, second.categories)
    assert first.summary == second.summary
    pd.testing.assert_frame_equal(devices, devices_before)
    pd.testing.assert_frame_equal(faults, faults_before)


def test_aggregates_are_computed_over_filtered_rows_only():
    devices = prepare_devices(
        [
            {"id": 1, "asset": "Minneapolis", "device_name": "T1"},
            {"id": 2, "asset": "Colorado", "device_name": "C1"},
        ]
    )
    faults = prepare_faults(
        [
            {"device_id": 1, "code": 1, "duration_seconds": 10, "category": "A"},
            {"device_id": 2, "code": 2, "duration_seconds": 1000, "category": "B"},
        ]
    )
    view = build_derived_view(devices, faults, FilterCriteria(site="Colorado"))

    assert view.summary.total_duration_seconds == 1000.0
    assert view.categories["category"].tolist() == ["B"]
    assert view.top_frequency["code"].tolist() == [2]


def test_loader_output_feeds_the_view_directly(tmp_path):
    devices_path = tmp_path / "device.json"
    faults_path = tmp_path / "fault.json"
    devices_path.write_text(json.dumps([{"id": 1, "asset": "Minneapolis", "device_name": "T1"}]), encoding="utf-8")
    faults_path.write_text(
        json.dumps(
            [
                {"device_id": 1, "code": 100, "duration_seconds": 30, "time_stamp": "2024-01-01T00:00:00Z", "category": "A"},
                {"device_id": 1, "code": 200, "duration_seconds": 90, "time_stamp": "2024-03-01T00:00:00Z", "category": "B"},
                {"device_id": 1, "code": 100, "duration_seconds": 60, "time_stamp": "2024-01-05T00:00:00Z", "category": "A"},
            ]
        ),
        encoding="utf-8",
    )
    devices, faults = load_devices(devices_path), load_faults(faults_path)
    criteria = FilterCriteria(
        site="Minneapolis",
        code="100",
        date_range=(pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-31")),
    )

    raw_view = build_derived_view(devices, faults, criteria)
    prepared_view = build_derived_view(prepare_devices(devices), prepare_faults(faults), criteria)

    assert raw_view.summary.total_faults == 2
    assert raw_view.summary.total_duration == "00:01:30"
    assert raw_view.summary == prepared_view.summary
    pd.testing.assert_frame_equal(raw_view.faults, prepared_view.faults)
