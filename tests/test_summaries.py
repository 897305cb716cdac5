from __future__ import annotations

import pandas as pd

from windfarm_faults.analytics.preparation import prepare_faults
from windfarm_faults.analytics.summaries import build_summary, format_duration, summary_to_frame


def test_format_duration_uses_elapsed_time():
    assert format_duration(120) == "00:02:00"
    assert format_duration(3661) == "01:01:01"
    assert format_duration(90000) == "25:00:00"
    assert format_duration(59.6) == "00:01:00"


def test_format_duration_degenerate_values():
    assert format_duration(0) == "00:00:00"
    assert format_duration(-10) == "00:00:00"
    assert format_duration(float("nan")) == "00:00:00"


def test_build_summary_counts_and_sums():
    faults = prepare_faults(
        [
            {"device_id": 1, "code": 100, "duration_seconds": 30},
            {"device_id": 1, "code": 100, "duration_seconds": 90},
        ]
    )
    summary = build_summary(faults)
    assert summary.total_faults == 2
    assert summary.total_duration_seconds == 120.0
    assert summary.total_duration == "00:02:00"


def test_build_summary_for_no_faults():
    summary = build_summary(pd.DataFrame())
    assert summary.total_faults == 0
    assert summary.total_duration == "00:00:00"


def test_summary_to_frame_lists_metrics():
    faults = prepare_faults([{"device_id": 1, "code": 1, "duration_seconds": 4000}])
    frame = summary_to_frame(build_summary(faults))
    assert list(frame.columns) == ["Metric", "Value"]
    values = dict(zip(frame["Metric"], frame["Value"]))
    assert values["Total faults"] == "1"
    assert values["Total duration"] == "01:06:40"
