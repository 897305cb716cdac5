from __future__ import annotations

import numpy as np
import pandas as pd

from windfarm_faults.analytics.breakdowns import (
    category_breakdown,
    top_codes_by_frequency,
    top_faults_by_duration,
)
from windfarm_faults.analytics.preparation import prepare_faults


def _faults(rows: list[tuple[int, float, str]]) -> pd.DataFrame:
    return prepare_faults(
        [{"device_id": 1, "code": code, "duration_seconds": duration, "category": category} for code, duration, category in rows]
    )


def test_top_duration_is_stable_for_ties():
    faults = _faults([(1, 50, "A"), (2, 100, "A"), (3, 50, "B"), (4, 100, "B")])
    top = top_faults_by_duration(faults)
    assert top["code"].tolist() == [2, 4, 1, 3]


def test_top_duration_keeps_repeated_codes():
    faults = _faults([(100, 30, "A"), (100, 90, "A"), (200, 60, "B")])
    top = top_faults_by_duration(faults)
    assert top["code"].tolist() == [100, 200, 100]
    assert top["duration_seconds"].tolist() == [90.0, 60.0, 30.0]


def test_top_lists_are_capped_and_non_increasing():
    rng = np.random.default_rng(7)
    rows = [(int(code), float(duration), "A") for code, duration in zip(rng.integers(1, 15, 40), rng.uniform(0, 500, 40))]
    faults = _faults(rows)

    top_duration = top_faults_by_duration(faults)
    assert len(top_duration) == 10
    assert top_duration["duration_seconds"].is_monotonic_decreasing

    top_frequency = top_codes_by_frequency(faults)
    assert len(top_frequency) <= 10
    assert top_frequency["count"].is_monotonic_decreasing


def test_top_lists_shorter_than_limit_match_input():
    faults = _faults([(1, 5, "A"), (2, 6, "A"), (1, 7, "A")])
    assert len(top_faults_by_duration(faults)) == 3
    assert len(top_codes_by_frequency(faults)) == 2


def test_frequency_ties_keep_first_encountered_code():
    faults = _faults([(7, 1, "A"), (5, 1, "A"), (5, 1, "A"), (7, 1, "A"), (9, 1, "A")])
    top = top_codes_by_frequency(faults)
    assert top["code"].tolist() == [7, 5, 9]
    assert top["count"].tolist() == [2, 2, 1]


def test_category_breakdown_sums_match_totals():
    faults = _faults([(1, 30, "Pitch"), (2, 60, "Yaw"), (3, 90, "Pitch"), (4, 15, "Grid")])
    categories = category_breakdown(faults)

    assert categories["category"].tolist() == ["Pitch", "Yaw", "Grid"]
    assert categories["count"].tolist() == [2, 1, 1]
    assert categories["duration_seconds"].tolist() == [120.0, 60.0, 15.0]
    assert categories["count"].sum() == len(faults)
    assert categories["duration_seconds"].sum() == faults["duration_seconds"].sum()


def test_breakdowns_handle_empty_input():
    empty = prepare_faults([])
    assert top_faults_by_duration(empty).empty
    assert list(top_codes_by_frequency(empty).columns) == ["code", "count"]
    assert list(category_breakdown(empty).columns) == ["category", "duration_seconds", "count"]
