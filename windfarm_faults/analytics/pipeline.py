"""Derive every dashboard view from one snapshot of data and criteria."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from ..config import TOP_N
from .breakdowns import category_breakdown, top_codes_by_frequency, top_faults_by_duration
from .filters import FilterCriteria, filter_faults
from .summaries import FaultSummary, build_summary


@dataclass(slots=True)
class DerivedView:
    criteria: FilterCriteria
    faults: pd.DataFrame
    top_duration: pd.DataFrame
    top_frequency: pd.DataFrame
    categories: pd.DataFrame
    summary: FaultSummary


def build_derived_view(
    devices: pd.DataFrame,
    faults: pd.DataFrame,
    criteria: FilterCriteria,
    *,
    top_n: int = TOP_N,
) -> DerivedView:
    """
    Filter prepared faults and compute all aggregates over the filtered rows.

    Pure with respect to its inputs: neither frame is modified and nothing is cached,
    so calling it twice with the same snapshot yields equal views.
    """
    filtered = filter_faults(devices, faults, criteria)
    return DerivedView(
        criteria=criteria,
        faults=filtered,
        top_duration=top_faults_by_duration(filtered, top_n=top_n),
        top_frequency=top_codes_by_frequency(filtered, top_n=top_n),
        categories=category_breakdown(filtered),
        summary=build_summary(filtered),
    )
