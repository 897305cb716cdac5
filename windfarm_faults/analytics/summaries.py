"""Headline statistics for the filtered faults."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd


@dataclass(slots=True)
class FaultSummary:
    """Tiles shown above the charts."""

    total_faults: int
    total_duration_seconds: float
    total_duration: str


def format_duration(seconds: float) -> str:
    """
    Render elapsed seconds as ``HH:MM:SS``.

    Hours keep counting past 24 (``90000`` seconds is ``25:00:00``); this is an
    elapsed time, not a time of day.
    """
    if seconds is None or pd.isna(seconds) or seconds <= 0 or math.isinf(seconds):
        return "00:00:00"
    whole = int(round(seconds))
    hours, remainder = divmod(whole, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def build_summary(df: pd.DataFrame) -> FaultSummary:
    if df.empty:
        return FaultSummary(total_faults=0, total_duration_seconds=0.0, total_duration=format_duration(0))

    total_seconds = float(df["duration_seconds"].sum())
    return FaultSummary(
        total_faults=int(len(df)),
        total_duration_seconds=total_seconds,
        total_duration=format_duration(total_seconds),
    )


def summary_to_frame(summary: FaultSummary) -> pd.DataFrame:
    """Two-column Metric/Value table for display and exports."""
    return pd.DataFrame(
        [
            {"Metric": "Total faults", "Value": f"{summary.total_faults:,}"},
            {"Metric": "Total duration", "Value": summary.total_duration},
            {"Metric": "Total duration (seconds)", "Value": f"{summary.total_duration_seconds:,.0f}"},
        ]
    )
