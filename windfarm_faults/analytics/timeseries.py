"""Fault volume over time with a linear trend."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm

_COLUMNS = ["period", "fault_count", "duration_seconds", "trend"]


@dataclass(slots=True)
class TimeSeriesResult:
    frame: pd.DataFrame
    model_summary: str | None
    slope: float | None


def _empty_result() -> TimeSeriesResult:
    return TimeSeriesResult(frame=pd.DataFrame(columns=_COLUMNS), model_summary=None, slope=None)


def build_fault_time_series(df: pd.DataFrame, freq: str = "D") -> TimeSeriesResult:
    """Resample faults by ``time_stamp`` and fit an OLS trend once there are three periods."""
    if df.empty or "time_stamp" not in df.columns:
        return _empty_result()

    stamped = df.dropna(subset=["time_stamp"])
    if stamped.empty:
        return _empty_result()

    indexed = stamped.set_index(pd.DatetimeIndex(stamped["time_stamp"])).sort_index()
    resampled = indexed.resample(freq)
    frame = pd.DataFrame(
        {
            "fault_count": resampled.size(),
            "duration_seconds": resampled["duration_seconds"].sum().astype(float),
        }
    )
    frame.index.name = "period"
    frame = frame.reset_index()
    frame["fault_count"] = frame["fault_count"].astype(int)
    frame["trend"] = np.nan

    model_summary = None
    slope = None
    if len(frame) >= 3:
        x = np.arange(len(frame), dtype=float)
        X = sm.add_constant(x)
        model = sm.OLS(frame["fault_count"].astype(float), X).fit()
        frame["trend"] = model.predict(X)
        model_summary = model.summary().as_text()
        slope = float(model.params.iloc[1]) if len(model.params) > 1 else None

    return TimeSeriesResult(frame=frame[_COLUMNS], model_summary=model_summary, slope=slope)
