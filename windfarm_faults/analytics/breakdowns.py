"""Ranked and grouped views over the filtered faults."""

from __future__ import annotations

import pandas as pd

from ..config import TOP_N


def top_faults_by_duration(df: pd.DataFrame, *, top_n: int = TOP_N) -> pd.DataFrame:
    """Longest individual faults; equal durations keep their original order."""
    if df.empty:
        return df.head(0).reset_index(drop=True)
    ordered = df.sort_values("duration_seconds", ascending=False, kind="stable")
    return ordered.head(top_n).reset_index(drop=True)


def top_codes_by_frequency(df: pd.DataFrame, *, top_n: int = TOP_N) -> pd.DataFrame:
    """Most frequent fault codes; equal counts keep first-encountered code order."""
    if df.empty or "code" not in df.columns:
        return pd.DataFrame({"code": pd.Series(dtype="object"), "count": pd.Series(dtype="int64")})

    counts = (
        df.groupby("code", sort=False, dropna=False)
        .size()
        .reset_index(name="count")
        .sort_values("count", ascending=False, kind="stable")
    )
    counts["count"] = counts["count"].astype(int)
    return counts.head(top_n).reset_index(drop=True)


def category_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    """Total duration and fault count per category, in first-encountered order."""
    if df.empty or "category" not in df.columns:
        return pd.DataFrame(
            {
                "category": pd.Series(dtype="string"),
                "duration_seconds": pd.Series(dtype="float"),
                "count": pd.Series(dtype="int64"),
            }
        )

    grouped = df.groupby("category", sort=False, dropna=False).agg(
        duration_seconds=("duration_seconds", "sum"),
        count=("category", "size"),
    )
    result = grouped.reset_index()
    result["duration_seconds"] = result["duration_seconds"].astype(float)
    result["count"] = result["count"].astype(int)
    return result
