"""Normalisation of raw device and fault records."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from ..config import DEVICE_COLUMNS, FAULT_COLUMNS

TIMESTAMP_COLUMNS = ("time_stamp", "resolution_time_stamp")
UNCATEGORIZED = "Uncategorized"

Records = pd.DataFrame | Iterable[Mapping[str, Any]]


def _as_frame(records: Records, columns: Iterable[str]) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        frame = records.copy()
    else:
        frame = pd.DataFrame.from_records(list(records))
    for column in columns:
        if column not in frame.columns:
            frame[column] = pd.NA
    return frame.reset_index(drop=True)


def parse_timestamp_series(series: pd.Series) -> pd.Series:
    """Parse to timezone-naive UTC; unparseable values become ``NaT``."""
    parsed = pd.to_datetime(series, errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_convert(None)


def to_naive_utc(value: Any) -> pd.Timestamp | None:
    """Coerce a picker/CLI value to the same timestamp space as the fault data."""
    if value is None:
        return None
    stamp = pd.Timestamp(value)
    if pd.isna(stamp):
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC").tz_localize(None)
    return stamp


def _coerce_code(series: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce")
    present = numeric[series.notna()]
    if not present.empty and present.notna().all() and bool((present % 1 == 0).all()):
        return numeric.astype("Int64")
    return series


def _code_text(series: pd.Series) -> pd.Series:
    return series.map(lambda value: "" if pd.isna(value) else str(value)).astype("string")


def prepare_devices(records: Records) -> pd.DataFrame:
    """Return a device frame with ``id``, ``asset`` and ``device_name`` guaranteed."""
    working = _as_frame(records, DEVICE_COLUMNS)
    for column in ("asset", "device_name"):
        working[column] = working[column].astype("string")
    return working


def prepare_faults(records: Records) -> pd.DataFrame:
    """
    Return a normalised copy of the fault collection ready for filtering.

    * timestamps parsed to timezone-naive UTC
    * ``duration_seconds`` as non-negative float (missing counts as zero)
    * ``code`` as nullable integer when every code is integral, plus ``code_text``
    * missing ``category`` labelled ``Uncategorized``
    """
    working = _as_frame(records, FAULT_COLUMNS)
    if working.empty:
        working["code_text"] = pd.Series(dtype="string")
        return working

    for column in TIMESTAMP_COLUMNS:
        working[column] = parse_timestamp_series(working[column])

    working["duration_seconds"] = (
        pd.to_numeric(working["duration_seconds"], errors="coerce").fillna(0.0).astype(float).clip(lower=0.0)
    )
    working["code"] = _coerce_code(working["code"])
    working["code_text"] = _code_text(working["code"])
    working["category"] = working["category"].fillna(UNCATEGORIZED).astype("string")
    working["description"] = working["description"].astype("string")
    return working


def build_device_index(devices: pd.DataFrame) -> pd.DataFrame:
    """Index devices by id; repeated ids resolve to their first occurrence."""
    if devices.empty:
        return pd.DataFrame(columns=["asset", "device_name"], index=pd.Index([], name="id"))
    unique = devices.dropna(subset=["id"]).drop_duplicates(subset=["id"], keep="first")
    return unique.set_index("id")[["asset", "device_name"]]


def join_devices(devices: pd.DataFrame, faults: pd.DataFrame) -> pd.DataFrame:
    """Attach ``asset`` and ``device_name`` to each fault; unresolved ids get ``NA``."""
    joined = faults.copy()
    index = build_device_index(devices)
    joined["asset"] = joined["device_id"].map(index["asset"]).astype("string")
    joined["device_name"] = joined["device_id"].map(index["device_name"]).astype("string")
    return joined
