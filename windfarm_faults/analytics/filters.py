"""Filter criteria and the join-and-filter step of the fault pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date, datetime, time, timedelta
from typing import Any, Mapping

import pandas as pd

from ..config import DEFAULT_SITE, SITES
from ..logging import get_logger
from .preparation import join_devices, prepare_devices, prepare_faults, to_naive_utc

logger = get_logger(__name__)

DateRange = tuple[pd.Timestamp, pd.Timestamp]


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """User selections that scope the dashboard. ``None`` means "not filtered"."""

    site: str = DEFAULT_SITE
    device_name: str | None = None
    date_range: DateRange | None = None
    code: str | None = None


def _blank_to_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def apply_criteria(old: FilterCriteria, patch: Mapping[str, Any]) -> FilterCriteria:
    """
    Return ``old`` updated with ``patch``.

    Switching site clears the device selection unless the patch also names a device,
    because device options are scoped to the selected site.
    """
    known = {item.name for item in fields(FilterCriteria)}
    unknown = set(patch) - known
    if unknown:
        raise KeyError(f"Unknown criteria fields: {sorted(unknown)}")

    changes: dict[str, Any] = {}
    if "site" in patch:
        site = patch["site"]
        if site not in SITES:
            raise ValueError(f"Unknown site {site!r}; expected one of {SITES}")
        changes["site"] = site
        if site != old.site and "device_name" not in patch:
            changes["device_name"] = None
    if "device_name" in patch:
        changes["device_name"] = _blank_to_none(patch["device_name"])
    if "code" in patch:
        changes["code"] = _blank_to_none(patch["code"])
    if "date_range" in patch:
        date_range = patch["date_range"]
        changes["date_range"] = None if date_range is None else (
            to_naive_utc(date_range[0]),
            to_naive_utc(date_range[1]),
        )
    return replace(old, **changes)


def combine_picker(day: date | None, moment: time, *, end: bool = False) -> datetime | None:
    """
    Join a date picker and a minute-resolution time picker.

    An end value covers the whole picked minute, so faults logged at 23:59:30 are
    still inside a range ending at 23:59.
    """
    if day is None:
        return None
    combined = datetime.combine(day, moment.replace(second=0, microsecond=0))
    if end:
        combined += timedelta(minutes=1, microseconds=-1)
    return combined


def date_range_from_pickers(start: Any, end: Any) -> DateRange | None:
    """Combine two nullable picker values; only a fully specified range filters."""
    start_ts = to_naive_utc(start)
    end_ts = to_naive_utc(end)
    if start_ts is None or end_ts is None:
        return None
    return start_ts, end_ts


def effective_date_range(criteria: FilterCriteria) -> DateRange | None:
    """The range actually applied: reversed or incomplete ranges are ignored."""
    if criteria.date_range is None:
        return None
    start, end = (to_naive_utc(value) for value in criteria.date_range)
    if start is None or end is None:
        return None
    if start > end:
        logger.warning("Ignoring date range with start %s after end %s", start, end)
        return None
    return start, end


def device_options(devices: pd.DataFrame, site: str) -> list[str]:
    """Device names belonging to ``site`` in collection order, without repeats."""
    if devices.empty:
        return []
    names = devices.loc[devices["asset"] == site, "device_name"].dropna().astype(str)
    return list(dict.fromkeys(names))


def filter_faults(devices: pd.DataFrame, faults: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """
    Join faults to their devices and keep those matching every criterion.

    Accepts loader output directly: both collections are normalised first, which
    is a no-op for frames that are already prepared. Faults whose device cannot
    be resolved never match a site and are dropped. The result keeps input order
    and carries ``asset`` and ``device_name`` columns from the join.
    """
    joined = join_devices(prepare_devices(devices), prepare_faults(faults))
    if joined.empty:
        return joined.reset_index(drop=True)

    mask = (joined["asset"] == criteria.site).fillna(False)

    if criteria.device_name is not None:
        mask &= (joined["device_name"] == criteria.device_name).fillna(False)

    date_range = effective_date_range(criteria)
    if date_range is not None:
        start, end = date_range
        mask &= joined["time_stamp"].between(start, end, inclusive="both").fillna(False)

    if criteria.code is not None:
        mask &= (joined["code_text"] == str(criteria.code)).fillna(False)

    result = joined.loc[mask.astype(bool)].reset_index(drop=True)
    logger.debug("Filtered %d of %d faults for %s", len(result), len(joined), criteria)
    return result
