"""Loading of the device and fault collections."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
import requests

from . import config
from .logging import get_logger

logger = get_logger(__name__)

_HTTP_SCHEMES = ("http://", "https://")


class DataLoadError(RuntimeError):
    """A collection could not be retrieved or was not a JSON array of records."""

    def __init__(self, dataset: str, source: str | Path, reason: str) -> None:
        super().__init__(f"Failed to load {dataset} from {source}: {reason}")
        self.dataset = dataset
        self.source = str(source)
        self.reason = reason


@dataclass(slots=True)
class LoadedData:
    devices: pd.DataFrame
    faults: pd.DataFrame
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def empty_devices() -> pd.DataFrame:
    return pd.DataFrame(columns=list(config.DEVICE_COLUMNS))


def empty_faults() -> pd.DataFrame:
    return pd.DataFrame(columns=list(config.FAULT_COLUMNS))


def load_devices(
    source: str | Path | None = None,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> pd.DataFrame:
    """
    Retrieve the device collection.

    Parameters
    ----------
    source:
        URL or JSON file path. Defaults to ``WINDFARM_DEVICES_SOURCE`` or the bundled sample.
    session:
        Optional ``requests.Session`` reused for HTTP sources.
    timeout:
        Request timeout in seconds. Defaults to ``WINDFARM_REQUEST_TIMEOUT``.

    Raises
    ------
    DataLoadError
        On network errors, non-2xx responses, missing files or malformed payloads.
    """
    target = source if source is not None else config.devices_source()
    records = _fetch_records("devices", target, session=session, timeout=timeout)
    return _records_frame(records, config.DEVICE_COLUMNS)


def load_faults(
    source: str | Path | None = None,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> pd.DataFrame:
    """Retrieve the fault collection. Same contract as :func:`load_devices`."""
    target = source if source is not None else config.faults_source()
    records = _fetch_records("faults", target, session=session, timeout=timeout)
    return _records_frame(records, config.FAULT_COLUMNS)


def load_datasets(
    devices_source: str | Path | None = None,
    faults_source: str | Path | None = None,
    *,
    previous: LoadedData | None = None,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> LoadedData:
    """
    Load both collections concurrently; a failure in one never blocks the other.

    Failures are logged and recorded in ``errors``. The failed collection keeps the
    value from ``previous`` when given and is empty otherwise.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="windfarm-load") as pool:
        devices_future = pool.submit(load_devices, devices_source, session=session, timeout=timeout)
        faults_future = pool.submit(load_faults, faults_source, session=session, timeout=timeout)

    errors: dict[str, str] = {}

    try:
        devices = devices_future.result()
    except DataLoadError as exc:
        logger.error("%s", exc)
        errors["devices"] = str(exc)
        devices = previous.devices if previous is not None else empty_devices()

    try:
        faults = faults_future.result()
    except DataLoadError as exc:
        logger.error("%s", exc)
        errors["faults"] = str(exc)
        faults = previous.faults if previous is not None else empty_faults()

    return LoadedData(devices=devices, faults=faults, errors=errors)


def _fetch_records(
    dataset: str,
    source: str | Path,
    *,
    session: requests.Session | None,
    timeout: float | None,
) -> list[dict[str, Any]]:
    text = str(source)
    if text.lower().startswith(_HTTP_SCHEMES):
        payload = _fetch_http(dataset, text, session=session, timeout=timeout)
    else:
        payload = _read_file(dataset, Path(source))

    if not isinstance(payload, list):
        raise DataLoadError(dataset, source, f"expected a JSON array, got {type(payload).__name__}")
    for position, record in enumerate(payload):
        if not isinstance(record, dict):
            raise DataLoadError(dataset, source, f"item {position} is not an object")

    logger.info("Loaded %d %s from %s", len(payload), dataset, source)
    return payload


def _fetch_http(
    dataset: str,
    url: str,
    *,
    session: requests.Session | None,
    timeout: float | None,
) -> Any:
    client = session if session is not None else requests
    try:
        response = client.get(url, timeout=timeout if timeout is not None else config.request_timeout())
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        raise DataLoadError(dataset, url, str(exc)) from exc
    except ValueError as exc:
        raise DataLoadError(dataset, url, f"invalid JSON: {exc}") from exc


def _read_file(dataset: str, path: Path) -> Any:
    if not path.exists():
        raise DataLoadError(dataset, path, "file not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise DataLoadError(dataset, path, str(exc)) from exc


def _records_frame(records: list[dict[str, Any]], columns: tuple[str, ...]) -> pd.DataFrame:
    if not records:
        return pd.DataFrame(columns=list(columns))
    return pd.DataFrame.from_records(records)
