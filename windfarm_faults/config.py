"""Runtime settings for the wind-farm fault dashboard."""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DEVICES_PATH = DATA_DIR / "device.json"
DEFAULT_FAULTS_PATH = DATA_DIR / "fault.json"

SITES = ("Minneapolis", "Colorado")
DEFAULT_SITE = "Minneapolis"
ALL_DEVICES_LABEL = "All"

TOP_N = 10
PAGE_SIZE = 10
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

DEVICE_COLUMNS = ("id", "asset", "device_name")
FAULT_COLUMNS = (
    "device_id",
    "time_stamp",
    "resolution_time_stamp",
    "duration_seconds",
    "code",
    "description",
    "category",
)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def devices_source() -> str:
    return _get_env("WINDFARM_DEVICES_SOURCE", str(DEFAULT_DEVICES_PATH))


def faults_source() -> str:
    return _get_env("WINDFARM_FAULTS_SOURCE", str(DEFAULT_FAULTS_PATH))


def request_timeout() -> float:
    raw = _get_env("WINDFARM_REQUEST_TIMEOUT", "10")
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"WINDFARM_REQUEST_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"WINDFARM_REQUEST_TIMEOUT must be positive, got {raw!r}")
    return timeout


def log_level() -> str:
    return _get_env("WINDFARM_LOG_LEVEL", "INFO").upper()
