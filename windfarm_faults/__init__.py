"""Wind-farm fault analytics package."""

from .analytics.filters import FilterCriteria, apply_criteria
from .analytics.pipeline import DerivedView, build_derived_view
from .analytics.preparation import prepare_devices, prepare_faults
from .data_loader import DataLoadError, LoadedData, load_datasets, load_devices, load_faults
from .state import DashboardState

__all__ = [
    "FilterCriteria",
    "apply_criteria",
    "DerivedView",
    "build_derived_view",
    "prepare_devices",
    "prepare_faults",
    "DataLoadError",
    "LoadedData",
    "load_datasets",
    "load_devices",
    "load_faults",
    "DashboardState",
]
