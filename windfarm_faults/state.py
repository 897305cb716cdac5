"""Explicit dashboard state passed through each render cycle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

import pandas as pd

from .analytics.filters import FilterCriteria, apply_criteria, device_options
from .analytics.pipeline import DerivedView, build_derived_view
from .analytics.preparation import prepare_devices, prepare_faults
from .data_loader import LoadedData, empty_devices, empty_faults
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class DashboardState:
    """
    Snapshot of loaded collections plus the current criteria.

    Transitions return new states; the UI keeps only the latest one, so a reload
    finishing after a criteria change simply replaces the collections.
    """

    devices: pd.DataFrame = field(default_factory=lambda: prepare_devices(empty_devices()))
    faults: pd.DataFrame = field(default_factory=lambda: prepare_faults(empty_faults()))
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    errors: Mapping[str, str] = field(default_factory=dict)

    def with_criteria(self, patch: Mapping[str, Any]) -> DashboardState:
        return replace(self, criteria=apply_criteria(self.criteria, patch))

    def with_data(self, loaded: LoadedData) -> DashboardState:
        return replace(
            self,
            devices=prepare_devices(loaded.devices),
            faults=prepare_faults(loaded.faults),
            errors=dict(loaded.errors),
        )

    def as_loaded(self) -> LoadedData:
        """The current collections, used as the fallback for a reload."""
        return LoadedData(devices=self.devices, faults=self.faults)

    def device_options(self) -> list[str]:
        return device_options(self.devices, self.criteria.site)

    def derive(self) -> DerivedView:
        logger.debug("Recomputing derived view for %s", self.criteria)
        return build_derived_view(self.devices, self.faults, self.criteria)
