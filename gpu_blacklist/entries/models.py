"""Blacklist entry data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from gpu_blacklist.constants import DEFAULT_DESCRIPTION
from gpu_blacklist.criteria.matchers import (
    FloatRangeCriterion,
    OsCriterion,
    StringCriterion,
    VersionCriterion,
)
from gpu_blacklist.criteria.models import MultiGpuStyle, OsType
from gpu_blacklist.features import GpuFeature


@dataclass(frozen=True)
class Entry:
    """One rule. Exceptions reuse the type without id, mask or exceptions."""

    id: int = 0
    disabled: bool = False
    description: str = DEFAULT_DESCRIPTION
    cr_bugs: tuple[int, ...] = ()
    webkit_bugs: tuple[int, ...] = ()

    os: Optional[OsCriterion] = None
    vendor_id: int = 0
    device_ids: frozenset[int] = frozenset()
    multi_gpu_style: MultiGpuStyle = MultiGpuStyle.NONE
    driver_vendor: Optional[StringCriterion] = None
    driver_version: Optional[VersionCriterion] = None
    driver_date: Optional[VersionCriterion] = None
    gl_vendor: Optional[StringCriterion] = None
    gl_renderer: Optional[StringCriterion] = None
    perf_graphics: Optional[FloatRangeCriterion] = None
    perf_gaming: Optional[FloatRangeCriterion] = None
    perf_overall: Optional[FloatRangeCriterion] = None

    feature_mask: GpuFeature = GpuFeature.NONE
    exceptions: tuple[Entry, ...] = ()

    has_unknown_fields: bool = False
    has_unknown_features: bool = False
    invalid_criteria: tuple[str, ...] = field(default=())

    @property
    def os_type(self) -> OsType:
        if self.os is None:
            return OsType.ANY
        return self.os.type
