"""Decide whether an entry applies to a hardware snapshot."""

from __future__ import annotations

from typing import Optional

from gpu_blacklist.criteria.matchers import FloatRangeCriterion
from gpu_blacklist.criteria.models import MultiGpuStyle, OsType
from gpu_blacklist.entries.models import Entry
from gpu_blacklist.hardware import HardwareSnapshot
from gpu_blacklist.version import Version, date_to_version, numerical_to_lexical


def _performance_matches(criterion: Optional[FloatRangeCriterion], value: float) -> bool:
    if criterion is None:
        return True
    # Unmeasured scores never satisfy a performance criterion.
    if value == 0.0:
        return False
    return criterion.contains(value)


def entry_contains(
    entry: Entry,
    os_type: OsType,
    os_version: Optional[Version],
    hardware: HardwareSnapshot,
) -> bool:
    if entry.os is not None and not entry.os.contains(os_type, os_version):
        return False
    if entry.vendor_id != 0 and entry.vendor_id != hardware.vendor_id:
        return False
    if entry.device_ids and hardware.device_id not in entry.device_ids:
        return False
    if entry.multi_gpu_style == MultiGpuStyle.OPTIMUS and not hardware.optimus:
        return False
    if entry.multi_gpu_style == MultiGpuStyle.AMD_SWITCHABLE and not hardware.amd_switchable:
        return False
    if entry.driver_vendor is not None and not entry.driver_vendor.contains(
        hardware.driver_vendor
    ):
        return False
    if entry.driver_version is not None:
        driver_version = hardware.driver_version
        if entry.driver_version.is_lexical:
            driver_version = numerical_to_lexical(driver_version)
        parsed = Version.parse(driver_version)
        if parsed is None or not entry.driver_version.contains(parsed):
            return False
    if entry.driver_date is not None:
        parsed_date = date_to_version(hardware.driver_date)
        if parsed_date is None or not entry.driver_date.contains(parsed_date):
            return False
    if entry.gl_vendor is not None and not entry.gl_vendor.contains(hardware.gl_vendor):
        return False
    if entry.gl_renderer is not None and not entry.gl_renderer.contains(
        hardware.gl_renderer
    ):
        return False
    performance = hardware.performance
    if not _performance_matches(entry.perf_graphics, performance.graphics):
        return False
    if not _performance_matches(entry.perf_gaming, performance.gaming):
        return False
    if not _performance_matches(entry.perf_overall, performance.overall):
        return False
    return not any(
        entry_contains(exception, os_type, os_version, hardware)
        for exception in entry.exceptions
    )
