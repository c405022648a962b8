"""The hardware/driver snapshot rules are evaluated against."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from gpu_blacklist.errors import InvalidHardwareSnapshotError

_HEX_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]+$")
_MAX_ID = 0xFFFFFFFF


def parse_hex_id(raw: str) -> int | None:
    text = raw.strip()
    if not _HEX_RE.match(text):
        return None
    value = int(text, 16)
    if value > _MAX_ID:
        return None
    return value


@dataclass(frozen=True)
class PerformanceStats:
    """Scores from the platform assessment tool; 0.0 means not measured."""

    graphics: float = 0.0
    gaming: float = 0.0
    overall: float = 0.0


@dataclass(frozen=True)
class HardwareSnapshot:
    vendor_id: int = 0
    device_id: int = 0
    optimus: bool = False
    amd_switchable: bool = False
    driver_vendor: str = ""
    driver_version: str = ""
    driver_date: str = ""
    gl_vendor: str = ""
    gl_renderer: str = ""
    performance: PerformanceStats = field(default_factory=PerformanceStats)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> HardwareSnapshot:
        if not isinstance(payload, Mapping):
            raise InvalidHardwareSnapshotError("<root>", "expected an object")
        return cls(
            vendor_id=_id_field(payload, "vendor_id"),
            device_id=_id_field(payload, "device_id"),
            optimus=_bool_field(payload, "optimus"),
            amd_switchable=_bool_field(payload, "amd_switchable"),
            driver_vendor=_str_field(payload, "driver_vendor"),
            driver_version=_str_field(payload, "driver_version"),
            driver_date=_str_field(payload, "driver_date"),
            gl_vendor=_str_field(payload, "gl_vendor"),
            gl_renderer=_str_field(payload, "gl_renderer"),
            performance=_performance_field(payload.get("performance")),
        )


def _id_field(payload: Mapping[str, Any], key: str) -> int:
    raw = payload.get(key, 0)
    if isinstance(raw, bool):
        raise InvalidHardwareSnapshotError(key, "expected hex string or integer")
    if isinstance(raw, int):
        if 0 <= raw <= _MAX_ID:
            return raw
        raise InvalidHardwareSnapshotError(key, "out of range")
    if isinstance(raw, str):
        value = parse_hex_id(raw)
        if value is None:
            raise InvalidHardwareSnapshotError(key, f"malformed hex id {raw!r}")
        return value
    raise InvalidHardwareSnapshotError(key, "expected hex string or integer")


def _bool_field(payload: Mapping[str, Any], key: str) -> bool:
    raw = payload.get(key, False)
    if not isinstance(raw, bool):
        raise InvalidHardwareSnapshotError(key, "expected boolean")
    return raw


def _str_field(payload: Mapping[str, Any], key: str) -> str:
    raw = payload.get(key, "")
    if not isinstance(raw, str):
        raise InvalidHardwareSnapshotError(key, "expected string")
    return raw


def _performance_field(raw: Any) -> PerformanceStats:
    if raw is None:
        return PerformanceStats()
    if not isinstance(raw, Mapping):
        raise InvalidHardwareSnapshotError("performance", "expected an object")
    values: dict[str, float] = {}
    for key in ("graphics", "gaming", "overall"):
        value = raw.get(key, 0.0)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidHardwareSnapshotError(f"performance.{key}", "expected number")
        values[key] = float(value)
    return PerformanceStats(**values)
