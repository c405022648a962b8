"""Graphics features a rule can blacklist."""

from __future__ import annotations

from enum import Flag
from typing import Iterable


class GpuFeature(Flag):
    NONE = 0
    ACCELERATED_2D_CANVAS = 1 << 0
    ACCELERATED_COMPOSITING = 1 << 1
    WEBGL = 1 << 2
    MULTISAMPLING = 1 << 3
    FLASH_3D = 1 << 4
    FLASH_STAGE3D = 1 << 5
    ALL = (
        ACCELERATED_2D_CANVAS
        | ACCELERATED_COMPOSITING
        | WEBGL
        | MULTISAMPLING
        | FLASH_3D
        | FLASH_STAGE3D
    )


FEATURE_NAMES: dict[str, GpuFeature] = {
    "accelerated_2d_canvas": GpuFeature.ACCELERATED_2D_CANVAS,
    "accelerated_compositing": GpuFeature.ACCELERATED_COMPOSITING,
    "webgl": GpuFeature.WEBGL,
    "multisampling": GpuFeature.MULTISAMPLING,
    "flash_3d": GpuFeature.FLASH_3D,
    "flash_stage3d": GpuFeature.FLASH_STAGE3D,
    "all": GpuFeature.ALL,
}


def feature_from_name(name: str) -> GpuFeature | None:
    return FEATURE_NAMES.get(name)


def features_from_names(names: Iterable[str]) -> tuple[GpuFeature, list[str]]:
    """Return the combined mask and the names that were not recognised."""
    mask = GpuFeature.NONE
    unknown: list[str] = []
    for name in names:
        feature = feature_from_name(name)
        if feature is None:
            unknown.append(name)
            continue
        mask |= feature
    return mask, unknown


def feature_names(mask: GpuFeature) -> list[str]:
    if mask == GpuFeature.ALL:
        return ["all"]
    return [
        name
        for name, feature in FEATURE_NAMES.items()
        if feature != GpuFeature.ALL and feature in mask and feature != GpuFeature.NONE
    ]
