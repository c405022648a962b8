from gpu_blacklist.criteria.matchers import (
    FloatRangeCriterion,
    OsCriterion,
    StringCriterion,
    VersionCriterion,
)
from gpu_blacklist.criteria.models import (
    MultiGpuStyle,
    NumericOp,
    OsType,
    StringOp,
    VersionStyle,
)

__all__ = [
    "FloatRangeCriterion",
    "MultiGpuStyle",
    "NumericOp",
    "OsCriterion",
    "OsType",
    "StringCriterion",
    "StringOp",
    "VersionCriterion",
    "VersionStyle",
]
