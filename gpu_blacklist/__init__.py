from gpu_blacklist.blacklist import GpuBlacklist
from gpu_blacklist.errors import BlacklistError, LoadFailure
from gpu_blacklist.features import GpuFeature
from gpu_blacklist.hardware import HardwareSnapshot, PerformanceStats
from gpu_blacklist.loader import RuleSetLoader, load_rule_set
from gpu_blacklist.models import Evaluation, LoadReport, OsFilter, RuleSet

__all__ = [
    "BlacklistError",
    "Evaluation",
    "GpuBlacklist",
    "GpuFeature",
    "HardwareSnapshot",
    "LoadFailure",
    "LoadReport",
    "OsFilter",
    "PerformanceStats",
    "RuleSet",
    "RuleSetLoader",
    "load_rule_set",
]
