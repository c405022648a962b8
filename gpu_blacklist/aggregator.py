"""Run a rule set against a snapshot and collect the features to disable."""

from __future__ import annotations

from typing import Optional

from gpu_blacklist.criteria.models import OsType
from gpu_blacklist.entries.evaluator import entry_contains
from gpu_blacklist.features import GpuFeature
from gpu_blacklist.hardware import HardwareSnapshot
from gpu_blacklist.models import ActiveEntry, Evaluation, RuleSet
from gpu_blacklist.version import Version


def evaluate_rule_set(
    rule_set: RuleSet,
    hardware: HardwareSnapshot,
    os_type: OsType,
    os_version: Optional[Version],
) -> Evaluation:
    mask = GpuFeature.NONE
    active: list[ActiveEntry] = []
    for entry in rule_set.entries:
        if not entry_contains(entry, os_type, os_version, hardware):
            continue
        # Disabled entries stay visible but never contribute features.
        if not entry.disabled:
            mask |= entry.feature_mask
        active.append(ActiveEntry.from_entry(entry))
    return Evaluation(feature_mask=mask, active_entries=tuple(active))
