from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from gpu_blacklist.entries.models import Entry
from gpu_blacklist.features import GpuFeature


class OsFilter(str, Enum):
    ALL = "all"
    CURRENT = "current"


class DiagnosticKind(str, Enum):
    ENTRY_DEGRADED = "entry_degraded"
    UNKNOWN_FEATURE = "unknown_feature"
    EXCEPTION_DROPPED = "exception_dropped"
    CRITERION_INVALID = "criterion_invalid"


@dataclass(frozen=True)
class LoadDiagnostic:
    kind: DiagnosticKind
    entry_id: Optional[int]
    detail: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "entry_id": self.entry_id,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class RuleSet:
    schema_version: tuple[int, ...]
    entries: tuple[Entry, ...] = ()
    max_entry_id: int = 0
    contains_unknown_fields: bool = False

    @property
    def version(self) -> str:
        if len(self.schema_version) != 2:
            return ""
        return f"{self.schema_version[0]}.{self.schema_version[1]}"

    @property
    def num_entries(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class LoadReport:
    rule_set: RuleSet
    diagnostics: tuple[LoadDiagnostic, ...] = ()
    skipped_entries: int = 0
    filtered_entries: int = 0

    def is_clean(self) -> bool:
        return not self.diagnostics


@dataclass(frozen=True)
class ActiveEntry:
    id: int
    disabled: bool
    feature_mask: GpuFeature
    description: str
    cr_bugs: tuple[int, ...] = ()
    webkit_bugs: tuple[int, ...] = ()

    @classmethod
    def from_entry(cls, entry: Entry) -> ActiveEntry:
        return cls(
            id=entry.id,
            disabled=entry.disabled,
            feature_mask=entry.feature_mask,
            description=entry.description,
            cr_bugs=entry.cr_bugs,
            webkit_bugs=entry.webkit_bugs,
        )


@dataclass(frozen=True)
class Evaluation:
    feature_mask: GpuFeature = GpuFeature.NONE
    active_entries: tuple[ActiveEntry, ...] = field(default=())

    def entry_ids(self, disabled: bool = False) -> list[int]:
        return [item.id for item in self.active_entries if item.disabled == disabled]

    def entries_for_feature(self, feature: GpuFeature, disabled: bool = False) -> list[int]:
        return [
            item.id
            for item in self.active_entries
            if item.disabled == disabled and bool(item.feature_mask & feature)
        ]

    def blacklist_reasons(self) -> list[dict[str, Any]]:
        return [
            {
                "description": item.description,
                "crBugs": list(item.cr_bugs),
                "webkitBugs": list(item.webkit_bugs),
            }
            for item in self.active_entries
            if not item.disabled
        ]
