"""Turn a parsed blacklist document into an immutable rule set."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from gpu_blacklist.criteria.models import OsType
from gpu_blacklist.entries.models import Entry
from gpu_blacklist.entries.parser import parse_browser_version, parse_entry
from gpu_blacklist.errors import LoadFailure
from gpu_blacklist.log import get_logger
from gpu_blacklist.models import LoadDiagnostic, LoadReport, OsFilter, RuleSet
from gpu_blacklist.platform import current_os_type
from gpu_blacklist.schema import DocumentValidator
from gpu_blacklist.version import Version

logger = get_logger(__name__)


class RuleSetLoader:
    def __init__(self, validator: DocumentValidator | None = None) -> None:
        self._validator = validator or DocumentValidator()

    def load(
        self,
        document: Any,
        browser_version: str,
        os_filter: OsFilter = OsFilter.ALL,
        platform_os: Optional[OsType] = None,
    ) -> LoadReport:
        """Build a rule set or raise ``LoadFailure``; nothing is published here."""
        self._validator.validate(document)

        schema_version = Version.parse(document["version"])
        if schema_version is None:
            raise LoadFailure(f"Malformed blacklist version {document['version']!r}")

        reference = Version.parse(browser_version)
        if reference is None:
            raise LoadFailure(f"Malformed browser version {browser_version!r}")

        entries: list[Entry] = []
        diagnostics: list[LoadDiagnostic] = []
        seen_ids: set[int] = set()
        skipped = 0
        max_entry_id = 0
        contains_unknown_fields = False

        for item in document["entries"]:
            if not self._supports_browser_version(item, reference):
                skipped += 1
                logger.debug("Entry %r skipped for browser version %s", item.get("id"), reference)
                continue
            parsed = parse_entry(item, top_level=True)
            entry = parsed.entry
            if entry.id in seen_ids:
                raise LoadFailure("Duplicate entry id", entry_id=entry.id, field="id")
            seen_ids.add(entry.id)
            max_entry_id = max(max_entry_id, entry.id)
            if entry.has_unknown_fields or entry.has_unknown_features:
                contains_unknown_fields = True
            diagnostics.extend(parsed.diagnostics)
            entries.append(entry)

        kept = self._filter_for_os(entries, os_filter, platform_os)
        rule_set = RuleSet(
            schema_version=schema_version.components,
            entries=tuple(kept),
            max_entry_id=max_entry_id,
            contains_unknown_fields=contains_unknown_fields,
        )
        return LoadReport(
            rule_set=rule_set,
            diagnostics=tuple(diagnostics),
            skipped_entries=skipped,
            filtered_entries=len(entries) - len(kept),
        )

    @staticmethod
    def _supports_browser_version(item: Mapping[str, Any], reference: Version) -> bool:
        raw = item.get("browser_version")
        if not isinstance(raw, Mapping):
            return True
        criterion = parse_browser_version(raw)
        if not criterion.is_valid:
            raise LoadFailure(
                "Malformed browser_version entry",
                entry_id=item.get("id") if isinstance(item.get("id"), int) else None,
                field="browser_version",
            )
        return criterion.contains(reference)

    @staticmethod
    def _filter_for_os(
        entries: list[Entry], os_filter: OsFilter, platform_os: Optional[OsType]
    ) -> list[Entry]:
        if os_filter == OsFilter.ALL:
            return list(entries)
        my_os = platform_os or current_os_type()
        return [entry for entry in entries if entry.os_type in (OsType.ANY, my_os)]


def load_rule_set(
    document: Any,
    browser_version: str,
    os_filter: OsFilter = OsFilter.ALL,
    platform_os: Optional[OsType] = None,
) -> LoadReport:
    return RuleSetLoader().load(document, browser_version, os_filter, platform_os)
