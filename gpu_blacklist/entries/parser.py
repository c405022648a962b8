"""Build blacklist entries from a parsed value tree.

Structural problems raise ``LoadFailure``. Softer problems (unknown keys,
unknown feature names, criteria with a bad operator or bound) keep the entry
and are reported as diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from gpu_blacklist.criteria.matchers import (
    FloatRangeCriterion,
    OsCriterion,
    StringCriterion,
    VersionCriterion,
)
from gpu_blacklist.criteria.models import MultiGpuStyle
from gpu_blacklist.constants import DEFAULT_DESCRIPTION
from gpu_blacklist.entries.models import Entry
from gpu_blacklist.errors import LoadFailure
from gpu_blacklist.features import features_from_names
from gpu_blacklist.hardware import parse_hex_id
from gpu_blacklist.log import get_logger
from gpu_blacklist.models import DiagnosticKind, LoadDiagnostic

logger = get_logger(__name__)

_MAX_ENTRY_ID = 0xFFFFFFFF
_STRING_CRITERIA = ("driver_vendor", "gl_vendor", "gl_renderer")
_FLOAT_CRITERIA = ("perf_graphics", "perf_gaming", "perf_overall")


@dataclass
class ParsedEntry:
    entry: Entry
    diagnostics: list[LoadDiagnostic] = field(default_factory=list)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _string(payload: Mapping[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    return value if isinstance(value, str) else default


def _bug_list(payload: list[Any], key: str, entry_id: Optional[int]) -> tuple[int, ...]:
    bugs: list[int] = []
    for item in payload:
        if not _is_int(item):
            logger.warning("Malformed %s entry %s", key, entry_id)
            raise LoadFailure(f"Malformed {key} entry", entry_id=entry_id, field=key)
        bugs.append(item)
    return tuple(bugs)


def _version_criterion(payload: Mapping[str, Any], with_style: bool) -> VersionCriterion:
    return VersionCriterion.create(
        op=_string(payload, "op", "any"),
        number=_string(payload, "number"),
        number2=_string(payload, "number2"),
        style=_string(payload, "style") if with_style else "",
    )


def _os_criterion(payload: Mapping[str, Any]) -> OsCriterion:
    version = payload.get("version")
    if not isinstance(version, Mapping):
        version = {}
    return OsCriterion.create(
        _string(payload, "type"),
        op=_string(version, "op", "any"),
        number=_string(version, "number"),
        number2=_string(version, "number2"),
    )


def _float_criterion(payload: Mapping[str, Any]) -> FloatRangeCriterion:
    return FloatRangeCriterion.create(
        _string(payload, "op"),
        payload.get("value", ""),
        payload.get("value2", ""),
    )


def parse_browser_version(payload: Mapping[str, Any]) -> VersionCriterion:
    return _version_criterion(payload, with_style=False)


def parse_entry(payload: Mapping[str, Any], top_level: bool = True) -> ParsedEntry:
    """Parse one entry object; exceptions are parsed with ``top_level=False``."""
    fields: dict[str, Any] = {}
    recognized: set[str] = set()
    diagnostics: list[LoadDiagnostic] = []
    invalid_criteria: list[str] = []
    entry_id: Optional[int] = None

    if top_level:
        raw_id = payload.get("id")
        if not _is_int(raw_id) or not 0 < raw_id <= _MAX_ENTRY_ID:
            logger.warning("Malformed id entry %r", raw_id)
            raise LoadFailure("Malformed id entry", field="id")
        entry_id = raw_id
        fields["id"] = raw_id
        recognized.add("id")

        disabled = payload.get("disabled")
        if isinstance(disabled, bool):
            fields["disabled"] = disabled
            recognized.add("disabled")

    description = payload.get("description")
    if isinstance(description, str):
        fields["description"] = description
        recognized.add("description")
    else:
        fields["description"] = DEFAULT_DESCRIPTION

    for key in ("cr_bugs", "webkit_bugs"):
        raw_bugs = payload.get(key)
        if isinstance(raw_bugs, list):
            fields[key] = _bug_list(raw_bugs, key, entry_id)
            recognized.add(key)

    def criterion_checked(key: str, criterion: Any) -> None:
        fields[key] = criterion
        recognized.add(key)
        if not criterion.is_valid:
            logger.warning("Malformed %s entry %s", key, entry_id)
            invalid_criteria.append(key)
            diagnostics.append(
                LoadDiagnostic(
                    DiagnosticKind.CRITERION_INVALID,
                    entry_id,
                    f"criterion '{key}' is malformed and never matches",
                )
            )

    os_value = payload.get("os")
    if isinstance(os_value, Mapping):
        criterion_checked("os", _os_criterion(os_value))

    vendor_id = payload.get("vendor_id")
    if isinstance(vendor_id, str):
        parsed_vendor = parse_hex_id(vendor_id)
        if parsed_vendor is None:
            logger.warning("Malformed vendor_id entry %s", entry_id)
            raise LoadFailure("Malformed vendor_id entry", entry_id=entry_id, field="vendor_id")
        fields["vendor_id"] = parsed_vendor
        recognized.add("vendor_id")

    device_ids = payload.get("device_id")
    if isinstance(device_ids, list):
        parsed_devices: set[int] = set()
        for item in device_ids:
            parsed_device = parse_hex_id(item) if isinstance(item, str) else None
            if parsed_device is None:
                logger.warning("Malformed device_id entry %s", entry_id)
                raise LoadFailure(
                    "Malformed device_id entry", entry_id=entry_id, field="device_id"
                )
            parsed_devices.add(parsed_device)
        fields["device_ids"] = frozenset(parsed_devices)
        recognized.add("device_id")

    multi_gpu_style = payload.get("multi_gpu_style")
    if isinstance(multi_gpu_style, str):
        style = MultiGpuStyle.from_string(multi_gpu_style)
        if style is None:
            logger.warning("Malformed multi_gpu_style entry %s", entry_id)
            raise LoadFailure(
                "Malformed multi_gpu_style entry", entry_id=entry_id, field="multi_gpu_style"
            )
        fields["multi_gpu_style"] = style
        recognized.add("multi_gpu_style")

    for key in _STRING_CRITERIA:
        value = payload.get(key)
        if isinstance(value, Mapping):
            criterion_checked(
                key, StringCriterion.create(_string(value, "op"), _string(value, "value"))
            )

    driver_version = payload.get("driver_version")
    if isinstance(driver_version, Mapping):
        criterion_checked("driver_version", _version_criterion(driver_version, with_style=True))

    driver_date = payload.get("driver_date")
    if isinstance(driver_date, Mapping):
        criterion_checked("driver_date", _version_criterion(driver_date, with_style=False))

    for key in _FLOAT_CRITERIA:
        value = payload.get(key)
        if isinstance(value, Mapping):
            criterion_checked(key, _float_criterion(value))

    has_unknown_fields = False
    has_unknown_features = False

    if top_level:
        blacklist = payload.get("blacklist")
        if not isinstance(blacklist, list) or not blacklist:
            logger.warning("Malformed blacklist entry %s", entry_id)
            raise LoadFailure("Malformed blacklist entry", entry_id=entry_id, field="blacklist")
        if not all(isinstance(name, str) for name in blacklist):
            logger.warning("Malformed blacklist entry %s", entry_id)
            raise LoadFailure("Malformed blacklist entry", entry_id=entry_id, field="blacklist")
        mask, unknown_features = features_from_names(blacklist)
        fields["feature_mask"] = mask
        recognized.add("blacklist")
        if unknown_features:
            has_unknown_features = True
            diagnostics.append(
                LoadDiagnostic(
                    DiagnosticKind.UNKNOWN_FEATURE,
                    entry_id,
                    f"unknown features ignored: {', '.join(unknown_features)}",
                )
            )

        raw_exceptions = payload.get("exceptions")
        if isinstance(raw_exceptions, list):
            exceptions: list[Entry] = []
            for item in raw_exceptions:
                if not isinstance(item, Mapping):
                    logger.warning("Malformed exceptions entry %s", entry_id)
                    raise LoadFailure(
                        "Malformed exceptions entry", entry_id=entry_id, field="exceptions"
                    )
                try:
                    parsed = parse_entry(item, top_level=False)
                except LoadFailure as exc:
                    raise LoadFailure(
                        f"Malformed exceptions entry: {exc.reason}",
                        entry_id=entry_id,
                        field=f"exceptions.{exc.field}" if exc.field else "exceptions",
                    ) from exc
                if parsed.entry.has_unknown_fields:
                    logger.warning("Exception with unknown fields %s", entry_id)
                    has_unknown_fields = True
                    reasons = [
                        diag.detail
                        for diag in parsed.diagnostics
                        if diag.kind == DiagnosticKind.ENTRY_DEGRADED
                    ]
                    diagnostics.append(
                        LoadDiagnostic(
                            DiagnosticKind.EXCEPTION_DROPPED,
                            entry_id,
                            f"exception dropped ({'; '.join(reasons)})",
                        )
                    )
                    continue
                exceptions.append(parsed.entry)
                diagnostics.extend(
                    LoadDiagnostic(diag.kind, entry_id, f"exception: {diag.detail}")
                    for diag in parsed.diagnostics
                )
            fields["exceptions"] = tuple(exceptions)
            recognized.add("exceptions")

        # Consumed by the loader before the entry is parsed.
        if isinstance(payload.get("browser_version"), Mapping):
            recognized.add("browser_version")

    unknown_keys = sorted(str(key) for key in payload.keys() if key not in recognized)
    if unknown_keys:
        logger.warning("Entry with unknown fields %s", entry_id)
        has_unknown_fields = True
        diagnostics.append(
            LoadDiagnostic(
                DiagnosticKind.ENTRY_DEGRADED,
                entry_id,
                f"unrecognized fields: {', '.join(unknown_keys)}",
            )
        )

    entry = Entry(
        **fields,
        has_unknown_fields=has_unknown_fields,
        has_unknown_features=has_unknown_features,
        invalid_criteria=tuple(invalid_criteria),
    )
    return ParsedEntry(entry=entry, diagnostics=diagnostics)
