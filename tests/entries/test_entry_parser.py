import pytest

from gpu_blacklist.constants import DEFAULT_DESCRIPTION
from gpu_blacklist.criteria.models import MultiGpuStyle, NumericOp, OsType, StringOp
from gpu_blacklist.entries.parser import parse_browser_version, parse_entry
from gpu_blacklist.errors import LoadFailure
from gpu_blacklist.features import GpuFeature
from gpu_blacklist.models import DiagnosticKind
from gpu_blacklist.version import Version


def _entry(**overrides) -> dict:
    payload = {"id": 7, "blacklist": ["webgl"]}
    payload.update(overrides)
    return payload


def test_minimal_entry_gets_defaults() -> None:
    parsed = parse_entry(_entry())
    entry = parsed.entry
    assert entry.id == 7
    assert entry.disabled is False
    assert entry.description == DEFAULT_DESCRIPTION
    assert entry.os is None
    assert entry.os_type == OsType.ANY
    assert entry.vendor_id == 0
    assert entry.device_ids == frozenset()
    assert entry.multi_gpu_style == MultiGpuStyle.NONE
    assert entry.feature_mask == GpuFeature.WEBGL
    assert entry.exceptions == ()
    assert parsed.diagnostics == []


def test_full_entry() -> None:
    parsed = parse_entry(
        _entry(
            description="Intel drivers on old Macs",
            cr_bugs=[1234, 5678],
            webkit_bugs=[42],
            disabled=True,
            os={"type": "macosx", "version": {"op": "<", "number": "10.7"}},
            vendor_id="0x8086",
            device_id=["0x0166", "0x0162"],
            multi_gpu_style="optimus",
            driver_vendor={"op": "contains", "value": "Intel"},
            driver_version={"op": "<", "number": "8.15", "style": "lexical"},
            driver_date={"op": "<", "number": "2011.12"},
            gl_vendor={"op": "beginwith", "value": "Intel"},
            gl_renderer={"op": "endwith", "value": "HD 4000"},
            perf_graphics={"op": "<", "value": "3.5"},
            blacklist=["webgl", "accelerated_compositing"],
        )
    )
    entry = parsed.entry
    assert entry.description == "Intel drivers on old Macs"
    assert entry.cr_bugs == (1234, 5678)
    assert entry.webkit_bugs == (42,)
    assert entry.disabled is True
    assert entry.os is not None and entry.os.type == OsType.MACOS
    assert entry.os.version.op == NumericOp.LT
    assert entry.vendor_id == 0x8086
    assert entry.device_ids == frozenset({0x0166, 0x0162})
    assert entry.multi_gpu_style == MultiGpuStyle.OPTIMUS
    assert entry.driver_vendor is not None and entry.driver_vendor.value == "intel"
    assert entry.driver_version is not None and entry.driver_version.is_lexical
    assert entry.driver_version.bound1 == Version.parse("8.1.5")
    assert entry.driver_date is not None and entry.driver_date.bound1 == Version.parse("2011.12")
    assert entry.gl_vendor is not None and entry.gl_vendor.op == StringOp.BEGIN_WITH
    assert entry.gl_renderer is not None and entry.gl_renderer.value == "hd 4000"
    assert entry.perf_graphics is not None and entry.perf_graphics.bound1 == 3.5
    assert entry.perf_gaming is None
    assert entry.feature_mask == GpuFeature.WEBGL | GpuFeature.ACCELERATED_COMPOSITING
    assert not entry.has_unknown_fields
    assert parsed.diagnostics == []


@pytest.mark.parametrize("raw_id", [None, 0, -1, "1", 1.5, True, 0x100000000])
def test_bad_id_fails(raw_id) -> None:
    payload = _entry()
    if raw_id is None:
        payload.pop("id")
    else:
        payload["id"] = raw_id
    with pytest.raises(LoadFailure) as excinfo:
        parse_entry(payload)
    assert excinfo.value.field == "id"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"vendor_id": "nvidia"}, "vendor_id"),
        ({"vendor_id": "0x1ffffffff"}, "vendor_id"),
        ({"device_id": ["0x0166", "zz"]}, "device_id"),
        ({"device_id": [358]}, "device_id"),
        ({"multi_gpu_style": "sli"}, "multi_gpu_style"),
        ({"cr_bugs": [1, "2"]}, "cr_bugs"),
        ({"webkit_bugs": [True]}, "webkit_bugs"),
        ({"blacklist": []}, "blacklist"),
        ({"blacklist": "webgl"}, "blacklist"),
        ({"blacklist": ["webgl", 3]}, "blacklist"),
        ({"exceptions": ["not an object"]}, "exceptions"),
    ],
)
def test_structural_problems_fail(overrides: dict, field: str) -> None:
    with pytest.raises(LoadFailure) as excinfo:
        parse_entry(_entry(**overrides))
    assert excinfo.value.entry_id == 7
    assert excinfo.value.field == field


def test_missing_blacklist_fails() -> None:
    with pytest.raises(LoadFailure, match="Malformed blacklist entry"):
        parse_entry({"id": 3})


def test_unknown_fields_keep_entry_and_flag_it() -> None:
    parsed = parse_entry(_entry(vendor_name="NVIDIA", zz_extra=1))
    assert parsed.entry.has_unknown_fields
    assert parsed.entry.feature_mask == GpuFeature.WEBGL
    assert [item.kind for item in parsed.diagnostics] == [DiagnosticKind.ENTRY_DEGRADED]
    assert parsed.diagnostics[0].detail == "unrecognized fields: vendor_name, zz_extra"
    assert parsed.diagnostics[0].entry_id == 7


def test_wrong_typed_known_key_counts_as_unknown() -> None:
    parsed = parse_entry(_entry(disabled="yes", os="linux"))
    assert parsed.entry.has_unknown_fields
    assert parsed.entry.disabled is False
    assert parsed.entry.os is None
    assert "disabled, os" in parsed.diagnostics[0].detail


def test_unknown_feature_names_are_ignored() -> None:
    parsed = parse_entry(_entry(blacklist=["webgl", "3d_css"]))
    assert parsed.entry.feature_mask == GpuFeature.WEBGL
    assert parsed.entry.has_unknown_features
    assert not parsed.entry.has_unknown_fields
    assert parsed.diagnostics[0].kind == DiagnosticKind.UNKNOWN_FEATURE
    assert "3d_css" in parsed.diagnostics[0].detail


def test_all_unknown_feature_names_give_empty_mask() -> None:
    parsed = parse_entry(_entry(blacklist=["3d_css"]))
    assert parsed.entry.feature_mask == GpuFeature.NONE


@pytest.mark.parametrize(
    "overrides, key",
    [
        ({"os": {"type": "beos"}}, "os"),
        ({"os": {"type": "win", "version": {"op": "<", "number": "six"}}}, "os"),
        ({"driver_vendor": {"op": "regex", "value": "x"}}, "driver_vendor"),
        ({"driver_version": {"op": "<", "number": "1.2", "style": "roman"}}, "driver_version"),
        ({"driver_version": {"op": "between", "number": "1.2"}}, "driver_version"),
        ({"driver_date": {"op": "<", "number": "12-01-2011"}}, "driver_date"),
        ({"gl_renderer": {"value": "mesa"}}, "gl_renderer"),
        ({"perf_overall": {"op": "<", "value": "fast"}}, "perf_overall"),
    ],
)
def test_invalid_criteria_are_kept_and_reported(overrides: dict, key: str) -> None:
    parsed = parse_entry(_entry(**overrides))
    assert parsed.entry.invalid_criteria == (key,)
    assert not parsed.entry.has_unknown_fields
    assert [item.kind for item in parsed.diagnostics] == [DiagnosticKind.CRITERION_INVALID]
    assert key in parsed.diagnostics[0].detail


def test_criterion_without_op_defaults_to_any() -> None:
    parsed = parse_entry(_entry(driver_version={"number": "1.0"}))
    assert parsed.entry.driver_version is not None
    assert parsed.entry.driver_version.op == NumericOp.ANY
    assert parsed.entry.invalid_criteria == ()


def test_exceptions_are_parsed_without_id_or_features() -> None:
    parsed = parse_entry(
        _entry(exceptions=[{"device_id": ["0x1234"], "gl_vendor": {"op": "=", "value": "X"}}])
    )
    (exception,) = parsed.entry.exceptions
    assert exception.id == 0
    assert exception.feature_mask == GpuFeature.NONE
    assert exception.device_ids == frozenset({0x1234})
    assert parsed.diagnostics == []


def test_exception_may_not_carry_top_level_keys() -> None:
    parsed = parse_entry(_entry(exceptions=[{"id": 9, "blacklist": ["webgl"]}]))
    assert parsed.entry.exceptions == ()
    assert parsed.entry.has_unknown_fields
    (diagnostic,) = parsed.diagnostics
    assert diagnostic.kind == DiagnosticKind.EXCEPTION_DROPPED
    assert diagnostic.entry_id == 7
    assert "blacklist, id" in diagnostic.detail


def test_exception_with_unknown_field_is_dropped_but_siblings_stay() -> None:
    parsed = parse_entry(
        _entry(
            exceptions=[
                {"device_id": ["0x1"], "mystery": True},
                {"device_id": ["0x2"]},
            ]
        )
    )
    assert [sorted(item.device_ids) for item in parsed.entry.exceptions] == [[2]]
    assert parsed.entry.has_unknown_fields


def test_structural_problem_inside_exception_fails_parent() -> None:
    with pytest.raises(LoadFailure) as excinfo:
        parse_entry(_entry(exceptions=[{"vendor_id": "xyz"}]))
    assert excinfo.value.entry_id == 7
    assert excinfo.value.field == "exceptions.vendor_id"
    assert excinfo.value.reason.startswith("Malformed exceptions entry")


def test_exception_diagnostics_are_attributed_to_parent() -> None:
    parsed = parse_entry(_entry(exceptions=[{"gl_vendor": {"op": "?", "value": "x"}}]))
    assert len(parsed.entry.exceptions) == 1
    assert parsed.entry.exceptions[0].invalid_criteria == ("gl_vendor",)
    (diagnostic,) = parsed.diagnostics
    assert diagnostic.entry_id == 7
    assert diagnostic.detail.startswith("exception: ")


def test_browser_version_key_is_recognized() -> None:
    parsed = parse_entry(_entry(browser_version={"op": ">=", "number": "10"}))
    assert not parsed.entry.has_unknown_fields


def test_parse_browser_version() -> None:
    criterion = parse_browser_version({"op": "between", "number": "10.0", "number2": "12"})
    assert criterion.contains(Version.parse("11.5"))
    assert not criterion.contains(Version.parse("12.1"))
    assert parse_browser_version({}).op == NumericOp.ANY
    assert not parse_browser_version({"op": "<"}).is_valid
