from collections import Counter

from rich.table import Column, Table

from gpu_blacklist.entries.models import Entry
from gpu_blacklist.features import FEATURE_NAMES, GpuFeature, feature_names
from gpu_blacklist.models import ActiveEntry, LoadDiagnostic, LoadReport
from gpu_blacklist.tui.enums import DIAGNOSTIC_STYLE, UIStyle


def _criteria_summary(entry: Entry) -> str:
    parts: list[str] = []
    if entry.os is not None:
        parts.append(f"os={entry.os.type.value}")
    if entry.vendor_id:
        parts.append(f"vendor=0x{entry.vendor_id:04x}")
    if entry.device_ids:
        devices = ",".join(f"0x{device:04x}" for device in sorted(entry.device_ids))
        parts.append(f"device={devices}")
    if entry.exceptions:
        parts.append(f"exceptions={len(entry.exceptions)}")
    return " ".join(parts) or "any"


class RuleSetTable:
    @staticmethod
    def summary_block(report: LoadReport):
        rule_set = report.rule_set
        counts = Counter(item.kind.value for item in report.diagnostics)
        chips = [f"{key}={value}" for key, value in sorted(counts.items())]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Version", rule_set.version or "(unknown)")
        table.add_row("Entries", str(rule_set.num_entries))
        table.add_row("Max entry id", str(rule_set.max_entry_id))
        table.add_row("Skipped (browser)", str(report.skipped_entries))
        table.add_row("Filtered (os)", str(report.filtered_entries))
        table.add_row("Unknown fields", "yes" if rule_set.contains_unknown_fields else "no")
        table.add_row("Diagnostics", "  ".join(chips))
        return table

    @staticmethod
    def entries_table(entries: tuple[Entry, ...]) -> Table:
        table = Table(
            Column(header="Id", width=6, justify="right"),
            Column(header="State", width=9),
            Column(header="Features", overflow="fold", max_width=40),
            Column(header="Criteria", overflow="ellipsis"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for entry in entries:
            state_style = UIStyle.DIM.value if entry.disabled else UIStyle.GREEN.value
            state = "disabled" if entry.disabled else "enabled"
            table.add_row(
                str(entry.id),
                f"[{state_style}]{state}[/{state_style}]",
                ", ".join(feature_names(entry.feature_mask)) or "-",
                _criteria_summary(entry),
                entry.description,
            )
        return table

    @staticmethod
    def diagnostics_table(diagnostics: tuple[LoadDiagnostic, ...]) -> Table:
        table = Table(
            Column(header="Kind", width=18),
            Column(header="Entry", width=6, justify="right"),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in diagnostics:
            style = DIAGNOSTIC_STYLE.get(item.kind, UIStyle.WHITE.value)
            entry = "" if item.entry_id is None else str(item.entry_id)
            table.add_row(f"[{style}]{item.kind.value}[/{style}]", entry, item.detail)
        return table


class EvaluationTable:
    @staticmethod
    def features_block(mask: GpuFeature):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        names = feature_names(mask)
        table.add_row("Blacklisted", ", ".join(names) if names else "none")
        table.add_row("Mask", f"0x{mask.value:02x}")
        return table

    @staticmethod
    def active_table(items: tuple[ActiveEntry, ...]) -> Table:
        table = Table(
            Column(header="Id", width=6, justify="right"),
            Column(header="State", width=9),
            Column(header="Features", overflow="fold", max_width=40),
            Column(header="Bugs", overflow="ellipsis", max_width=24),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for item in items:
            style = UIStyle.DIM.value if item.disabled else UIStyle.RED.value
            state = "disabled" if item.disabled else "applied"
            bugs = ", ".join(str(bug) for bug in item.cr_bugs + item.webkit_bugs)
            table.add_row(
                str(item.id),
                f"[{style}]{state}[/{style}]",
                ", ".join(feature_names(item.feature_mask)) or "-",
                bugs,
                item.description,
            )
        return table


class FeatureTable:
    @staticmethod
    def features_table() -> Table:
        table = Table(
            Column(header="Feature", width=26),
            Column(header="Bits", justify="right"),
            header_style="bold",
        )
        for name, feature in FEATURE_NAMES.items():
            table.add_row(name, f"0x{feature.value:02x}")
        return table
