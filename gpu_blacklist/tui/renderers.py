from typing import Optional

from rich.console import Console
from rich.panel import Panel

from gpu_blacklist.models import Evaluation, LoadReport
from gpu_blacklist.tui.enums import UIStyle
from gpu_blacklist.tui.tables import EvaluationTable, FeatureTable, RuleSetTable


def _section(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
    return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))


class BlacklistConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_load_report(self, report: LoadReport, source: str) -> None:
        self.console.print(
            _section(
                "rule set",
                RuleSetTable.summary_block(report),
                style=UIStyle.BLUE.value,
                subtitle=source,
            )
        )
        if report.rule_set.entries:
            self.console.print(
                _section(
                    "entries",
                    RuleSetTable.entries_table(report.rule_set.entries),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            self.console.print(_section("entries", "No entries loaded.", style=UIStyle.DIM.value))

        if report.diagnostics:
            self.console.print(
                _section(
                    "diagnostics",
                    RuleSetTable.diagnostics_table(report.diagnostics),
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_evaluation(self, evaluation: Evaluation) -> None:
        border = UIStyle.RED.value if evaluation.feature_mask else UIStyle.GREEN.value
        self.console.print(
            _section(
                "features",
                EvaluationTable.features_block(evaluation.feature_mask),
                style=border,
            )
        )
        if evaluation.active_entries:
            self.console.print(
                _section(
                    "active entries",
                    EvaluationTable.active_table(evaluation.active_entries),
                    style=UIStyle.MAGENTA.value,
                )
            )
        else:
            self.console.print(
                _section("active entries", "No entries matched.", style=UIStyle.DIM.value)
            )

        reasons = evaluation.blacklist_reasons()
        if reasons:
            lines = []
            for reason in reasons:
                bugs = ", ".join(str(bug) for bug in reason["crBugs"])
                suffix = f" (crbug {bugs})" if bugs else ""
                lines.append(f"- {reason['description']}{suffix}")
            self.console.print(_section("reasons", "\n".join(lines), style=UIStyle.RED.value))

    def render_features(self) -> None:
        self.console.print(
            _section("features", FeatureTable.features_table(), style=UIStyle.BLUE.value)
        )

    def render_failure(self, message: str) -> None:
        self.console.print(_section("load failed", message, style=UIStyle.RED.value))
