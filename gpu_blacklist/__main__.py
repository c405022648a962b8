from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

from gpu_blacklist.blacklist import GpuBlacklist
from gpu_blacklist.constants import DEFAULT_BROWSER_VERSION
from gpu_blacklist.criteria.models import OsType
from gpu_blacklist.errors import BlacklistError, LoadFailure
from gpu_blacklist.hardware import HardwareSnapshot
from gpu_blacklist.log import configure_logging
from gpu_blacklist.models import LoadReport, OsFilter
from gpu_blacklist.tui import BlacklistConsoleUI
from gpu_blacklist.utils import compact_home_path, read_document


OS_FILTER_VALUES = [item.value for item in OsFilter]
OS_TYPE_VALUES = [item.value for item in OsType if item not in (OsType.ANY, OsType.UNKNOWN)]
LOG_LEVEL_VALUES = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _browser_version_option():
    return click.option(
        "--browser-version",
        default=DEFAULT_BROWSER_VERSION,
        show_default=True,
        help="Browser version that browser_version criteria are checked against.",
    )


def _os_filter_option():
    return click.option(
        "--os-filter",
        type=click.Choice(OS_FILTER_VALUES, case_sensitive=False),
        default=OsFilter.ALL.value,
        show_default=True,
        help="Keep all entries or only those for the current OS.",
    )


def _load(
    ui: BlacklistConsoleUI,
    blacklist: GpuBlacklist,
    rules: Path,
    browser_version: str,
    os_filter: str,
    platform_os: Optional[OsType] = None,
) -> LoadReport:
    try:
        document = read_document(rules)
        return blacklist.load(
            document,
            browser_version=browser_version,
            os_filter=OsFilter(os_filter.lower()),
            platform_os=platform_os,
        )
    except LoadFailure as exc:
        ui.render_failure(str(exc))
        raise click.exceptions.Exit(1)
    except BlacklistError as exc:
        raise click.ClickException(str(exc))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_VALUES, case_sensitive=False),
    default=None,
    help="Override GPU_BLACKLIST_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """GPU feature blacklist rule engine."""
    configure_logging(log_level)
    ctx.obj = {}


@cli.command(help="Load a blacklist file and report its entries and diagnostics.")
@click.argument("rules", type=click.Path(path_type=Path))
@_browser_version_option()
@_os_filter_option()
@click.pass_obj
def validate(obj: Dict[str, Any], rules: Path, browser_version: str, os_filter: str) -> None:
    ui = BlacklistConsoleUI(Console())
    report = _load(ui, GpuBlacklist(), rules, browser_version, os_filter)
    ui.render_load_report(report, source=compact_home_path(rules))


@cli.command(help="Evaluate a blacklist file against a hardware snapshot.")
@click.argument("rules", type=click.Path(path_type=Path))
@click.argument("hardware", type=click.Path(path_type=Path))
@_browser_version_option()
@_os_filter_option()
@click.option(
    "--os",
    "os_name",
    type=click.Choice(OS_TYPE_VALUES, case_sensitive=False),
    default=None,
    help="OS type to evaluate for (defaults to the running OS).",
)
@click.option("--os-version", default=None, help="OS version, e.g. 10.6.8.")
@click.pass_obj
def evaluate(
    obj: Dict[str, Any],
    rules: Path,
    hardware: Path,
    browser_version: str,
    os_filter: str,
    os_name: Optional[str],
    os_version: Optional[str],
) -> None:
    ui = BlacklistConsoleUI(Console())
    os_type = OsType(os_name.lower()) if os_name else None
    blacklist = GpuBlacklist()
    _load(ui, blacklist, rules, browser_version, os_filter, platform_os=os_type)

    try:
        snapshot = HardwareSnapshot.from_mapping(read_document(hardware))
    except BlacklistError as exc:
        raise click.ClickException(str(exc))

    evaluation = blacklist.evaluate(snapshot, os_type=os_type, os_version=os_version)
    ui.render_evaluation(evaluation)


@cli.command(help="List the feature names a blacklist entry may use.")
def features() -> None:
    BlacklistConsoleUI(Console()).render_features()


if __name__ == "__main__":
    cli()
