"""Process-wide blacklist state with an explicit load/evaluate lifecycle."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from gpu_blacklist.aggregator import evaluate_rule_set
from gpu_blacklist.constants import DEFAULT_BROWSER_VERSION
from gpu_blacklist.criteria.models import OsType
from gpu_blacklist.features import GpuFeature
from gpu_blacklist.hardware import HardwareSnapshot
from gpu_blacklist.loader import RuleSetLoader
from gpu_blacklist.log import get_logger
from gpu_blacklist.models import Evaluation, LoadReport, OsFilter, RuleSet
from gpu_blacklist.platform import current_os_type, current_os_version
from gpu_blacklist.version import Version

logger = get_logger(__name__)

FeatureSink = Callable[[GpuFeature], None]


class GpuBlacklist:
    """Holds the current rule set; reloads replace it in one reference swap.

    A single writer calls ``load``; any number of readers may call
    ``evaluate`` concurrently. Readers grab the current reference once, so an
    evaluation always sees one complete rule set.
    """

    def __init__(
        self,
        loader: RuleSetLoader | None = None,
        on_features: Optional[FeatureSink] = None,
    ) -> None:
        self._loader = loader or RuleSetLoader()
        self._on_features = on_features
        self._rule_set: Optional[RuleSet] = None
        self._write_lock = threading.Lock()

    @property
    def current(self) -> Optional[RuleSet]:
        return self._rule_set

    def load(
        self,
        document: Any,
        browser_version: str | None = None,
        os_filter: OsFilter = OsFilter.ALL,
        platform_os: Optional[OsType] = None,
    ) -> LoadReport:
        """Load and publish a rule set; on ``LoadFailure`` the old one stays."""
        with self._write_lock:
            report = self._loader.load(
                document,
                browser_version or DEFAULT_BROWSER_VERSION,
                os_filter=os_filter,
                platform_os=platform_os,
            )
            self._rule_set = report.rule_set
        logger.info(
            "Published blacklist %s with %d entries",
            report.rule_set.version,
            report.rule_set.num_entries,
        )
        return report

    def evaluate(
        self,
        hardware: HardwareSnapshot,
        os_type: Optional[OsType] = None,
        os_version: Version | str | None = None,
    ) -> Evaluation:
        rule_set = self._rule_set
        if rule_set is None:
            return Evaluation()
        resolved_os = os_type
        if resolved_os is None or resolved_os == OsType.ANY:
            resolved_os = current_os_type()
        if isinstance(os_version, str):
            resolved_version = Version.parse(os_version)
        elif os_version is None:
            resolved_version = current_os_version()
        else:
            resolved_version = os_version
        return evaluate_rule_set(rule_set, hardware, resolved_os, resolved_version)

    def notify_hardware_changed(self, hardware: HardwareSnapshot) -> Evaluation:
        """Called by the hardware info provider whenever the snapshot changes."""
        evaluation = self.evaluate(hardware)
        if self._on_features is not None:
            self._on_features(evaluation.feature_mask)
        return evaluation
