"""Detect the OS type and version of the running machine."""

from __future__ import annotations

import platform as _platform
import sys
from pathlib import Path

from gpu_blacklist.criteria.models import OsType
from gpu_blacklist.version import Version

LSB_RELEASE_PATH = Path("/etc/lsb-release")


def _is_chromeos(lsb_release: Path = LSB_RELEASE_PATH) -> bool:
    try:
        text = lsb_release.read_text(encoding="utf-8")
    except OSError:
        return False
    return "CHROMEOS_RELEASE_NAME" in text


def current_os_type(platform_name: str | None = None) -> OsType:
    name = platform_name or sys.platform
    if name.startswith("win") or name == "cygwin":
        return OsType.WINDOWS
    if name == "darwin":
        return OsType.MACOS
    if name.startswith("linux") or name.startswith("openbsd"):
        return OsType.CHROMEOS if _is_chromeos() else OsType.LINUX
    return OsType.UNKNOWN


def truncate_version_string(text: str) -> str:
    """Keep the leading run of digits and dots: ``"5.15.0-91-generic"`` -> ``"5.15.0"``."""
    for index, char in enumerate(text):
        if char not in "0123456789.":
            return text[:index]
    return text


def current_os_version() -> Version | None:
    release = ""
    if sys.platform == "darwin":
        release = _platform.mac_ver()[0]
    elif sys.platform.startswith("win"):
        release = _platform.version()
    if not release:
        release = _platform.release()
    return Version.parse(truncate_version_string(release))
