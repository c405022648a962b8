import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GPU_BLACKLIST_LOG_LEVEL", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_document():
    def _make(*entries: dict, version: str = "2.5") -> dict:
        return {"version": version, "entries": list(entries)}

    return _make


@pytest.fixture
def linux_nvidia_entry() -> dict:
    return {
        "id": 1,
        "os": {"type": "linux"},
        "vendor_id": "0x10de",
        "blacklist": ["webgl"],
    }


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
