import json
from pathlib import Path
from typing import Any

import yaml

from gpu_blacklist.constants import YAML_SUFFIXES
from gpu_blacklist.errors import InvalidDocumentError, MissingDocumentError


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_document(path: Path) -> Any:
    """Read a JSON or YAML document, chosen by file suffix."""
    if not path.exists():
        raise MissingDocumentError(path)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return read_yaml(path)
        return read_json(path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InvalidDocumentError(path, str(exc)) from exc


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text
