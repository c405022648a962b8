import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from gpu_blacklist.errors import LoadFailure

_SCHEMA_CACHE: dict[str, dict[str, Any]] = {}

DOCUMENT_SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


class DocumentSchemaRepository:
    def __init__(self, local_schema_path: Path = DOCUMENT_SCHEMA_PATH) -> None:
        self.local_schema_path = local_schema_path

    def load_schema(self) -> dict[str, Any]:
        key = str(self.local_schema_path.resolve())
        cached = _SCHEMA_CACHE.get(key)
        if cached is not None:
            return cached
        schema = json.loads(self.local_schema_path.read_text(encoding="utf-8"))
        _SCHEMA_CACHE[key] = schema
        return schema


class DocumentValidator:
    """Checks the envelope of a blacklist document: version and entries list."""

    def __init__(self, schema_repository: DocumentSchemaRepository | None = None) -> None:
        self._schema_repository = schema_repository or DocumentSchemaRepository()
        self._validator = Draft202012Validator(self._schema_repository.load_schema())

    def validate(self, payload: Any) -> None:
        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise LoadFailure(f"Invalid blacklist document ({format_schema_error(error)})")
