from pathlib import Path
from typing import Optional


class BlacklistError(Exception):
    """Base user-facing blacklist error."""


class LoadFailure(BlacklistError):
    """A rule set could not be loaded; the previous one stays in effect."""

    def __init__(
        self,
        reason: str,
        entry_id: Optional[int] = None,
        field: Optional[str] = None,
    ) -> None:
        self.reason = reason
        self.entry_id = entry_id
        self.field = field
        location = []
        if entry_id is not None:
            location.append(f"entry {entry_id}")
        if field is not None:
            location.append(f"field '{field}'")
        suffix = f" ({', '.join(location)})" if location else ""
        super().__init__(f"{reason}{suffix}")


class InvalidHardwareSnapshotError(BlacklistError):
    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid hardware snapshot field '{field}' ({detail})")


class DocumentReadError(BlacklistError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingDocumentError(DocumentReadError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing required file")


class InvalidDocumentError(DocumentReadError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid document format ({detail})")
