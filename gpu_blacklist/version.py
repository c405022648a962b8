"""Dotted numeric versions and the string encodings used by driver rules."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

_MAX_COMPONENT = 0xFFFF


@total_ordering
@dataclass(frozen=True)
class Version:
    components: tuple[int, ...]

    @classmethod
    def parse(cls, text: str) -> Version | None:
        if not text:
            return None
        components: list[int] = []
        for piece in text.split("."):
            if not piece or not (piece.isascii() and piece.isdigit()):
                return None
            value = int(piece)
            if value > _MAX_COMPONENT:
                return None
            components.append(value)
        return cls(tuple(components))

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1; missing trailing components count as zero."""
        size = max(len(self.components), len(other.components))
        for index in range(size):
            mine = self.components[index] if index < len(self.components) else 0
            theirs = other.components[index] if index < len(other.components) else 0
            if mine != theirs:
                return -1 if mine < theirs else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        return self.compare(other) < 0

    def __hash__(self) -> int:
        trimmed = list(self.components)
        while trimmed and trimmed[-1] == 0:
            trimmed.pop()
        return hash(tuple(trimmed))

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.components)


def numerical_to_lexical(numerical: str) -> str:
    """Split the digits after the first dot into separate components.

    ``"8.103"`` becomes ``"8.1.0.3"``. Anything not shaped like
    ``major.digits`` is returned unchanged.
    """
    major, dot, rest = numerical.partition(".")
    if not dot or not rest:
        return numerical
    if not all(char in "0123456789" for char in rest):
        return numerical
    return ".".join([major, *rest])


def date_to_version(date_string: str) -> Version | None:
    """Encode a ``mm-dd-yyyy`` driver date as ``yyyy.mm.dd``."""
    pieces = date_string.split("-")
    if len(pieces) != 3:
        return None
    month, day, year = pieces
    return Version.parse(f"{year}.{month}.{day}")
