"""Operator and enum types shared by the criterion matchers."""

from __future__ import annotations

from enum import Enum


class NumericOp(str, Enum):
    EQ = "="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    ANY = "any"
    BETWEEN = "between"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> NumericOp:
        for op in cls:
            if op is not cls.UNKNOWN and op.value == value:
                return op
        return cls.UNKNOWN


class StringOp(str, Enum):
    EQ = "="
    CONTAINS = "contains"
    BEGIN_WITH = "beginwith"
    END_WITH = "endwith"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> StringOp:
        for op in cls:
            if op is not cls.UNKNOWN and op.value == value:
                return op
        return cls.UNKNOWN


class VersionStyle(str, Enum):
    NUMERICAL = "numerical"
    LEXICAL = "lexical"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> VersionStyle:
        if not value or value == cls.NUMERICAL.value:
            return cls.NUMERICAL
        if value == cls.LEXICAL.value:
            return cls.LEXICAL
        return cls.UNKNOWN


class OsType(str, Enum):
    WINDOWS = "win"
    MACOS = "macosx"
    LINUX = "linux"
    CHROMEOS = "chromeos"
    ANY = "any"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> OsType:
        for os_type in cls:
            if os_type is not cls.UNKNOWN and os_type.value == value:
                return os_type
        return cls.UNKNOWN


class MultiGpuStyle(str, Enum):
    NONE = "none"
    OPTIMUS = "optimus"
    AMD_SWITCHABLE = "amd_switchable"

    @classmethod
    def from_string(cls, value: str) -> MultiGpuStyle | None:
        if value == cls.OPTIMUS.value:
            return cls.OPTIMUS
        if value == cls.AMD_SWITCHABLE.value:
            return cls.AMD_SWITCHABLE
        return None
