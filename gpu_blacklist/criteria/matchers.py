"""Typed criterion matchers.

Every matcher is an immutable value built from the raw strings of one rule
field. A matcher that could not be built (unknown operator, unparsable bound)
stays around with ``is_valid == False`` and never matches anything.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field

from gpu_blacklist.criteria.models import NumericOp, OsType, StringOp, VersionStyle
from gpu_blacklist.version import Version, numerical_to_lexical

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _lower_ascii(text: str) -> str:
    # Non-ASCII letters keep their case.
    return text.translate(_ASCII_LOWER)


@dataclass(frozen=True)
class VersionCriterion:
    op: NumericOp
    style: VersionStyle = VersionStyle.NUMERICAL
    bound1: Version | None = None
    bound2: Version | None = None

    @classmethod
    def create(
        cls,
        op: str,
        number: str = "",
        number2: str = "",
        style: str = "",
    ) -> VersionCriterion:
        numeric_op = NumericOp.from_string(op)
        version_style = VersionStyle.from_string(style)
        if numeric_op in (NumericOp.UNKNOWN, NumericOp.ANY):
            return cls(op=numeric_op, style=version_style)
        if version_style == VersionStyle.LEXICAL:
            number = numerical_to_lexical(number)
            number2 = numerical_to_lexical(number2)
        bound1 = Version.parse(number)
        if bound1 is None:
            return cls(op=NumericOp.UNKNOWN, style=version_style)
        bound2 = None
        if numeric_op == NumericOp.BETWEEN:
            bound2 = Version.parse(number2)
            if bound2 is None:
                return cls(op=NumericOp.UNKNOWN, style=version_style)
        return cls(op=numeric_op, style=version_style, bound1=bound1, bound2=bound2)

    @property
    def is_valid(self) -> bool:
        return self.op != NumericOp.UNKNOWN and self.style != VersionStyle.UNKNOWN

    @property
    def is_lexical(self) -> bool:
        return self.style == VersionStyle.LEXICAL

    def contains(self, version: Version | None) -> bool:
        if not self.is_valid:
            return False
        if self.op == NumericOp.ANY:
            return True
        if version is None or self.bound1 is None:
            return False
        if self.op == NumericOp.EQ:
            # "10.6" contains "10.6.*"
            reference = self.bound1.components
            candidate = version.components
            for index, expected in enumerate(reference):
                if index >= len(candidate):
                    if expected != 0:
                        return False
                    continue
                if candidate[index] != expected:
                    return False
            return True
        relation = version.compare(self.bound1)
        if self.op == NumericOp.LT:
            return relation < 0
        if self.op == NumericOp.LE:
            return relation <= 0
        if self.op == NumericOp.GT:
            return relation > 0
        if self.op == NumericOp.GE:
            return relation >= 0
        # BETWEEN: bounds are taken as given, never reordered.
        if relation < 0 or self.bound2 is None:
            return False
        return version.compare(self.bound2) <= 0


@dataclass(frozen=True)
class OsCriterion:
    type: OsType
    version: VersionCriterion = field(
        default_factory=lambda: VersionCriterion(op=NumericOp.ANY)
    )

    @classmethod
    def create(
        cls, os_type: str, op: str = "any", number: str = "", number2: str = ""
    ) -> OsCriterion:
        parsed = OsType.from_string(os_type)
        if parsed == OsType.UNKNOWN:
            return cls(type=parsed, version=VersionCriterion(op=NumericOp.UNKNOWN))
        return cls(type=parsed, version=VersionCriterion.create(op, number, number2))

    @property
    def is_valid(self) -> bool:
        return self.type != OsType.UNKNOWN and self.version.is_valid

    def contains(self, os_type: OsType, version: Version | None) -> bool:
        if not self.is_valid:
            return False
        if self.type != os_type and self.type != OsType.ANY:
            return False
        return self.version.contains(version)


@dataclass(frozen=True)
class StringCriterion:
    op: StringOp
    value: str = ""

    @classmethod
    def create(cls, op: str, value: str = "") -> StringCriterion:
        return cls(op=StringOp.from_string(op), value=_lower_ascii(value))

    @property
    def is_valid(self) -> bool:
        return self.op != StringOp.UNKNOWN

    def contains(self, value: str) -> bool:
        candidate = _lower_ascii(value)
        if self.op == StringOp.CONTAINS:
            return self.value in candidate
        if self.op == StringOp.BEGIN_WITH:
            return candidate.startswith(self.value)
        if self.op == StringOp.END_WITH:
            return candidate.endswith(self.value)
        if self.op == StringOp.EQ:
            return candidate == self.value
        return False


def _to_float(raw: object) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip()) if raw.strip() else None
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class FloatRangeCriterion:
    op: NumericOp
    bound1: float = 0.0
    bound2: float = 0.0

    @classmethod
    def create(cls, op: str, value: object = "", value2: object = "") -> FloatRangeCriterion:
        numeric_op = NumericOp.from_string(op)
        if numeric_op in (NumericOp.UNKNOWN, NumericOp.ANY):
            return cls(op=numeric_op)
        bound1 = _to_float(value)
        if bound1 is None:
            return cls(op=NumericOp.UNKNOWN)
        bound2 = 0.0
        if numeric_op == NumericOp.BETWEEN:
            parsed = _to_float(value2)
            if parsed is None:
                return cls(op=NumericOp.UNKNOWN)
            bound2 = parsed
        return cls(op=numeric_op, bound1=bound1, bound2=bound2)

    @property
    def is_valid(self) -> bool:
        return self.op != NumericOp.UNKNOWN

    def contains(self, value: float) -> bool:
        if self.op == NumericOp.UNKNOWN:
            return False
        if self.op == NumericOp.ANY:
            return True
        if self.op == NumericOp.EQ:
            return value == self.bound1
        if self.op == NumericOp.LT:
            return value < self.bound1
        if self.op == NumericOp.LE:
            return value <= self.bound1
        if self.op == NumericOp.GT:
            return value > self.bound1
        if self.op == NumericOp.GE:
            return value >= self.bound1
        low, high = sorted((self.bound1, self.bound2))
        return low <= value <= high
