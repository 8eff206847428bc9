"""
Violations and value type checks.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, Callable

from ..core.meta import ValueType
from ..utils.coercion import is_numeric

REQUIRED = "required"
INVALID_TYPE = "invalid_type"
INVALID = "invalid"


@dataclass(frozen=True)
class Violation:
    """One reason an input was rejected."""

    field: str
    message: str
    code: str = INVALID

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return not isinstance(value, bool) and is_numeric(value)


def _is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return value in (0, 1)
    return isinstance(value, str) and value in ("0", "1", "true", "false")


TYPE_CHECKS: dict[ValueType, Callable[[Any], bool]] = {
    ValueType.INTEGER: _is_integer,
    ValueType.FLOAT: _is_float,
    ValueType.BOOLEAN: _is_boolean,
    ValueType.STRING: lambda value: isinstance(value, str),
    ValueType.ARRAY: lambda value: isinstance(value, (list, tuple, Mapping)),
}


def matches_type(value: Any, expected: ValueType) -> bool:
    """True when ``value`` fits ``expected``; unchecked types always fit."""
    check = TYPE_CHECKS.get(expected)
    return check is None or check(value)
