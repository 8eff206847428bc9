"""
Type coercion utilities for rail-rest.

Unlike lenient coercion with a fallback default, these helpers return
``None`` when a value cannot be coerced so callers can skip it.
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional, Union

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}

Number = Union[int, float]


def coerce_bool_strict(value: Any) -> Optional[bool]:
    """
    Coerce a value to a boolean, accepting only unambiguous spellings.

    Examples:
        >>> coerce_bool_strict("TRUE")
        True
        >>> coerce_bool_strict(0)
        False
        >>> coerce_bool_strict("maybe") is None
        True
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
    return None


def coerce_number(value: Any) -> Optional[Number]:
    """
    Coerce a value to an int or a float matching its apparent type.

    Integral strings become ``int``, strings with a decimal point or an
    exponent become ``float``. Booleans and non-finite values are rejected.

    Examples:
        >>> coerce_number("42")
        42
        >>> coerce_number("19.99")
        19.99
        >>> coerce_number("abc") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if _INTEGER_RE.match(text):
        return int(text)
    if _NUMBER_RE.match(text):
        number = float(text)
        return number if math.isfinite(number) else None
    return None


def is_numeric(value: Any) -> bool:
    """True for finite ints, floats and numeric strings, never for booleans."""
    return coerce_number(value) is not None
