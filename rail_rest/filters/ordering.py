"""
Parsing of the reserved ``order`` query parameter.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .types import ASC, DESC, Sort

logger = logging.getLogger(__name__)

DEFAULT_FIELD_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


def normalize_direction(value: Any) -> str:
    """``"desc"`` (any case) stays descending; anything else sorts ascending."""
    if isinstance(value, str) and value.strip().lower() == DESC:
        return DESC
    return ASC


def is_safe_field_name(name: Any, pattern: str = DEFAULT_FIELD_NAME_PATTERN) -> bool:
    return isinstance(name, str) and re.fullmatch(pattern, name) is not None


def compile_order(value: Any, pattern: str = DEFAULT_FIELD_NAME_PATTERN) -> list[Sort]:
    """
    Build sort operations from ``{field: "asc"|"desc"}`` in caller order.

    Field names not matching ``pattern`` are dropped.
    """
    if not isinstance(value, Mapping):
        logger.debug("Ignoring order parameter: expected a mapping, got %r", value)
        return []
    sorts = []
    for field, direction in value.items():
        if not is_safe_field_name(field, pattern):
            logger.debug("Ignoring unsafe order field %r", field)
            continue
        sorts.append(Sort(field, normalize_direction(direction)))
    return sorts
