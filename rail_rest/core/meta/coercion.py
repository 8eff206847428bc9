"""
Coercion Functions for API Metadata

Standalone helpers that normalize raw declaration values (verbs, group lists,
type names, annotations) into the canonical forms stored on the
configuration dataclasses.
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
import enum
import logging
import types
import typing
from typing import Any, Iterable, Optional, Union

from .enums import FilterKind, HTTP_METHOD_OPERATIONS, Operation, ValueType

logger = logging.getLogger(__name__)

_UNION_TYPES = tuple(
    t for t in (Union, getattr(types, "UnionType", None)) if t is not None
)

_VALUE_TYPE_ALIASES = {
    "int": ValueType.INTEGER,
    "integer": ValueType.INTEGER,
    "float": ValueType.FLOAT,
    "number": ValueType.FLOAT,
    "decimal": ValueType.FLOAT,
    "bool": ValueType.BOOLEAN,
    "boolean": ValueType.BOOLEAN,
    "str": ValueType.STRING,
    "string": ValueType.STRING,
    "array": ValueType.ARRAY,
    "list": ValueType.ARRAY,
    "dict": ValueType.ARRAY,
    "date": ValueType.DATE,
    "datetime": ValueType.DATETIME,
    "object": ValueType.OBJECT,
}

_FILTER_KIND_ALIASES = {
    "bool": FilterKind.BOOLEAN,
    "ordering": FilterKind.ORDER,
}

_COLLECTION_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.Set,
    collections.abc.Iterable,
    collections.abc.Collection,
)


def coerce_groups(value: Any) -> frozenset[str]:
    """
    Normalize a group declaration into a frozenset of names.

    A single string is treated as one group; ``None`` yields an empty set.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value})
    return frozenset(str(item) for item in value)


def coerce_operations(values: Iterable[Any]) -> tuple[Operation, ...]:
    """
    Map declared operations (enum members, operation names or HTTP verbs)
    onto ``Operation`` members, keeping the canonical order.

    Unknown entries are dropped with a warning.
    """
    if isinstance(values, (str, Operation)):
        values = [values]
    enabled: set[Operation] = set()
    for value in values:
        if isinstance(value, Operation):
            enabled.add(value)
            continue
        text = str(value).strip()
        verb_operations = HTTP_METHOD_OPERATIONS.get(text.upper())
        if verb_operations:
            enabled.update(verb_operations)
            continue
        try:
            enabled.add(Operation(text.lower()))
        except ValueError:
            logger.warning("Ignoring unsupported resource operation '%s'", value)
    return tuple(op for op in Operation if op in enabled)


def coerce_value_type(value: Any) -> Optional[ValueType]:
    """Resolve a ValueType from an enum member, a type name or a Python type."""
    if value is None or isinstance(value, ValueType):
        return value
    if isinstance(value, str):
        resolved = _VALUE_TYPE_ALIASES.get(value.strip().lower())
        if resolved is None:
            logger.warning("Unknown value type '%s'", value)
        return resolved
    return value_type_from_annotation(value)


def coerce_filter_kind(value: Any) -> Any:
    """
    Resolve a filter kind name into a ``FilterKind``.

    Unrecognized names are returned unchanged so the compiler can skip them.
    """
    if isinstance(value, FilterKind) or not isinstance(value, str):
        return value
    text = value.strip().lower()
    if text in _FILTER_KIND_ALIASES:
        return _FILTER_KIND_ALIASES[text]
    try:
        return FilterKind(text)
    except ValueError:
        return value


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Return ``(inner_annotation, nullable)`` for ``Optional[X]`` style hints."""
    origin = typing.get_origin(annotation)
    if origin in _UNION_TYPES:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        nullable = len(args) != len(typing.get_args(annotation))
        if len(args) == 1:
            return args[0], nullable
        return annotation, nullable
    return annotation, annotation is None or annotation is type(None)


def is_collection_annotation(annotation: Any) -> bool:
    inner, _ = unwrap_optional(annotation)
    origin = typing.get_origin(inner) or inner
    return isinstance(origin, type) and issubclass(origin, _COLLECTION_ORIGINS) and not (
        issubclass(origin, (str, bytes, collections.abc.Mapping))
    )


def value_type_from_annotation(annotation: Any) -> Optional[ValueType]:
    """
    Derive a ValueType from a type annotation.

    Returns ``None`` for ``Any``, unresolved forward references and unions of
    several concrete types.
    """
    inner, _ = unwrap_optional(annotation)
    if inner is Any or isinstance(inner, (str, typing.ForwardRef)):
        return None
    origin = typing.get_origin(inner) or inner
    if origin in _UNION_TYPES or not isinstance(origin, type):
        return None
    if issubclass(origin, bool):
        return ValueType.BOOLEAN
    if issubclass(origin, int):
        return ValueType.INTEGER
    if issubclass(origin, (float, decimal.Decimal)):
        return ValueType.FLOAT
    if issubclass(origin, str):
        return ValueType.STRING
    if issubclass(origin, datetime.datetime):
        return ValueType.DATETIME
    if issubclass(origin, datetime.date):
        return ValueType.DATE
    if issubclass(origin, enum.Enum):
        return ValueType.STRING
    if issubclass(origin, (collections.abc.Mapping,) + _COLLECTION_ORIGINS):
        return ValueType.ARRAY
    return ValueType.OBJECT


def relation_target_from_annotation(annotation: Any) -> tuple[Any, bool]:
    """
    Return ``(target, many)`` for a relation annotation.

    ``list[Category]`` yields ``(Category, True)``; ``Optional[Category]``
    yields ``(Category, False)``. The target is ``None`` when it cannot be
    resolved to a class.
    """
    inner, _ = unwrap_optional(annotation)
    many = is_collection_annotation(inner)
    if many:
        args = typing.get_args(inner)
        inner = args[0] if args else None
        inner, _ = unwrap_optional(inner)
    if isinstance(inner, type) and inner.__module__ != "builtins":
        return inner, many
    return None, many
