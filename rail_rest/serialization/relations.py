"""
Helpers for values found at relation fields.
"""

from __future__ import annotations

import datetime
import decimal
import uuid
from typing import Any, Iterator

from django.db import models

SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def is_many(value: Any) -> bool:
    """True for to-many relation values (sequences, querysets, related managers)."""
    return isinstance(value, _SEQUENCE_TYPES + (models.QuerySet, models.Manager))


def iter_related(value: Any) -> Iterator[Any]:
    if isinstance(value, models.Manager):
        return iter(value.all())
    return iter(value)


def extract_identifier(value: Any) -> Any:
    """
    Return the identifier of a related object.

    Looks for an ``id`` attribute, then a ``get_id()`` accessor, then the
    primary key of a Django model. Scalars are already identifiers (a bare
    foreign key) and come back unchanged. Returns ``None`` when none applies.
    """
    if value is None or isinstance(value, SCALAR_TYPES):
        return value
    identifier = getattr(value, "id", None)
    if identifier is not None:
        return identifier
    accessor = getattr(value, "get_id", None)
    if callable(accessor):
        return accessor()
    if isinstance(value, models.Model):
        return value.pk
    return None


def identifiers(value: Any) -> Any:
    """Identifier-only form of a to-one or to-many relation value."""
    if value is None:
        return None
    if is_many(value):
        return [extract_identifier(item) for item in iter_related(value)]
    return extract_identifier(value)
