"""
Field-inclusion policy shared by the serializer, the validator and the
schema generator.
"""

from __future__ import annotations

from typing import AbstractSet, Optional

from .config import ResourceConfig
from .metadata import FieldInfo


def is_field_visible(
    field: FieldInfo,
    groups: AbstractSet[str],
    resource: Optional[ResourceConfig] = None,
) -> bool:
    """
    Decide whether ``field`` is part of an output produced for ``groups``.

    The first matching rule wins:

    1. A property descriptor excludes unreadable fields and otherwise
       requires its groups to intersect.
    2. A groups descriptor requires its groups to intersect.
    3. On a resource, the resource normalization groups must intersect.
    4. Otherwise only public fields are included.
    """
    if field.property_config is not None:
        if not field.property_config.readable:
            return False
        return not field.property_config.groups.isdisjoint(groups)
    if field.groups is not None:
        return not field.groups.groups.isdisjoint(groups)
    if resource is not None:
        return not resource.normalization_groups.isdisjoint(groups)
    return field.is_public


def is_field_writable(
    field: FieldInfo,
    groups: AbstractSet[str],
    resource: Optional[ResourceConfig] = None,
) -> bool:
    """Input-side counterpart of ``is_field_visible``."""
    if field.property_config is not None:
        if not field.property_config.writable:
            return False
        return not field.property_config.groups.isdisjoint(groups)
    if field.groups is not None:
        return not field.groups.groups.isdisjoint(groups)
    if resource is not None:
        return not resource.denormalization_groups.isdisjoint(groups)
    return field.is_public
