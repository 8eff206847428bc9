"""
API Meta Configuration Package

This package provides the ApiMeta class and the descriptors entities use to
declare how they are exposed as REST resources.

Example usage:
    from rail_rest.core.meta import ApiMeta

    class Category:
        id: int
        name: str

        class ApiMeta(ApiMeta):
            resource = ApiMeta.Resource(short_name="Category")
            properties = {"name": ApiMeta.Property(required=True)}
"""

from .api_meta import ApiMeta, resolve_declaration
from .config import (
    FilterBinding,
    GroupsConfig,
    PropertyConfig,
    RelationConfig,
    ResourceConfig,
)
from .enums import FilterKind, Operation, ValueType
from .metadata import EntityMetadata, FieldInfo, build_entity_metadata
from .visibility import is_field_visible, is_field_writable

__all__ = [
    "ApiMeta",
    "resolve_declaration",
    "build_entity_metadata",
    "EntityMetadata",
    "FieldInfo",
    # Configuration dataclasses
    "ResourceConfig",
    "PropertyConfig",
    "GroupsConfig",
    "RelationConfig",
    "FilterBinding",
    # Enumerations
    "Operation",
    "ValueType",
    "FilterKind",
    # Inclusion policy
    "is_field_visible",
    "is_field_writable",
]
