"""
API Meta Configuration Dataclasses

This module contains the immutable descriptors used by ``ApiMeta`` to
describe a resource: the resource itself, per-field visibility and
validation rules, relation embedding limits and filter bindings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Collection, Mapping, Optional, Sequence, Union

from .coercion import (
    coerce_filter_kind,
    coerce_groups,
    coerce_operations,
    coerce_value_type,
)
from .enums import DEFAULT_OPERATIONS, FilterKind, Operation, ValueType


@dataclass(frozen=True)
class FilterBinding:
    """
    Pairs a filter kind with the fields it governs.

    Attributes:
        kind: One of the ``FilterKind`` names, or a callable used as a custom
              filter (stored as ``FilterKind.CUSTOM`` with the callable in
              ``options["filter"]``).
        fields: Names of the filtered fields.
        options: Read-only bag of kind specific options.
    """

    kind: Union[FilterKind, str, Callable[..., Any]]
    fields: Sequence[str] = ()
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        options = dict(self.options or {})
        kind = self.kind
        if callable(kind) and not isinstance(kind, (str, FilterKind)):
            options.setdefault("filter", kind)
            kind = FilterKind.CUSTOM
        fields = (self.fields,) if isinstance(self.fields, str) else tuple(self.fields)
        object.__setattr__(self, "kind", coerce_filter_kind(kind))
        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "options", MappingProxyType(options))


@dataclass(frozen=True)
class ResourceConfig:
    """
    Resource level descriptor.

    Attributes:
        operations: Enabled operations. HTTP verbs are accepted and mapped
                    (GET enables both reads).
        normalization_groups: Groups used when the resource is serialized.
        denormalization_groups: Groups used when input is validated.
        short_name: Display name, defaults to the entity class name.
        pagination_enabled: Whether collection reads are paginated.
        items_per_page: Default page size.
        filters: Filter bindings, applied in declaration order.
        description: Optional text used by the documentation.
    """

    operations: Collection[Union[Operation, str]] = DEFAULT_OPERATIONS
    normalization_groups: Collection[str] = ("read",)
    denormalization_groups: Collection[str] = ("write",)
    short_name: Optional[str] = None
    pagination_enabled: bool = True
    items_per_page: int = 30
    filters: Sequence[FilterBinding] = ()
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "operations", coerce_operations(self.operations))
        object.__setattr__(
            self, "normalization_groups", coerce_groups(self.normalization_groups)
        )
        object.__setattr__(
            self, "denormalization_groups", coerce_groups(self.denormalization_groups)
        )
        object.__setattr__(self, "filters", tuple(self.filters))
        if (
            isinstance(self.items_per_page, bool)
            or not isinstance(self.items_per_page, int)
            or self.items_per_page < 1
        ):
            raise ValueError(
                f"items_per_page must be a positive integer, got {self.items_per_page!r}"
            )

    def allows(self, operation: Union[Operation, str]) -> bool:
        return Operation(operation) in self.operations


@dataclass(frozen=True)
class PropertyConfig:
    """
    Field level descriptor.

    Attributes:
        groups: Visibility groups of the field.
        readable: Whether the field may appear in output.
        writable: Whether the field is accepted on input.
        required: Whether input must carry the field.
        description: Human readable description for the documentation.
        default: Documented default value.
        type: Declared value type; derived from the annotation when omitted.
    """

    groups: Collection[str] = ("read", "write")
    readable: bool = True
    writable: bool = True
    required: bool = False
    description: Optional[str] = None
    default: Any = None
    type: Optional[Union[ValueType, str]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", coerce_groups(self.groups))
        object.__setattr__(self, "type", coerce_value_type(self.type))


@dataclass(frozen=True)
class GroupsConfig:
    """Group-only descriptor for fields that need nothing else."""

    groups: Collection[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", coerce_groups(self.groups))


@dataclass(frozen=True)
class RelationConfig:
    """
    Relation descriptor for fields referring to other entities.

    Attributes:
        max_depth: Number of relation levels expanded below the owning entity.
                   ``0`` always emits identifiers.
        groups: Groups for which the relation is expanded. Other calls only
                get identifiers.
        target: Related entity class, derived from the annotation when omitted.
        many: Whether the relation is to-many, derived from the annotation
              (or the runtime value) when omitted.
    """

    max_depth: int = 1
    groups: Collection[str] = ("read",)
    target: Optional[type] = None
    many: Optional[bool] = None

    def __post_init__(self) -> None:
        if (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 0
        ):
            raise ValueError(
                f"max_depth must be a non-negative integer, got {self.max_depth!r}"
            )
        object.__setattr__(self, "groups", coerce_groups(self.groups))
