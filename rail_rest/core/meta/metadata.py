"""
Entity metadata assembled from class introspection and declarations.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from django.db import models

from .builders import (
    build_filter_bindings,
    build_groups_configs,
    build_property_configs,
    build_relation_configs,
    build_resource_config,
)
from .coercion import (
    relation_target_from_annotation,
    unwrap_optional,
    value_type_from_annotation,
)
from .config import (
    FilterBinding,
    GroupsConfig,
    PropertyConfig,
    RelationConfig,
    ResourceConfig,
)
from .enums import ValueType

logger = logging.getLogger(__name__)

_MODEL_FIELD_TYPES = {
    "AutoField": ValueType.INTEGER,
    "BigAutoField": ValueType.INTEGER,
    "SmallAutoField": ValueType.INTEGER,
    "IntegerField": ValueType.INTEGER,
    "BigIntegerField": ValueType.INTEGER,
    "SmallIntegerField": ValueType.INTEGER,
    "PositiveIntegerField": ValueType.INTEGER,
    "PositiveSmallIntegerField": ValueType.INTEGER,
    "PositiveBigIntegerField": ValueType.INTEGER,
    "FloatField": ValueType.FLOAT,
    "DecimalField": ValueType.FLOAT,
    "BooleanField": ValueType.BOOLEAN,
    "NullBooleanField": ValueType.BOOLEAN,
    "CharField": ValueType.STRING,
    "TextField": ValueType.STRING,
    "EmailField": ValueType.STRING,
    "SlugField": ValueType.STRING,
    "URLField": ValueType.STRING,
    "UUIDField": ValueType.STRING,
    "DateField": ValueType.DATE,
    "DateTimeField": ValueType.DATETIME,
}


@dataclass(frozen=True)
class FieldInfo:
    """
    One field of an entity with the descriptors attached to it.

    ``value_type`` is the type derived from the annotation (or the model
    field); ``declared_type`` prefers the type given on the property.
    """

    name: str
    annotation: Any = None
    value_type: Optional[ValueType] = None
    nullable: bool = False
    description: Optional[str] = None
    property_config: Optional[PropertyConfig] = None
    groups: Optional[GroupsConfig] = None
    relation: Optional[RelationConfig] = None

    @property
    def declared_type(self) -> Optional[ValueType]:
        if self.property_config is not None and self.property_config.type is not None:
            return self.property_config.type
        return self.value_type

    @property
    def is_relation(self) -> bool:
        return self.relation is not None

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")


@dataclass(frozen=True)
class EntityMetadata:
    """
    Everything the serializer, filter compiler, validator and schema
    generator know about one entity type.

    Attributes:
        entity_class: The described type.
        resource: Resource descriptor, ``None`` for plain value types.
        fields: Fields in declaration order.
        filters: Filter bindings in declaration order.
        introspected: False when the type declares no annotations, in which
                      case instances are inspected at serialization time.
    """

    entity_class: type
    resource: Optional[ResourceConfig] = None
    fields: tuple[FieldInfo, ...] = ()
    filters: tuple[FilterBinding, ...] = ()
    introspected: bool = True
    _index: dict[str, FieldInfo] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._index.update((info.name, info) for info in self.fields)

    @property
    def short_name(self) -> str:
        if self.resource is not None and self.resource.short_name:
            return self.resource.short_name
        return self.entity_class.__name__

    @property
    def is_resource(self) -> bool:
        return self.resource is not None

    @property
    def field_names(self) -> list[str]:
        return [info.name for info in self.fields]

    def get_field(self, name: str) -> Optional[FieldInfo]:
        return self._index.get(name)

    def iter_instance_fields(self, instance: Any) -> Iterator[FieldInfo]:
        """
        Yield the fields to consider for ``instance``.

        Introspected types yield their declared fields. Other types also
        yield the instance attributes not covered by a declaration.
        """
        yield from self.fields
        if self.introspected:
            return
        for name in getattr(instance, "__dict__", {}):
            if name not in self._index:
                yield FieldInfo(name=name)


def _collect_annotations(entity_class: type) -> dict[str, Any]:
    """Class annotations across the MRO, base classes first."""
    raw: dict[str, Any] = {}
    for klass in reversed(entity_class.__mro__):
        if klass is object:
            continue
        raw.update(klass.__dict__.get("__annotations__", {}))
    try:
        resolved = typing.get_type_hints(entity_class)
    except (NameError, TypeError, AttributeError) as exc:
        logger.debug(
            "Could not resolve type hints of %s: %s", entity_class.__name__, exc
        )
        resolved = {}
    annotations = {}
    for name, annotation in raw.items():
        annotation = resolved.get(name, annotation)
        if typing.get_origin(annotation) is typing.ClassVar:
            continue
        annotations[name] = annotation
    return annotations


def _annotated_field(name: str, annotation: Any) -> dict[str, Any]:
    _, nullable = unwrap_optional(annotation)
    return {
        "name": name,
        "annotation": annotation,
        "value_type": value_type_from_annotation(annotation),
        "nullable": nullable,
    }


def _model_field(model_field: Any) -> dict[str, Any]:
    return {
        "name": model_field.name,
        "annotation": model_field,
        "value_type": (
            None
            if model_field.is_relation
            else _MODEL_FIELD_TYPES.get(model_field.get_internal_type())
        ),
        "nullable": bool(getattr(model_field, "null", False)),
        "description": str(model_field.help_text) if model_field.help_text else None,
    }


def _resolve_relation(
    relation: Optional[RelationConfig], annotation: Any
) -> Optional[RelationConfig]:
    """Fill ``target`` and ``many`` of a relation from the field annotation."""
    if isinstance(annotation, models.Field) and annotation.is_relation:
        target = annotation.related_model
        many = bool(annotation.many_to_many or annotation.one_to_many)
        relation = relation or RelationConfig()
    elif relation is not None and annotation is not None:
        target, many = relation_target_from_annotation(annotation)
    else:
        return relation
    updates = {}
    if relation.target is None and target is not None:
        updates["target"] = target
    if relation.many is None:
        updates["many"] = many
    return dataclasses.replace(relation, **updates) if updates else relation


def build_entity_metadata(entity_class: type, declaration: Any) -> EntityMetadata:
    """
    Assemble the metadata of ``entity_class`` from its fields and an
    optional declaration.

    Django models contribute their concrete and many-to-many fields, with a
    default relation descriptor for every relational field. Other classes
    contribute their annotations. Names appearing only in the declaration are
    appended after the introspected fields.
    """
    properties = build_property_configs(declaration)
    groups = build_groups_configs(declaration)
    relations = build_relation_configs(declaration)

    if isinstance(entity_class, type) and issubclass(entity_class, models.Model):
        opts = entity_class._meta
        raw_fields = [
            _model_field(f) for f in list(opts.concrete_fields) + list(opts.many_to_many)
        ]
    else:
        raw_fields = [
            _annotated_field(name, annotation)
            for name, annotation in _collect_annotations(entity_class).items()
        ]
    introspected = bool(raw_fields)

    known = {raw["name"] for raw in raw_fields}
    for name in list(properties) + list(groups) + list(relations):
        if name not in known:
            known.add(name)
            raw_fields.append({"name": name})

    fields = tuple(
        FieldInfo(
            property_config=properties.get(raw["name"]),
            groups=groups.get(raw["name"]),
            relation=_resolve_relation(
                relations.get(raw["name"]), raw.get("annotation")
            ),
            **raw,
        )
        for raw in raw_fields
    )

    resource = build_resource_config(declaration, entity_class)
    filters = resource.filters if resource is not None else build_filter_bindings(declaration)
    metadata = EntityMetadata(
        entity_class=entity_class,
        resource=resource,
        fields=fields,
        filters=tuple(filters),
        introspected=introspected,
    )
    _validate_configuration(metadata)
    return metadata


def _validate_configuration(metadata: EntityMetadata) -> None:
    """Log filter bindings that reference unknown fields."""
    if not metadata.introspected:
        return
    known = set(metadata.field_names)
    for binding in metadata.filters:
        for name in binding.fields:
            if name not in known:
                logger.warning(
                    "Filter '%s' on %s references unknown field '%s'",
                    getattr(binding.kind, "value", binding.kind),
                    metadata.entity_class.__name__,
                    name,
                )
