"""
Graph serializer.

Turns entity instances into plain value trees (dicts, lists and scalars)
following the field-inclusion policy and the relation embedding rules of the
entity metadata.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from typing import Any, Iterable, Optional, Union

from django.db import models

from ..core.meta import FieldInfo, is_field_visible
from ..core.registry import MetadataRegistry, metadata_registry
from ..core.settings import SerializationSettings
from ..exceptions import SerializationError, UnsupportedValueError
from .context import SerializationContext
from .plain import PlainRepresentable
from .relations import SCALAR_TYPES, identifiers, is_many, iter_related

_MISSING = object()

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class GraphSerializer:
    """
    Serialize entities and collections of entities.

    The serializer keeps no per-call state: groups, embed set and depth
    override travel with each call in a ``SerializationContext``, so one
    instance can be shared between threads.

    Example:
        serializer = GraphSerializer()
        serializer.serialize(product, ["read"], embed="category")
    """

    def __init__(
        self,
        registry: Optional[MetadataRegistry] = None,
        settings: Optional[SerializationSettings] = None,
    ):
        self.registry = registry or metadata_registry
        self.settings = settings or SerializationSettings.from_settings()

    def build_context(
        self,
        groups: Union[None, str, Iterable[str]] = None,
        embed: Union[None, str, Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ) -> SerializationContext:
        if groups is None:
            groups = self.settings.default_groups
        if max_depth is None:
            max_depth = self.settings.max_depth_override
        return SerializationContext.create(groups, embed=embed, max_depth=max_depth)

    def serialize(
        self,
        value: Any,
        groups: Union[None, str, Iterable[str]] = None,
        *,
        embed: Union[None, str, Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ) -> Any:
        """
        Serialize one entity or an ordered collection of entities.

        Args:
            value: An entity, a list/tuple/queryset or iterator of entities,
                or ``None``.
            groups: Visibility groups; defaults to the configured groups.
            embed: Relation names to expand (``"a,b"`` or an iterable).
                ``None`` expands every relation up to its depth.
            max_depth: Depth applied to every relation.

        Returns:
            A dict for an entity, a list for a collection, ``None`` for ``None``.

        Raises:
            UnsupportedValueError: If ``value`` is not an entity or a collection
                of entities.
            ValueError: If ``groups`` is empty.
        """
        context = self.build_context(groups, embed, max_depth)
        return self.serialize_with_context(value, context)

    def serialize_with_context(self, value: Any, context: SerializationContext) -> Any:
        if value is None:
            return None
        if is_many(value) and not isinstance(value, (set, frozenset)):
            return [self._serialize_root(item, context) for item in iter_related(value)]
        if isinstance(value, Iterator):
            return [self._serialize_root(item, context) for item in value]
        return self._serialize_root(value, context)

    def serialize_relation(
        self,
        value: Any,
        context: SerializationContext,
        current_depth: int,
        max_depth: int,
    ) -> Any:
        """
        Serialize a relation value found at ``current_depth``.

        Identifiers are emitted once ``current_depth`` reaches ``max_depth``;
        otherwise the related entities are expanded one level deeper, with
        ``max_depth`` bounding their own relations.
        """
        if value is None:
            return None
        if current_depth >= max_depth:
            return identifiers(value)
        if is_many(value):
            return [
                self._serialize_entity(item, context, current_depth + 1, max_depth)
                for item in iter_related(value)
            ]
        return self._serialize_entity(value, context, current_depth + 1, max_depth)

    def _serialize_root(self, item: Any, context: SerializationContext) -> Any:
        if item is None:
            return None
        if isinstance(item, SCALAR_TYPES + _SEQUENCE_TYPES) or isinstance(
            item, (Mapping, enum.Enum)
        ):
            raise UnsupportedValueError(
                f"Cannot serialize {type(item).__name__!r}: expected an entity "
                "or a collection of entities"
            )
        return self._serialize_entity(item, context, 0, None)

    def _serialize_entity(
        self,
        entity: Any,
        context: SerializationContext,
        depth: int,
        limit: Optional[int],
    ) -> Any:
        if entity is None or isinstance(entity, SCALAR_TYPES):
            return entity
        return self._serialize_object(entity, context, depth, limit, (id(entity),))

    def _serialize_object(
        self,
        obj: Any,
        context: SerializationContext,
        depth: int,
        limit: Optional[int],
        path: tuple[int, ...],
    ) -> dict[str, Any]:
        metadata = self.registry.get(type(obj))
        result: dict[str, Any] = {}
        for info in metadata.iter_instance_fields(obj):
            if not is_field_visible(info, context.groups, metadata.resource):
                continue
            value = getattr(obj, info.name, _MISSING)
            if value is _MISSING:
                continue
            if info.relation is not None:
                result[info.name] = self._serialize_relation_field(
                    info, value, context, depth, limit
                )
            else:
                result[info.name] = self._normalize(value, context, depth, limit, path)
        return result

    def _serialize_relation_field(
        self,
        info: FieldInfo,
        value: Any,
        context: SerializationContext,
        depth: int,
        limit: Optional[int],
    ) -> Any:
        relation = info.relation
        if not context.allows_embedding(info.name, relation.groups):
            return identifiers(value)
        max_depth = context.relation_depth(relation.max_depth)
        if limit is not None:
            max_depth = min(max_depth, limit)
        return self.serialize_relation(value, context, depth, max_depth)

    def _normalize(
        self,
        value: Any,
        context: SerializationContext,
        depth: int,
        limit: Optional[int],
        path: tuple[int, ...],
    ) -> Any:
        if value is None or isinstance(value, SCALAR_TYPES):
            return value
        if isinstance(value, enum.Enum):
            return value.value
        if isinstance(value, PlainRepresentable):
            return value.to_plain()
        if isinstance(value, Mapping):
            return {
                key: self._normalize(item, context, depth, limit, path)
                for key, item in value.items()
            }
        if isinstance(value, _SEQUENCE_TYPES):
            return [self._normalize(item, context, depth, limit, path) for item in value]
        if isinstance(value, (models.QuerySet, models.Manager)):
            return [
                self._normalize(item, context, depth, limit, path)
                for item in iter_related(value)
            ]
        if id(value) in path:
            raise SerializationError(
                f"Embedded value of type {type(value).__name__!r} refers back to itself"
            )
        return self._serialize_object(value, context, depth, limit, path + (id(value),))
