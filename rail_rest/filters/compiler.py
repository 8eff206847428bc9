"""
Filter compiler.

Compiles request query parameters into predicate and sort operations using
the filter bindings declared on a resource. The compiler never executes a
query: the operations are replayed against a ``QueryBuilder``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from django.http import QueryDict

from ..core.meta import EntityMetadata, FilterBinding, FilterKind, ResourceConfig
from ..core.registry import MetadataRegistry, metadata_registry
from ..core.settings import FilteringSettings
from ..http.query import parse_query_params
from .ordering import compile_order
from .strategies import KIND_HANDLERS
from .types import CompiledQuery, Predicate

logger = logging.getLogger(__name__)

ResourceLike = Union[ResourceConfig, EntityMetadata, type, Sequence[FilterBinding]]


class FilterCompiler:
    """
    Compile query parameters against the filter bindings of a resource.

    Example:
        compiled = FilterCompiler().compile(
            {"price": {"gte": "100"}, "order": {"price": "desc"}}, Product
        )
        compiled.apply(builder)
    """

    def __init__(
        self,
        registry: Optional[MetadataRegistry] = None,
        settings: Optional[FilteringSettings] = None,
    ):
        self.registry = registry or metadata_registry
        self.settings = settings or FilteringSettings.from_settings()

    def resolve_bindings(self, resource: ResourceLike) -> tuple[FilterBinding, ...]:
        if isinstance(resource, (ResourceConfig, EntityMetadata)):
            return tuple(resource.filters)
        if isinstance(resource, type):
            return self.registry.get(resource).filters
        return tuple(resource or ())

    def compile(
        self, query_params: Optional[Mapping[str, Any]], resource: ResourceLike
    ) -> CompiledQuery:
        """
        Compile ``query_params`` into ordered operations.

        Predicates come first, in binding declaration order and then bound
        field order; the sorts requested by the ``order`` parameter follow in
        caller order. Unusable values are skipped, never raised. A binding
        producing a parameter name already bound by an earlier one is skipped
        with a warning, so bound names stay unique.

        Args:
            query_params: Parsed parameters (``{"price": {"gte": "10"}}``) or
                a Django ``QueryDict`` using the bracket notation.
            resource: A resource descriptor, an entity class, its metadata,
                or the filter bindings themselves.
        """
        if isinstance(query_params, QueryDict):
            params = parse_query_params(query_params)
        else:
            params = dict(query_params or {})

        order_value = params.pop(self.settings.order_parameter, None)
        sorts = (
            compile_order(order_value, self.settings.field_name_pattern)
            if order_value is not None
            else []
        )

        predicates: list[Predicate] = []
        bound: set[str] = set()
        for binding in self.resolve_bindings(resource):
            if binding.kind == FilterKind.ORDER:
                continue
            handler = KIND_HANDLERS.get(binding.kind)
            if handler is None:
                logger.debug("Skipping unknown filter kind %r", binding.kind)
                continue
            for field in binding.fields:
                if field not in params:
                    continue
                compiled = handler(field, params[field], binding.options, self.settings)
                for predicate in compiled:
                    if predicate.parameter in bound:
                        logger.warning(
                            "Skipping duplicate filter parameter '%s' on '%s'",
                            predicate.parameter,
                            field,
                        )
                        continue
                    bound.add(predicate.parameter)
                    predicates.append(predicate)

        return CompiledQuery(tuple(predicates) + tuple(sorts))


def compile_filters(
    query_params: Optional[Mapping[str, Any]], resource: ResourceLike
) -> CompiledQuery:
    """Compile with the default registry and settings."""
    return FilterCompiler().compile(query_params, resource)
