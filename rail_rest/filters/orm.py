"""
Django ORM query builder.

Implements the ``QueryBuilder`` contract with ``Q`` objects and ``order_by``
so compiled filters can be applied to a queryset.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.db.models import Q

from .compiler import FilterCompiler, ResourceLike
from .types import DESC, PredicateFragment

logger = logging.getLogger(__name__)

LOOKUPS = {
    "eq": "exact",
    "contains": "icontains",
    "startswith": "istartswith",
    "endswith": "iendswith",
    "gt": "gt",
    "gte": "gte",
    "lt": "lt",
    "lte": "lte",
    "between": "range",
    "date_eq": "date",
}


class DjangoQueryBuilder:
    """
    Accumulate predicates and sorts for a Django queryset.

    Attributes:
        q: Conjunction of every predicate added so far.
        ordering: ``order_by`` arguments in the order sorts were added.
        parameters: Bound parameter values keyed by parameter name.
    """

    def __init__(self, model: Optional[type[models.Model]] = None):
        self.model = model
        self.q = Q()
        self.ordering: list[str] = []
        self.parameters: dict[str, Any] = {}

    def add_predicate(
        self, fragment: PredicateFragment, parameter: str, value: Any
    ) -> "DjangoQueryBuilder":
        if fragment.operator == "word_startswith":
            condition = Q(**{f"{fragment.field}__istartswith": value}) | Q(
                **{f"{fragment.field}__icontains": f" {value}"}
            )
        else:
            lookup = self._lookup_for(fragment)
            condition = Q(**{f"{fragment.field}__{lookup}": value})
        self.q &= condition
        self.parameters[parameter] = value
        return self

    def add_sort(self, field: str, direction: str) -> "DjangoQueryBuilder":
        if self.model is not None and not self._has_field(field):
            logger.debug("Dropping sort on unknown field '%s' of %s", field, self.model.__name__)
            return self
        self.ordering.append(f"-{field}" if direction == DESC else field)
        return self

    def apply(self, queryset: models.QuerySet) -> models.QuerySet:
        queryset = queryset.filter(self.q)
        if self.ordering:
            queryset = queryset.order_by(*self.ordering)
        return queryset

    def _has_field(self, name: str) -> bool:
        try:
            self.model._meta.get_field(name)
        except FieldDoesNotExist:
            return False
        return True

    def _lookup_for(self, fragment: PredicateFragment) -> str:
        if fragment.operator == "date_eq" and not self._is_datetime_field(fragment.field):
            return "exact"
        return LOOKUPS[fragment.operator]

    def _is_datetime_field(self, name: str) -> bool:
        if self.model is None:
            return True
        try:
            field = self.model._meta.get_field(name)
        except FieldDoesNotExist:
            logger.debug("Unknown field '%s' on %s", name, self.model.__name__)
            return True
        return isinstance(field, models.DateTimeField)


def apply_filters(
    queryset: models.QuerySet,
    query_params: Optional[Mapping[str, Any]],
    resource: Optional[ResourceLike] = None,
    compiler: Optional[FilterCompiler] = None,
) -> models.QuerySet:
    """
    Filter and order ``queryset`` from request parameters.

    ``resource`` defaults to the queryset's model.
    """
    compiler = compiler or FilterCompiler()
    compiled = compiler.compile(query_params, resource or queryset.model)
    builder = DjangoQueryBuilder(queryset.model)
    compiled.apply(builder)
    return builder.apply(queryset)
