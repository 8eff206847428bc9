"""
API Meta Configuration System

This module provides the ApiMeta base class used to describe how a plain
entity class (or a Django model) is exposed as a REST resource.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import (
    FilterBinding,
    GroupsConfig,
    PropertyConfig,
    RelationConfig,
    ResourceConfig,
)
from .enums import FilterKind, Operation, ValueType

logger = logging.getLogger(__name__)


class ApiMeta:
    """
    Declarative metadata holder for entity classes.

    Entities declare an inner ``ApiMeta`` class grouping the descriptors:

        @dataclass
        class Product:
            id: Optional[int] = None
            name: str = ""
            price: float = 0.0
            category: Optional[Category] = None

            class ApiMeta(ApiMeta):
                resource = ApiMeta.Resource(operations=["GET", "POST"])
                properties = {
                    "name": ApiMeta.Property(required=True),
                    "price": ApiMeta.Property(groups=["read"]),
                }
                groups = {"sku": ["admin"]}
                relations = {"category": ApiMeta.Relation(max_depth=1)}
                filters = [
                    ApiMeta.Filter("search", ["name"]),
                    ApiMeta.Filter("range", ["price"]),
                ]

    Every attribute is optional; an entity without any declaration still
    serializes through the public-field fallback.
    """

    # Class-level aliases for configuration classes
    Resource = ResourceConfig
    Property = PropertyConfig
    Groups = GroupsConfig
    Relation = RelationConfig
    Filter = FilterBinding
    Kind = FilterKind
    Type = ValueType
    Operation = Operation

    resource: Any = None
    properties: dict[str, Any] = {}
    groups: dict[str, Any] = {}
    relations: dict[str, Any] = {}
    filters: list[Any] = []


def resolve_declaration(entity_class: type) -> Optional[Any]:
    """Return the inner ``ApiMeta`` class declared on ``entity_class``, if any."""
    declaration = getattr(entity_class, "ApiMeta", None)
    if declaration is None:
        return None
    if not isinstance(declaration, type):
        logger.warning(
            "Ignoring ApiMeta on %s: expected a class, got %r",
            entity_class.__name__,
            declaration,
        )
        return None
    return declaration
