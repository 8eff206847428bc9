"""
Documentation parameters for collection operations.

Filter parameters mirror the shapes accepted by the filter compiler: a plain
value or a ``field[strategy]=value`` object for search, range and date
filters, a boolean for boolean filters and ``order[field]`` for ordering.
"""

from __future__ import annotations

from typing import Any, Optional

from ..core.meta import FilterBinding, FilterKind
from ..filters.strategies import (
    DATE_STRATEGIES,
    DEFAULT_DATE_STRATEGY,
    DEFAULT_RANGE_STRATEGY,
    DEFAULT_SEARCH_STRATEGY,
    RANGE_STRATEGIES,
    SEARCH_STRATEGIES,
)


def _strategy_parameter(
    field: str,
    strategies: dict[str, dict[str, Any]],
    default: str,
    label: str,
) -> dict[str, Any]:
    scalar = strategies.get(default, {"type": "string"})
    return {
        "name": field,
        "in": "query",
        "required": False,
        "style": "deepObject",
        "explode": True,
        "description": (
            f"{label} filter on '{field}'. Use {field}[strategy]=value with "
            f"one of: {', '.join(strategies)} (default: {default})."
        ),
        "schema": {
            "oneOf": [
                dict(scalar),
                {"type": "object", "properties": strategies},
            ]
        },
    }


def search_parameter(field: str, options: Any) -> dict[str, Any]:
    default = options.get("strategy", DEFAULT_SEARCH_STRATEGY)
    strategies = {name: {"type": "string"} for name in SEARCH_STRATEGIES}
    return _strategy_parameter(field, strategies, default, "Search")


def range_parameter(field: str, options: Any) -> dict[str, Any]:
    default = options.get("strategy", DEFAULT_RANGE_STRATEGY)
    strategies: dict[str, dict[str, Any]] = {
        name: {"type": "number"} for name in RANGE_STRATEGIES if name != "between"
    }
    strategies["between"] = {
        "type": "string",
        "pattern": r"^-?[0-9.]+,-?[0-9.]+$",
        "example": "10,20",
    }
    return _strategy_parameter(field, strategies, default, "Range")


def date_parameter(field: str, options: Any) -> dict[str, Any]:
    default = options.get("strategy", DEFAULT_DATE_STRATEGY)
    strategies = {name: {"type": "string", "format": "date"} for name in DATE_STRATEGIES}
    return _strategy_parameter(field, strategies, default, "Date")


def boolean_parameter(field: str, options: Any) -> dict[str, Any]:
    return {
        "name": field,
        "in": "query",
        "required": False,
        "description": f"Boolean filter on '{field}' (true/false/1/0).",
        "schema": {"type": "boolean"},
    }


def order_parameter(field: str, options: Any, order_name: str = "order") -> dict[str, Any]:
    return {
        "name": f"{order_name}[{field}]",
        "in": "query",
        "required": False,
        "description": f"Sort by '{field}'.",
        "schema": {"type": "string", "enum": ["asc", "desc"], "default": "asc"},
    }


def custom_parameter(field: str, options: Any) -> dict[str, Any]:
    return {
        "name": field,
        "in": "query",
        "required": False,
        "description": options.get("description") or f"Custom filter on '{field}'.",
        "schema": dict(options.get("schema") or {"type": "string"}),
    }


PARAMETER_BUILDERS = {
    FilterKind.SEARCH: search_parameter,
    FilterKind.RANGE: range_parameter,
    FilterKind.DATE: date_parameter,
    FilterKind.BOOLEAN: boolean_parameter,
    FilterKind.CUSTOM: custom_parameter,
}


def filter_parameters(binding: FilterBinding, order_name: str = "order") -> list[dict[str, Any]]:
    """One parameter per bound field; unknown kinds document nothing."""
    if binding.kind == FilterKind.ORDER:
        return [order_parameter(field, binding.options, order_name) for field in binding.fields]
    builder = PARAMETER_BUILDERS.get(binding.kind)
    if builder is None:
        return []
    return [builder(field, binding.options) for field in binding.fields]


def _strategy_properties(schema: dict[str, Any]) -> dict[str, Any]:
    for option in schema.get("oneOf", ()):
        if option.get("type") == "object":
            return option.get("properties", {})
    return {}


def merge_parameters(parameters: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Collapse parameters sharing a name into one.

    A field bound by several filters is documented once; the strategy
    properties of every binding are combined, the first binding winning on
    conflicting strategy names.
    """
    merged: dict[str, dict[str, Any]] = {}
    for parameter in parameters:
        existing = merged.get(parameter["name"])
        if existing is None:
            merged[parameter["name"]] = parameter
            continue
        combined = dict(existing)
        combined["description"] = " ".join(
            text for text in (existing.get("description"), parameter.get("description")) if text
        )
        properties = dict(_strategy_properties(existing["schema"]))
        for name, schema in _strategy_properties(parameter["schema"]).items():
            properties.setdefault(name, schema)
        if properties:
            schema = existing["schema"]
            scalar = schema["oneOf"][0] if "oneOf" in schema else schema
            combined.update(
                style="deepObject",
                explode=True,
                schema={"oneOf": [dict(scalar), {"type": "object", "properties": properties}]},
            )
        merged[parameter["name"]] = combined
    return list(merged.values())


def pagination_parameters(items_per_page: int) -> list[dict[str, Any]]:
    return [
        {
            "name": "page",
            "in": "query",
            "required": False,
            "description": "Page number.",
            "schema": {"type": "integer", "minimum": 1, "default": 1},
        },
        {
            "name": "limit",
            "in": "query",
            "required": False,
            "description": "Number of items per page.",
            "schema": {"type": "integer", "minimum": 1, "default": items_per_page},
        },
    ]


def generic_order_parameter(order_name: str = "order") -> dict[str, Any]:
    return {
        "name": order_name,
        "in": "query",
        "required": False,
        "style": "deepObject",
        "explode": True,
        "description": f"Sort order, e.g. {order_name}[field]=asc|desc.",
        "schema": {
            "type": "object",
            "additionalProperties": {"type": "string", "enum": ["asc", "desc"]},
        },
    }


def embed_parameter(relation_names: list[str], name: str = "embed") -> Optional[dict[str, Any]]:
    if not relation_names:
        return None
    return {
        "name": name,
        "in": "query",
        "required": False,
        "description": (
            "Comma separated relations to embed, among: "
            f"{', '.join(relation_names)}."
        ),
        "schema": {"type": "string"},
    }
