"""
JSON schema fragments for entity fields.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Optional

from ..core.meta import FieldInfo, ValueType

TYPE_SCHEMAS: dict[ValueType, dict[str, Any]] = {
    ValueType.INTEGER: {"type": "integer"},
    ValueType.FLOAT: {"type": "number", "format": "float"},
    ValueType.BOOLEAN: {"type": "boolean"},
    ValueType.STRING: {"type": "string"},
    ValueType.ARRAY: {"type": "array", "items": {}},
    ValueType.DATE: {"type": "string", "format": "date"},
    ValueType.DATETIME: {"type": "string", "format": "date-time"},
    ValueType.OBJECT: {"type": "object"},
}

DEFAULT_SCHEMA: dict[str, Any] = {"type": "string"}

PROBLEM_DETAILS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string"},
        "title": {"type": "string"},
        "status": {"type": "integer"},
        "detail": {"type": "string"},
        "instance": {"type": "string"},
        "violations": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "field": {"type": "string"},
                    "message": {"type": "string"},
                    "code": {"type": "string"},
                },
            },
        },
    },
    "required": ["type", "title", "status"],
}


def schema_ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def value_schema(value_type: Optional[ValueType]) -> dict[str, Any]:
    schema = TYPE_SCHEMAS.get(value_type, DEFAULT_SCHEMA) if value_type else DEFAULT_SCHEMA
    return copy.deepcopy(schema)


def field_schema(
    info: FieldInfo,
    identifier_schema: Callable[[Any], dict[str, Any]],
    component_name: Callable[[Any], Optional[str]],
) -> dict[str, Any]:
    """
    Schema of one field.

    Relations document the identifier of the target, or a choice between
    the identifier and the target component when ``component_name`` knows
    the target. To-many relations wrap it in an array.
    """
    relation = info.relation
    if relation is not None:
        item = identifier_schema(relation.target)
        name = component_name(relation.target)
        if name is not None:
            item = {"oneOf": [item, schema_ref(name)]}
        schema = {"type": "array", "items": item} if relation.many else item
    else:
        schema = value_schema(info.declared_type)

    prop = info.property_config
    description = (prop.description if prop is not None else None) or info.description
    if description:
        schema["description"] = description
    if prop is not None and prop.default is not None:
        schema["default"] = prop.default
    if info.nullable:
        schema["nullable"] = True
    return schema
