"""
Default configuration for the rail-rest library.

Single source of truth for every setting the library consumes. Each section
mirrors one of the dataclasses defined in ``rail_rest.core.settings``;
projects override values through the ``RAIL_REST`` Django setting using the
same section names.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-rest"


LIBRARY_DEFAULTS: dict[str, Any] = {
    "serialization_settings": {
        "default_groups": ["read"],
        "max_depth_override": None,
        "embed_parameter": "embed",
    },
    "filtering_settings": {
        "order_parameter": "order",
        "field_name_pattern": r"^[A-Za-z_][A-Za-z0-9_]*$",
        "date_aware": True,
    },
    "validation_settings": {
        "default_groups": ["write"],
    },
    "schema_settings": {
        "title": "API Documentation",
        "version": "1.0.0",
        "description": "",
        "base_path": "/api",
        "openapi_version": "3.0.0",
        "server_generated_fields": [
            "id",
            "created_at",
            "updated_at",
            "createdAt",
            "updatedAt",
        ],
        "resources": [],
    },
}


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two settings trees section by section, ``override`` winning."""
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in base.items()}
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged
