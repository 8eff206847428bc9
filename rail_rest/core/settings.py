"""
Settings dataclasses for rail-rest.

Each dataclass is built from ``LIBRARY_DEFAULTS`` merged with the matching
section of the ``RAIL_REST`` Django setting and optional overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings as django_settings

from ..defaults import LIBRARY_DEFAULTS, merge_settings


def _merge_settings_dicts(*dicts: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Merge settings dictionaries with later ones taking precedence."""
    result: dict[str, Any] = {}
    for d in dicts:
        if d:
            result.update(d)
    return result


def _get_section(section: str) -> dict[str, Any]:
    project = getattr(django_settings, "RAIL_REST", None) or {}
    return merge_settings(LIBRARY_DEFAULTS, project).get(section, {})


class _SectionMixin:
    section: str = ""

    @classmethod
    def from_settings(cls, **overrides: Any):
        merged = _merge_settings_dicts(_get_section(cls.section), overrides)
        valid_fields = set(cls.__dataclass_fields__.keys())
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})


@dataclass
class SerializationSettings(_SectionMixin):
    """Settings for the graph serializer."""

    section = "serialization_settings"

    default_groups: list[str] = field(default_factory=lambda: ["read"])
    max_depth_override: Optional[int] = None
    embed_parameter: str = "embed"


@dataclass
class FilteringSettings(_SectionMixin):
    """Settings for the filter compiler."""

    section = "filtering_settings"

    order_parameter: str = "order"
    field_name_pattern: str = r"^[A-Za-z_][A-Za-z0-9_]*$"
    date_aware: bool = True


@dataclass
class ValidationSettings(_SectionMixin):
    section = "validation_settings"

    default_groups: list[str] = field(default_factory=lambda: ["write"])


@dataclass
class SchemaSettings(_SectionMixin):
    """Settings for the OpenAPI document."""

    section = "schema_settings"

    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str = ""
    base_path: str = "/api"
    openapi_version: str = "3.0.0"
    server_generated_fields: list[str] = field(default_factory=list)
    resources: list[Any] = field(default_factory=list)
