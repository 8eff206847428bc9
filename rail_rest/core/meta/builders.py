"""
Configuration Builders for API Meta

Functions building configuration dataclass instances from raw declarations.
A declaration is any object exposing the optional attributes ``resource``,
``properties``, ``groups``, ``relations`` and ``filters`` (an inner
``ApiMeta`` class or the namespace created by an explicit registration).
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional

from ...exceptions import MetadataError
from .config import (
    FilterBinding,
    GroupsConfig,
    PropertyConfig,
    RelationConfig,
    ResourceConfig,
)

logger = logging.getLogger(__name__)


def _from_dict(config_class: type, raw: dict[str, Any], label: str) -> Any:
    try:
        return config_class(**raw)
    except TypeError as exc:
        raise MetadataError(f"Invalid {label} declaration: {exc}") from exc


def build_resource_config(
    declaration: Any, entity_class: type
) -> Optional[ResourceConfig]:
    """
    Construct the resource descriptor of an entity.

    ``resource = True`` enables a resource with default settings; a dict is
    passed to ``ResourceConfig``. Bindings declared in ``filters`` are
    appended to the ones carried by the resource itself.

    Returns:
        The descriptor, or ``None`` when the entity is not a resource.

    Raises:
        MetadataError: If a dict declaration carries unknown keys.
    """
    if not declaration:
        return None
    raw = getattr(declaration, "resource", None)
    if raw is None or raw is False:
        return None
    if raw is True:
        resource = ResourceConfig()
    elif isinstance(raw, ResourceConfig):
        resource = raw
    elif isinstance(raw, dict):
        resource = _from_dict(ResourceConfig, raw, f"resource on {entity_class.__name__}")
    else:
        logger.warning(
            "Ignoring invalid resource declaration on %s: %r",
            entity_class.__name__,
            raw,
        )
        return None

    return dataclasses.replace(
        resource,
        short_name=resource.short_name or entity_class.__name__,
        filters=tuple(resource.filters) + build_filter_bindings(declaration),
    )


def build_property_configs(declaration: Any) -> dict[str, PropertyConfig]:
    raw = getattr(declaration, "properties", None) if declaration else None
    configs: dict[str, PropertyConfig] = {}
    for name, value in (raw or {}).items():
        if isinstance(value, PropertyConfig):
            configs[name] = value
        elif isinstance(value, dict):
            configs[name] = _from_dict(PropertyConfig, value, f"property '{name}'")
        else:
            logger.warning("Ignoring invalid property declaration '%s': %r", name, value)
    return configs


def build_groups_configs(declaration: Any) -> dict[str, GroupsConfig]:
    """Accept ``GroupsConfig`` instances, group names or lists of names."""
    raw = getattr(declaration, "groups", None) if declaration else None
    configs: dict[str, GroupsConfig] = {}
    for name, value in (raw or {}).items():
        if isinstance(value, GroupsConfig):
            configs[name] = value
        elif isinstance(value, (str, list, tuple, set, frozenset)):
            configs[name] = GroupsConfig(groups=value)
        else:
            logger.warning("Ignoring invalid groups declaration '%s': %r", name, value)
    return configs


def build_relation_configs(declaration: Any) -> dict[str, RelationConfig]:
    """
    Accept ``RelationConfig`` instances, dicts, or a bare integer used as the
    maximum depth.
    """
    raw = getattr(declaration, "relations", None) if declaration else None
    configs: dict[str, RelationConfig] = {}
    for name, value in (raw or {}).items():
        if isinstance(value, RelationConfig):
            configs[name] = value
        elif isinstance(value, dict):
            configs[name] = _from_dict(RelationConfig, value, f"relation '{name}'")
        elif isinstance(value, int) and not isinstance(value, bool):
            configs[name] = RelationConfig(max_depth=value)
        else:
            logger.warning("Ignoring invalid relation declaration '%s': %r", name, value)
    return configs


def build_filter_bindings(declaration: Any) -> tuple[FilterBinding, ...]:
    """
    Normalize the ``filters`` declaration.

    Entries may be ``FilterBinding`` instances, ``(kind, fields)`` or
    ``(kind, fields, options)`` tuples, or dicts of the same keys.
    """
    raw = getattr(declaration, "filters", None) if declaration else None
    bindings: list[FilterBinding] = []
    for value in raw or ():
        if isinstance(value, FilterBinding):
            bindings.append(value)
        elif isinstance(value, dict):
            bindings.append(_from_dict(FilterBinding, value, "filter"))
        elif isinstance(value, (list, tuple)) and 2 <= len(value) <= 3:
            bindings.append(FilterBinding(*value))
        else:
            logger.warning("Ignoring invalid filter declaration: %r", value)
    return tuple(bindings)
