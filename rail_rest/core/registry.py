"""
Metadata registry.

Metadata is computed once per entity type and cached for the lifetime of the
process. Entities either declare an inner ``ApiMeta`` class or are registered
explicitly at start-up (typically from an ``api_resources`` module, see
``rail_rest.apps``); explicit registrations take precedence.
"""

from __future__ import annotations

import logging
import threading
import weakref
from types import SimpleNamespace
from typing import Any, Callable, Optional, TypeVar

from django.apps import apps as django_apps
from django.utils.module_loading import import_string

from .meta import EntityMetadata, build_entity_metadata, resolve_declaration

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class MetadataRegistry:
    """Compute-if-absent cache of ``EntityMetadata`` keyed by entity type."""

    def __init__(self) -> None:
        self._cache: "weakref.WeakKeyDictionary[type, EntityMetadata]" = (
            weakref.WeakKeyDictionary()
        )
        self._declarations: dict[type, Any] = {}
        self._lock = threading.Lock()

    def register(
        self, entity_class: type, declaration: Any = None, **attributes: Any
    ) -> None:
        """
        Register metadata for ``entity_class`` explicitly.

        Args:
            entity_class: The entity type.
            declaration: A class or object exposing the ``ApiMeta`` attributes.
            **attributes: ``resource``, ``properties``, ``groups``,
                ``relations`` and ``filters`` given directly.
        """
        if not isinstance(entity_class, type):
            raise TypeError(f"Expected a class, got {entity_class!r}")
        if declaration is None:
            declaration = SimpleNamespace(**attributes)
        elif attributes:
            raise TypeError("Pass either a declaration or keyword attributes, not both")
        with self._lock:
            self._declarations[entity_class] = declaration
            self._cache.pop(entity_class, None)
        logger.debug("Registered API metadata for %s", entity_class.__name__)

    def unregister(self, entity_class: type) -> None:
        with self._lock:
            self._declarations.pop(entity_class, None)
            self._cache.pop(entity_class, None)

    def get(self, entity_class: type) -> EntityMetadata:
        """Return the metadata of ``entity_class``, building it on first use."""
        with self._lock:
            cached = self._cache.get(entity_class)
            if cached is not None:
                return cached
            declaration = self._declarations.get(entity_class)
            if declaration is None:
                declaration = resolve_declaration(entity_class)
            metadata = build_entity_metadata(entity_class, declaration)
            self._cache[entity_class] = metadata
            logger.debug("Built API metadata for %s", entity_class.__name__)
            return metadata

    def registered(self) -> list[type]:
        """Explicitly registered entity classes, in registration order."""
        with self._lock:
            return list(self._declarations)

    def resource_classes(self, extra: Optional[list[Any]] = None) -> list[type]:
        """
        Collect every known resource class.

        Explicit registrations come first, then the classes named in
        ``extra`` (classes or dotted paths), then installed Django models
        declaring a resource. Only types carrying a resource descriptor are
        returned, each once.
        """
        candidates: list[type] = self.registered()
        for item in extra or []:
            candidates.append(import_string(item) if isinstance(item, str) else item)
        if django_apps.ready:
            candidates.extend(
                model
                for model in django_apps.get_models()
                if resolve_declaration(model) is not None
            )
        seen: set[type] = set()
        resources = []
        for candidate in candidates:
            if candidate in seen:
                continue
            seen.add(candidate)
            if self.get(candidate).is_resource:
                resources.append(candidate)
        return resources

    def find(self, name: str, extra: Optional[list[Any]] = None) -> Optional[type]:
        """Find a resource class by short name (case-insensitive)."""
        wanted = name.lower()
        for entity_class in self.resource_classes(extra):
            if self.get(entity_class).short_name.lower() == wanted:
                return entity_class
        return None

    def clear_cache(self) -> None:
        """Drop computed metadata; registrations are kept."""
        with self._lock:
            self._cache.clear()


metadata_registry = MetadataRegistry()


def get_entity_metadata(entity_class: type) -> EntityMetadata:
    """Return the cached metadata of ``entity_class``."""
    return metadata_registry.get(entity_class)


def api_resource(**attributes: Any) -> Callable[[T], T]:
    """
    Class decorator registering the decorated entity.

        @api_resource(resource=ResourceConfig(), properties={...})
        class Product:
            ...
    """

    def decorator(entity_class: T) -> T:
        metadata_registry.register(entity_class, **attributes)
        return entity_class

    return decorator
