"""
OpenAPI document generator.

Derives an OpenAPI 3 document from resource metadata alone: one path item
per enabled operation, one component schema per resource and query
parameters for pagination, ordering, embedding and every filter binding.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Optional

from ..core.meta import EntityMetadata, Operation, is_field_visible, is_field_writable
from ..core.registry import MetadataRegistry, metadata_registry
from ..core.settings import FilteringSettings, SchemaSettings, SerializationSettings
from .parameters import (
    embed_parameter,
    filter_parameters,
    generic_order_parameter,
    merge_parameters,
    pagination_parameters,
)
from .types import PROBLEM_DETAILS_SCHEMA, field_schema, schema_ref, value_schema

logger = logging.getLogger(__name__)

READ_GROUPS = frozenset({"read"})
WRITE_GROUPS = frozenset({"write"})

JSON = "application/json"
PROBLEM_JSON = "application/problem+json"


def _problem_response(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "content": {PROBLEM_JSON: {"schema": schema_ref("ProblemDetails")}},
    }


class SchemaGenerator:
    """
    Generate the OpenAPI document for a set of resource classes.

    Example:
        document = SchemaGenerator().generate([Product, Category], title="Shop")
    """

    def __init__(
        self,
        registry: Optional[MetadataRegistry] = None,
        settings: Optional[SchemaSettings] = None,
    ):
        self.registry = registry or metadata_registry
        self.settings = settings or SchemaSettings.from_settings()
        self.order_name = FilteringSettings.from_settings().order_parameter
        self.embed_name = SerializationSettings.from_settings().embed_parameter

    def generate(
        self,
        resource_types: Optional[Iterable[type]] = None,
        title: Optional[str] = None,
        version: Optional[str] = None,
        base_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Build the document.

        Args:
            resource_types: Entity classes to document. Classes without a
                resource descriptor are skipped. Defaults to every known
                resource.
            title: Document title (defaults to the configured title).
            version: API version (defaults to the configured version).
            base_path: Server URL (defaults to the configured base path).
        """
        if resource_types is None:
            resource_types = self.registry.resource_classes(self.settings.resources)

        resources: list[EntityMetadata] = []
        for entity_class in resource_types:
            metadata = self.registry.get(entity_class)
            if metadata.is_resource:
                resources.append(metadata)
            else:
                logger.debug("Skipping %s: not a resource", entity_class.__name__)
        components = {m.entity_class: m.short_name for m in resources}

        info: dict[str, Any] = {
            "title": title or self.settings.title,
            "version": version or self.settings.version,
        }
        if self.settings.description:
            info["description"] = self.settings.description

        paths: dict[str, Any] = {}
        schemas: dict[str, Any] = {"ProblemDetails": copy.deepcopy(PROBLEM_DETAILS_SCHEMA)}
        tags = []
        for metadata in resources:
            schemas[metadata.short_name] = self.build_output_schema(metadata, components)
            self._add_paths(paths, metadata)
            tag = {"name": metadata.short_name}
            if metadata.resource.description:
                tag["description"] = metadata.resource.description
            tags.append(tag)

        return {
            "openapi": self.settings.openapi_version,
            "info": info,
            "servers": [{"url": base_path if base_path is not None else self.settings.base_path}],
            "paths": paths,
            "components": {"schemas": schemas},
            "tags": tags,
        }

    def build_output_schema(
        self, metadata: EntityMetadata, components: Optional[dict[type, str]] = None
    ) -> dict[str, Any]:
        """Component schema of the resource, using the read policy."""
        properties: dict[str, Any] = {}
        required: list[str] = []
        for info in metadata.fields:
            if not is_field_visible(info, READ_GROUPS, metadata.resource):
                continue
            properties[info.name] = field_schema(
                info, self._identifier_schema, (components or {}).get
            )
            if info.property_config is not None and info.property_config.required:
                required.append(info.name)
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    def build_input_schema(self, metadata: EntityMetadata) -> dict[str, Any]:
        """Request body schema, using the write policy."""
        excluded = set(self.settings.server_generated_fields)
        properties: dict[str, Any] = {}
        required: list[str] = []
        for info in metadata.fields:
            if info.name in excluded:
                continue
            if not is_field_writable(info, WRITE_GROUPS, metadata.resource):
                continue
            properties[info.name] = field_schema(
                info, self._identifier_schema, lambda target: None
            )
            if info.property_config is not None and info.property_config.required:
                required.append(info.name)
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    def collection_parameters(self, metadata: EntityMetadata) -> list[dict[str, Any]]:
        resource = metadata.resource
        parameters: list[dict[str, Any]] = []
        if resource.pagination_enabled:
            parameters.extend(pagination_parameters(resource.items_per_page))
        filter_params: list[dict[str, Any]] = []
        for binding in metadata.filters:
            filter_params.extend(filter_parameters(binding, self.order_name))
        if not any(p["name"].startswith(f"{self.order_name}[") for p in filter_params):
            parameters.append(generic_order_parameter(self.order_name))
        parameters.extend(merge_parameters(filter_params))
        embed = self._embed_parameter(metadata)
        if embed is not None:
            parameters.append(embed)
        return parameters

    def _embed_parameter(self, metadata: EntityMetadata) -> Optional[dict[str, Any]]:
        relations = [info.name for info in metadata.fields if info.is_relation]
        return embed_parameter(relations, self.embed_name)

    def _add_paths(self, paths: dict[str, Any], metadata: EntityMetadata) -> None:
        name = metadata.short_name
        collection_path = f"/{name.lower()}"
        item_path = f"{collection_path}/{{id}}"
        resource = metadata.resource
        ref = schema_ref(name)
        id_parameter = {
            "name": "id",
            "in": "path",
            "required": True,
            "schema": self._identifier_schema(metadata.entity_class),
        }

        if resource.allows(Operation.READ_COLLECTION):
            paths.setdefault(collection_path, {})["get"] = {
                "tags": [name],
                "summary": f"Retrieve the collection of {name} resources",
                "operationId": f"get{name}Collection",
                "parameters": self.collection_parameters(metadata),
                "responses": {
                    "200": {
                        "description": f"{name} collection",
                        "content": {JSON: {"schema": {"type": "array", "items": ref}}},
                    }
                },
            }
        if resource.allows(Operation.CREATE):
            paths.setdefault(collection_path, {})["post"] = {
                "tags": [name],
                "summary": f"Create a {name} resource",
                "operationId": f"create{name}",
                "requestBody": self._request_body(metadata),
                "responses": {
                    "201": {
                        "description": f"{name} created",
                        "content": {JSON: {"schema": ref}},
                    },
                    "400": _problem_response("Invalid input"),
                    "422": _problem_response("Validation failed"),
                },
            }
        if resource.allows(Operation.READ_ITEM):
            paths.setdefault(item_path, {})["get"] = {
                "tags": [name],
                "summary": f"Retrieve a {name} resource",
                "operationId": f"get{name}Item",
                "parameters": [id_parameter, *self._item_parameters(metadata)],
                "responses": {
                    "200": {"description": f"{name} resource", "content": {JSON: {"schema": ref}}},
                    "404": _problem_response("Resource not found"),
                },
            }
        if resource.allows(Operation.REPLACE):
            paths.setdefault(item_path, {})["put"] = {
                "tags": [name],
                "summary": f"Replace a {name} resource",
                "operationId": f"replace{name}",
                "parameters": [id_parameter],
                "requestBody": self._request_body(metadata),
                "responses": {
                    "200": {"description": f"{name} updated", "content": {JSON: {"schema": ref}}},
                    "400": _problem_response("Invalid input"),
                    "404": _problem_response("Resource not found"),
                    "422": _problem_response("Validation failed"),
                },
            }
        if resource.allows(Operation.DELETE):
            paths.setdefault(item_path, {})["delete"] = {
                "tags": [name],
                "summary": f"Delete a {name} resource",
                "operationId": f"delete{name}",
                "parameters": [id_parameter],
                "responses": {
                    "204": {"description": f"{name} deleted"},
                    "404": _problem_response("Resource not found"),
                },
            }

    def _item_parameters(self, metadata: EntityMetadata) -> list[dict[str, Any]]:
        embed = self._embed_parameter(metadata)
        return [embed] if embed is not None else []

    def _request_body(self, metadata: EntityMetadata) -> dict[str, Any]:
        return {
            "required": True,
            "content": {JSON: {"schema": self.build_input_schema(metadata)}},
        }

    def _identifier_schema(self, target: Any) -> dict[str, Any]:
        if isinstance(target, type):
            id_field = self.registry.get(target).get_field("id")
            if id_field is not None and id_field.declared_type is not None:
                return value_schema(id_field.declared_type)
        return {"type": "integer"}
