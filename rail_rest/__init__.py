"""
rail-rest: metadata-driven REST resources for Django projects.

Entities declare how they are exposed with an inner ``ApiMeta`` class (or an
explicit registration); the serializer, the filter compiler, the input
validator and the OpenAPI generator all read the same metadata.
"""

from .core.meta import (
    ApiMeta,
    FilterBinding,
    FilterKind,
    GroupsConfig,
    Operation,
    PropertyConfig,
    RelationConfig,
    ResourceConfig,
    ValueType,
)
from .core.registry import api_resource, get_entity_metadata, metadata_registry
from .defaults import LIBRARY_VERSION as __version__
from .exceptions import (
    MetadataError,
    NotFoundError,
    ProblemDetails,
    RailRestError,
    SerializationError,
    UnsupportedValueError,
    ValidationError,
)
from .filters import FilterCompiler
from .schema import SchemaGenerator
from .serialization import GraphSerializer, PlainRepresentable
from .validation import InputValidator, Violation

__all__ = [
    "ApiMeta",
    "ResourceConfig",
    "PropertyConfig",
    "GroupsConfig",
    "RelationConfig",
    "FilterBinding",
    "FilterKind",
    "Operation",
    "ValueType",
    "api_resource",
    "get_entity_metadata",
    "metadata_registry",
    "GraphSerializer",
    "PlainRepresentable",
    "FilterCompiler",
    "InputValidator",
    "Violation",
    "SchemaGenerator",
    "RailRestError",
    "NotFoundError",
    "MetadataError",
    "ValidationError",
    "SerializationError",
    "UnsupportedValueError",
    "ProblemDetails",
]
