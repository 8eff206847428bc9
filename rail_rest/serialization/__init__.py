"""
Graph serialization of entities into plain value trees.
"""

from .context import SerializationContext, parse_embed
from .plain import PlainRepresentable
from .relations import extract_identifier, identifiers
from .serializer import GraphSerializer

__all__ = [
    "GraphSerializer",
    "SerializationContext",
    "PlainRepresentable",
    "parse_embed",
    "extract_identifier",
    "identifiers",
]
