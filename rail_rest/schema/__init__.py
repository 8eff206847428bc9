"""
OpenAPI documentation derived from resource metadata.
"""

from .generator import SchemaGenerator

__all__ = ["SchemaGenerator"]
