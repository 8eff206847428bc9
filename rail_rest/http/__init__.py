"""
HTTP helpers: query-string parsing and documentation views.
"""

from .query import parse_query_params

__all__ = ["parse_query_params"]
