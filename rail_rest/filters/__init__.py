"""
Filter compilation: query parameters to predicate and sort operations.
"""

from .compiler import FilterCompiler, compile_filters
from .orm import DjangoQueryBuilder, apply_filters
from .strategies import (
    DATE_STRATEGIES,
    RANGE_STRATEGIES,
    SEARCH_STRATEGIES,
    parameter_name,
)
from .types import (
    ASC,
    DESC,
    CompiledQuery,
    Predicate,
    PredicateFragment,
    QueryBuilder,
    Sort,
)

__all__ = [
    "FilterCompiler",
    "compile_filters",
    "DjangoQueryBuilder",
    "apply_filters",
    "CompiledQuery",
    "Predicate",
    "PredicateFragment",
    "QueryBuilder",
    "Sort",
    "ASC",
    "DESC",
    "SEARCH_STRATEGIES",
    "RANGE_STRATEGIES",
    "DATE_STRATEGIES",
    "parameter_name",
]
