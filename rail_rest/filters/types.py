"""
Compiled filter operations and the query-builder contract they target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Protocol, Union

from ..core.meta import FilterKind

ASC = "asc"
DESC = "desc"

# Operators a PredicateFragment may carry, with their SQL-like rendering.
OPERATORS: dict[str, str] = {
    "eq": "=",
    "contains": "LIKE",
    "startswith": "LIKE",
    "endswith": "LIKE",
    "word_startswith": "LIKE",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
    "between": "BETWEEN",
    "date_eq": "=",
}


@dataclass(frozen=True)
class PredicateFragment:
    """A condition on one field, independent of its bound value."""

    field: str
    operator: str

    def __post_init__(self) -> None:
        if self.operator not in OPERATORS:
            raise ValueError(f"Unknown predicate operator '{self.operator}'")

    def render(self, parameter: str) -> str:
        """SQL-like text of the fragment, used for logging and debugging."""
        if self.operator == "between":
            return f"{self.field} BETWEEN :{parameter}_min AND :{parameter}_max"
        if self.operator == "date_eq":
            return f"DATE({self.field}) = :{parameter}"
        if self.operator == "word_startswith":
            return f"({self.field} LIKE :{parameter} OR {self.field} LIKE :{parameter}2)"
        return f"{self.field} {OPERATORS[self.operator]} :{parameter}"


@dataclass(frozen=True)
class Predicate:
    fragment: PredicateFragment
    parameter: str
    value: Any
    kind: Union[FilterKind, str] = FilterKind.CUSTOM

    @property
    def field(self) -> str:
        return self.fragment.field

    def apply(self, builder: "QueryBuilder") -> None:
        builder.add_predicate(self.fragment, self.parameter, self.value)


@dataclass(frozen=True)
class Sort:
    field: str
    direction: str = ASC

    def apply(self, builder: "QueryBuilder") -> None:
        builder.add_sort(self.field, self.direction)


Operation = Union[Predicate, Sort]


class QueryBuilder(Protocol):
    """Capability the compiled operations are replayed against."""

    def add_predicate(
        self, fragment: PredicateFragment, parameter: str, value: Any
    ) -> Any:
        ...

    def add_sort(self, field: str, direction: str) -> Any:
        ...


@dataclass(frozen=True)
class CompiledQuery:
    """Ordered predicate operations followed by sort operations."""

    operations: tuple[Operation, ...] = ()

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    @property
    def predicates(self) -> list[Predicate]:
        return [op for op in self.operations if isinstance(op, Predicate)]

    @property
    def sorts(self) -> list[Sort]:
        return [op for op in self.operations if isinstance(op, Sort)]

    @property
    def parameters(self) -> dict[str, Any]:
        return {p.parameter: p.value for p in self.predicates}

    def apply(self, builder: QueryBuilder) -> QueryBuilder:
        for operation in self.operations:
            operation.apply(builder)
        return builder
