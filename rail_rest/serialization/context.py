"""
Call-scoped serialization options.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional, Union


def parse_embed(value: Union[None, str, Iterable[str]]) -> Optional[frozenset[str]]:
    """
    Parse an ``embed`` option.

    ``None`` means the default policy (every relation expanded up to its
    depth). A string is a comma separated list; an empty or whitespace
    string yields an empty set, meaning no relation is embedded.

    Examples:
        >>> sorted(parse_embed("category, tags"))
        ['category', 'tags']
        >>> parse_embed("  ")
        frozenset()
        >>> parse_embed(None) is None
        True
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return frozenset(name.strip() for name in value if name and name.strip())


@dataclass(frozen=True)
class SerializationContext:
    """
    Options of one serialization call.

    Attributes:
        groups: Requested visibility groups, never empty.
        embed: Relation names to expand, or ``None`` for the default policy.
        max_depth: Depth applied to every relation instead of the declared one.
    """

    groups: frozenset[str]
    embed: Optional[frozenset[str]] = None
    max_depth: Optional[int] = None

    @classmethod
    def create(
        cls,
        groups: Union[str, Iterable[str]],
        embed: Union[None, str, Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ) -> "SerializationContext":
        group_set = frozenset({groups} if isinstance(groups, str) else groups)
        if not group_set:
            raise ValueError("At least one serialization group is required")
        if max_depth is not None and (
            isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0
        ):
            raise ValueError(f"max_depth must be a non-negative integer, got {max_depth!r}")
        return cls(groups=group_set, embed=parse_embed(embed), max_depth=max_depth)

    def allows_embedding(self, name: str, relation_groups: AbstractSet[str]) -> bool:
        """Whether relation ``name`` may be expanded in this call."""
        if self.embed is not None and name not in self.embed:
            return False
        return not self.groups.isdisjoint(relation_groups)

    def relation_depth(self, declared: int) -> int:
        return declared if self.max_depth is None else self.max_depth
