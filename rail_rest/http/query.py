"""
Query-string helpers.

Requests carry filters with the bracket notation ``price[gte]=10`` and
sorting with ``order[price]=desc``. ``parse_query_params`` rebuilds the
nested structure the filter compiler expects.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from django.http import QueryDict

_KEY_RE = re.compile(r"^([^\[\]]*)((?:\[[^\[\]]*\])*)$")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


def _split_key(key: str) -> list[str]:
    match = _KEY_RE.match(key)
    if match is None:
        return [key]
    return [match.group(1)] + _SEGMENT_RE.findall(match.group(2))


def parse_query_params(query: Any) -> dict[str, Any]:
    """
    Turn flat query parameters into nested mappings.

    Examples:
        >>> parse_query_params(QueryDict("price[gte]=10&price[lte]=20&active=1"))
        {'price': {'gte': '10', 'lte': '20'}, 'active': '1'}
        >>> parse_query_params({"tags[]": ["a", "b"]})
        {'tags': ['a', 'b']}

    For repeated keys the last value wins, except for keys ending in ``[]``
    which collect every value in a list.
    """
    if isinstance(query, QueryDict):
        items = [(key, query.getlist(key)) for key in query.keys()]
    elif isinstance(query, Mapping):
        items = [
            (key, list(value) if isinstance(value, (list, tuple)) else [value])
            for key, value in query.items()
        ]
    else:
        raise TypeError(f"Expected a QueryDict or a mapping, got {type(query).__name__}")

    result: dict[str, Any] = {}
    for key, values in items:
        path = _split_key(str(key))
        if not path[0]:
            continue
        append = len(path) > 1 and path[-1] == ""
        if append:
            path = path[:-1]
        node = result
        for segment in path[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = node[segment] = {}
            node = child
        node[path[-1]] = list(values) if append else (values[-1] if values else "")
    return result
