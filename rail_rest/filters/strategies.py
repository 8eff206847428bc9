"""
Per-kind filter strategies.

Each ``compile_*`` function turns the raw query value of one field into zero
or more predicates. Values that cannot be used are skipped (and logged at
DEBUG level) so that one bad parameter never fails a whole listing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from django.utils.module_loading import import_string

from ..core.meta import FilterKind
from ..core.settings import FilteringSettings
from ..utils.coercion import coerce_bool_strict, coerce_number
from ..utils.datetime_utils import (
    end_of_day,
    make_aware_if_needed,
    parse_date,
    start_of_day,
)
from .types import Predicate, PredicateFragment

logger = logging.getLogger(__name__)

# Search strategies and the operator each compiles to.
SEARCH_STRATEGIES: dict[str, str] = {
    "exact": "eq",
    "partial": "contains",
    "start": "startswith",
    "end": "endswith",
    "word_start": "word_startswith",
}
SEARCH_ALIASES = {"prefix": "start", "suffix": "end", "word_prefix": "word_start"}
DEFAULT_SEARCH_STRATEGY = "partial"

RANGE_STRATEGIES = ("gt", "gte", "lt", "lte", "between")
DEFAULT_RANGE_STRATEGY = "gte"

DATE_STRATEGIES = ("exact", "before", "after")
DEFAULT_DATE_STRATEGY = "exact"

BOOLEAN_VALUES = ("true", "false", "1", "0")

KIND_SUFFIXES = {
    FilterKind.SEARCH: "search",
    FilterKind.RANGE: "range",
    FilterKind.DATE: "date",
    FilterKind.BOOLEAN: "bool",
}


def parameter_name(field: str, kind: FilterKind, strategy: Optional[str] = None) -> str:
    """Bound parameter name, unique per field, kind and strategy."""
    name = f"{field}_{KIND_SUFFIXES.get(kind, kind.value)}"
    return f"{name}_{strategy}" if strategy else name


def _skip(kind: FilterKind, field: str, reason: str, value: Any) -> None:
    logger.debug("Skipping %s filter on '%s': %s (%r)", kind.value, field, reason, value)


def _strategy_items(value: Any, default: str) -> Iterable[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return list(value.items())
    return [(default, value)]


def compile_search(
    field: str, value: Any, options: Mapping[str, Any], settings: FilteringSettings
) -> list[Predicate]:
    default = options.get("strategy", DEFAULT_SEARCH_STRATEGY)
    predicates = []
    for strategy, term in _strategy_items(value, default):
        strategy = SEARCH_ALIASES.get(strategy, strategy)
        operator = SEARCH_STRATEGIES.get(strategy)
        if operator is None:
            _skip(FilterKind.SEARCH, field, f"unknown strategy '{strategy}'", term)
            continue
        if not isinstance(term, str) or not term:
            _skip(FilterKind.SEARCH, field, "expected a non-empty string", term)
            continue
        predicates.append(
            Predicate(
                PredicateFragment(field, operator),
                parameter_name(field, FilterKind.SEARCH, strategy),
                term,
                FilterKind.SEARCH,
            )
        )
    return predicates


def _range_bounds(value: Any) -> Optional[tuple[Any, Any]]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    low, high = coerce_number(value[0]), coerce_number(value[1])
    if low is None or high is None:
        return None
    return low, high


def compile_range(
    field: str, value: Any, options: Mapping[str, Any], settings: FilteringSettings
) -> list[Predicate]:
    default = options.get("strategy", DEFAULT_RANGE_STRATEGY)
    predicates = []
    for strategy, bound in _strategy_items(value, default):
        if strategy not in RANGE_STRATEGIES:
            _skip(FilterKind.RANGE, field, f"unknown strategy '{strategy}'", bound)
            continue
        if strategy == "between":
            coerced = _range_bounds(bound)
        else:
            coerced = coerce_number(bound)
        if coerced is None:
            _skip(FilterKind.RANGE, field, "not numeric", bound)
            continue
        predicates.append(
            Predicate(
                PredicateFragment(field, strategy),
                parameter_name(field, FilterKind.RANGE, strategy),
                coerced,
                FilterKind.RANGE,
            )
        )
    return predicates


def compile_date(
    field: str, value: Any, options: Mapping[str, Any], settings: FilteringSettings
) -> list[Predicate]:
    default = options.get("strategy", DEFAULT_DATE_STRATEGY)
    predicates = []
    for strategy, raw in _strategy_items(value, default):
        if strategy not in DATE_STRATEGIES:
            _skip(FilterKind.DATE, field, f"unknown strategy '{strategy}'", raw)
            continue
        day = parse_date(raw)
        if day is None:
            _skip(FilterKind.DATE, field, "not a date", raw)
            continue
        if strategy == "exact":
            operator, bound = "date_eq", day
        elif strategy == "before":
            operator = "lte"
            bound = make_aware_if_needed(end_of_day(day), settings.date_aware)
        else:
            operator = "gte"
            bound = make_aware_if_needed(start_of_day(day), settings.date_aware)
        predicates.append(
            Predicate(
                PredicateFragment(field, operator),
                parameter_name(field, FilterKind.DATE, strategy),
                bound,
                FilterKind.DATE,
            )
        )
    return predicates


def compile_boolean(
    field: str, value: Any, options: Mapping[str, Any], settings: FilteringSettings
) -> list[Predicate]:
    flag = coerce_bool_strict(value)
    if flag is None:
        _skip(FilterKind.BOOLEAN, field, "not a boolean", value)
        return []
    return [
        Predicate(
            PredicateFragment(field, "eq"),
            parameter_name(field, FilterKind.BOOLEAN),
            flag,
            FilterKind.BOOLEAN,
        )
    ]


def resolve_custom_filter(target: Any) -> Optional[Callable[..., Any]]:
    if isinstance(target, str):
        try:
            target = import_string(target)
        except ImportError as exc:
            logger.debug("Could not import custom filter '%s': %s", target, exc)
            return None
    return target if callable(target) else None


def compile_custom(
    field: str, value: Any, options: Mapping[str, Any], settings: FilteringSettings
) -> list[Predicate]:
    """
    Delegate to the callable found in ``options["filter"]``.

    The callable receives ``(field, value, options)`` and returns a
    ``Predicate``, an iterable of predicates, or ``None``.
    """
    func = resolve_custom_filter(options.get("filter"))
    if func is None:
        _skip(FilterKind.CUSTOM, field, "no usable filter callable", options.get("filter"))
        return []
    try:
        result = func(field, value, options)
    except (ValueError, TypeError) as exc:
        _skip(FilterKind.CUSTOM, field, str(exc), value)
        return []
    if result is None:
        return []
    if isinstance(result, Predicate):
        return [result]
    if not isinstance(result, Iterable):
        _skip(FilterKind.CUSTOM, field, "callable returned a non-predicate", result)
        return []
    predicates = []
    for item in result:
        if isinstance(item, Predicate):
            predicates.append(item)
        else:
            _skip(FilterKind.CUSTOM, field, "callable returned a non-predicate", item)
    return predicates


KIND_HANDLERS = {
    FilterKind.SEARCH: compile_search,
    FilterKind.RANGE: compile_range,
    FilterKind.DATE: compile_date,
    FilterKind.BOOLEAN: compile_boolean,
    FilterKind.CUSTOM: compile_custom,
}
