"""
Shared helpers for rail-rest.
"""

from .coercion import coerce_bool_strict, coerce_number, is_numeric
from .datetime_utils import end_of_day, make_aware_if_needed, parse_date, start_of_day

__all__ = [
    "coerce_bool_strict",
    "coerce_number",
    "is_numeric",
    "parse_date",
    "start_of_day",
    "end_of_day",
    "make_aware_if_needed",
]
