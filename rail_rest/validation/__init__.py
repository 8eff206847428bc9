"""
Input validation against property descriptors.
"""

from .types import INVALID, INVALID_TYPE, REQUIRED, Violation, matches_type
from .validator import InputValidator

__all__ = [
    "InputValidator",
    "Violation",
    "matches_type",
    "REQUIRED",
    "INVALID_TYPE",
    "INVALID",
]
