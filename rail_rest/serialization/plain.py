"""
Plain-representable capability.
"""

from abc import ABC, abstractmethod
from typing import Any


class PlainRepresentable(ABC):
    """
    Values that know their own plain (JSON compatible) form.

    Subclass it, or register an existing class with
    ``PlainRepresentable.register(Money)`` when the class already provides
    ``to_plain``. The serializer uses ``to_plain`` instead of walking the
    value's fields.
    """

    @abstractmethod
    def to_plain(self) -> Any:
        raise NotImplementedError
