"""
Enumerations shared by the metadata model.
"""

from enum import Enum


class Operation(str, Enum):
    """Operations a resource can enable."""

    READ_COLLECTION = "read_collection"
    READ_ITEM = "read_item"
    CREATE = "create"
    REPLACE = "replace"
    DELETE = "delete"


class ValueType(str, Enum):
    """
    Declared value types of a field.

    The first five are checked by the input validator; the remaining ones
    only shape the generated documentation.
    """

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"
    ARRAY = "array"
    DATE = "date"
    DATETIME = "datetime"
    OBJECT = "object"


class FilterKind(str, Enum):
    SEARCH = "search"
    RANGE = "range"
    DATE = "date"
    BOOLEAN = "boolean"
    ORDER = "order"
    CUSTOM = "custom"


# HTTP verbs accepted in resource declarations and the operations they enable.
HTTP_METHOD_OPERATIONS: dict[str, tuple[Operation, ...]] = {
    "GET": (Operation.READ_COLLECTION, Operation.READ_ITEM),
    "POST": (Operation.CREATE,),
    "PUT": (Operation.REPLACE,),
    "DELETE": (Operation.DELETE,),
}

DEFAULT_OPERATIONS: tuple[Operation, ...] = tuple(Operation)
