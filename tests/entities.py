"""
Plain entity classes shared by the unit tests.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from rail_rest import ApiMeta, FilterKind, PlainRepresentable
from rail_rest.filters import Predicate, PredicateFragment


class Status(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class Money(PlainRepresentable):
    def __init__(self, amount: Decimal, currency: str):
        self.amount = amount
        self.currency = currency

    def to_plain(self) -> Any:
        return {"amount": str(self.amount), "currency": self.currency}


@dataclass
class Dimensions:
    width: float
    height: float
    _unit: str = "cm"


@dataclass
class Tag:
    id: int
    label: str


@dataclass
class Category:
    id: Optional[int] = None
    name: str = ""

    class ApiMeta(ApiMeta):
        resource = ApiMeta.Resource(operations=["GET"], description="Product categories")
        properties = {"name": ApiMeta.Property(required=True)}


@dataclass
class Product:
    id: Optional[int] = None
    name: str = ""
    price: float = 0.0
    stock: int = 0
    active: bool = True
    created_at: Optional[datetime] = None
    status: Status = Status.DRAFT
    category: Optional[Category] = None
    tags: list[Tag] = field(default_factory=list)
    dimensions: Optional[Dimensions] = None
    list_price: Optional[Money] = None
    internal_note: str = ""

    class ApiMeta(ApiMeta):
        resource = ApiMeta.Resource(
            operations=["GET", "POST", "PUT", "DELETE"],
            items_per_page=20,
        )
        properties = {
            "name": ApiMeta.Property(required=True, description="Display name"),
            "price": ApiMeta.Property(default=0.0),
            "stock": ApiMeta.Property(),
            "internal_note": ApiMeta.Property(groups=["admin"]),
        }
        groups = {"active": ["read"]}
        relations = {
            "category": ApiMeta.Relation(max_depth=1),
            "tags": ApiMeta.Relation(max_depth=1),
        }
        filters = [
            ApiMeta.Filter("search", ["name"]),
            ApiMeta.Filter("range", ["price", "stock"]),
            ApiMeta.Filter("date", ["created_at"]),
            ApiMeta.Filter("boolean", ["active"]),
            ApiMeta.Filter("order", ["name", "price"]),
        ]


@dataclass
class Node:
    id: int
    child: Optional["Node"] = None

    class ApiMeta(ApiMeta):
        relations = {"child": ApiMeta.Relation(max_depth=2)}


@dataclass
class Customer:
    email: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = None
    nickname: Optional[str] = None

    class ApiMeta(ApiMeta):
        resource = True
        properties = {
            "email": ApiMeta.Property(required=True),
            "name": ApiMeta.Property(required=True),
            "age": ApiMeta.Property(),
            "nickname": ApiMeta.Property(groups=["admin"], required=True),
        }


class LegacyRecord:
    """Unannotated entity exposing its identifier through ``get_id``."""

    def __init__(self, pk: int, title: str):
        self._pk = pk
        self.title = title

    def get_id(self) -> int:
        return self._pk


class Warehouse:
    code: str
    capacity: int
    city: str

    def __init__(self, code: str, capacity: int = 0, city: str = ""):
        self.code = code
        self.capacity = capacity
        self.city = city


def min_stock_filter(field: str, value: Any, options: Any) -> Predicate:
    """Custom filter keeping entities with at least ``value`` units in stock."""
    return Predicate(
        PredicateFragment("stock", "gte"),
        f"{field}_min_stock",
        int(value),
        FilterKind.CUSTOM,
    )
