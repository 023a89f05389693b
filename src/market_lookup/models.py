"""
Data models for market-lookup.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .prices import parse_price


class SalesStatus(str, Enum):
    """How well an item is currently selling."""

    HOT = "hot"
    COLD = "cold"

    @classmethod
    def from_raw(cls, value: Any) -> "SalesStatus":
        """Anything other than "hot" is treated as cold."""
        if isinstance(value, str) and value.strip().casefold() == cls.HOT.value:
            return cls.HOT
        return cls.COLD


class CatalogMatch(str, Enum):
    """How a query matched a catalog item."""

    EXACT = "exact"
    PARTIAL = "partial"
    NONE = "none"


class LookupStatus(str, Enum):
    """Outcome of resolving a query against the catalog."""

    FOUND = "found"
    EMPTY = "empty"  # Blank query, caller should show the listing
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"  # No catalog loaded


class LoadErrorReason(str, Enum):
    """Why a catalog load failed."""

    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    SCHEMA = "schema"


class LoadError(Exception):
    """Raised when a catalog source cannot be turned into a Catalog."""

    def __init__(self, reason: LoadErrorReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"


@dataclass(frozen=True)
class Item:
    """
    A single priced catalog entry.

    numeric_price is always derived from price_token and cannot be passed in.
    """

    name: str
    price_token: str
    numeric_price: float = field(init=False)
    sales_status: SalesStatus = SalesStatus.COLD
    last_update: str = ""
    category: str = ""
    icon_ref: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "numeric_price", parse_price(self.price_token))

    @property
    def folded_name(self) -> str:
        return self.name.casefold()

    @property
    def is_hot(self) -> bool:
        return self.sales_status is SalesStatus.HOT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "price": self.price_token,
            "numeric_price": self.numeric_price,
            "sales": self.sales_status.value,
            "last_update": self.last_update,
            "category": self.category,
        }
        if self.icon_ref:
            result["icon"] = self.icon_ref
        return result


@dataclass(frozen=True)
class Catalog:
    """
    Immutable, ordered collection of items.

    Order is source order. A reload builds a new Catalog rather than
    changing an existing one.
    """

    items: tuple[Item, ...] = ()

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Item:
        return self.items[index]

    @property
    def is_empty(self) -> bool:
        return not self.items

    def names(self) -> list[str]:
        """Item names in catalog order."""
        return [item.name for item in self.items]


EMPTY_CATALOG = Catalog()


@dataclass
class LookupResult:
    """Result of resolving a free-text query."""

    status: LookupStatus
    item: Item | None = None
    match: CatalogMatch = CatalogMatch.NONE
    query: str = ""

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "status": self.status.value,
            "match": self.match.value,
            "query": self.query,
        }
        if self.item is not None:
            result["item"] = self.item.to_dict()
        return result


@dataclass
class LoadReport:
    """What happened during a reload, for operational logging."""

    ok: bool
    source: str
    item_count: int = 0
    error: LoadError | None = None
    retained_previous: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "ok": self.ok,
            "source": self.source,
            "item_count": self.item_count,
        }
        if self.error is not None:
            result["error"] = {"reason": self.error.reason.value, "message": self.error.message}
            result["retained_previous"] = self.retained_previous
        return result
