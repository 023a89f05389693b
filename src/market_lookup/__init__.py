"""
market-lookup: Catalog resolution engine for market price lookups.

Loads a periodically refreshed catalog of priced items, normalizes
human-written price tokens, and resolves free-text (possibly localized)
queries to a canonical item for presentation by a front end.
"""

from .engine import PriceEngine, list_pages, resolve_query
from .loader import load_catalog
from .models import Catalog, Item, LoadError, LookupResult, LookupStatus
from .prices import price_token_to_number

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "Item",
    "LoadError",
    "LookupResult",
    "LookupStatus",
    "PriceEngine",
    "list_pages",
    "load_catalog",
    "price_token_to_number",
    "resolve_query",
]
