"""
Free-text item matching.

Resolves a query to a catalog item with a two-pass policy:

1. Exact match on the case-folded name (first in catalog order)
2. Substring match on the case-folded name (first in catalog order)

An exact match always wins over any substring match. Among substring
candidates the earliest one wins; this is first-match, not best-match.
"""

import logging

from .aliases import EMPTY_ALIASES, AliasTable
from .models import Catalog, CatalogMatch, Item, LookupResult, LookupStatus

logger = logging.getLogger(__name__)


def find_exact(catalog: Catalog, folded_query: str) -> Item | None:
    for item in catalog:
        if item.folded_name == folded_query:
            return item
    return None


def find_partial(catalog: Catalog, folded_query: str) -> Item | None:
    for item in catalog:
        if folded_query in item.folded_name:
            return item
    return None


def match_item(catalog: Catalog, raw_query: str | None, aliases: AliasTable | None = None) -> LookupResult:
    """
    Resolve a free-text query against a catalog.

    Args:
        catalog: Snapshot to search
        raw_query: Query as typed by the user
        aliases: Optional alias table consulted before matching

    Returns:
        LookupResult with status FOUND, EMPTY or NOT_FOUND
    """
    query = (raw_query or "").strip()
    if not query:
        return LookupResult(status=LookupStatus.EMPTY)

    resolved = (aliases or EMPTY_ALIASES).resolve(query).casefold()

    item = find_exact(catalog, resolved)
    if item is not None:
        return LookupResult(status=LookupStatus.FOUND, item=item, match=CatalogMatch.EXACT, query=resolved)

    item = find_partial(catalog, resolved)
    if item is not None:
        return LookupResult(status=LookupStatus.FOUND, item=item, match=CatalogMatch.PARTIAL, query=resolved)

    logger.debug(f"No catalog match for {query!r} (resolved {resolved!r})")
    return LookupResult(status=LookupStatus.NOT_FOUND, query=resolved)
