"""
Engine facade consumed by the command/presentation layer.

PriceEngine owns the catalog reference and the alias table. Everything
it returns is plain data; it never calls back into the front end.
"""

import logging
from pathlib import Path

from .aliases import AliasTable
from .loader import CatalogHolder, load_catalog
from .matcher import match_item
from .models import Catalog, LoadError, LoadReport, LookupResult, LookupStatus
from .paginate import RICH_PAGE_SIZE, Pages, paginate
from .prices import price_token_to_number

logger = logging.getLogger(__name__)


def resolve_query(catalog: Catalog, raw_query: str | None, aliases: AliasTable | None = None) -> LookupResult:
    """Resolve a query against a snapshot, reporting an empty catalog as unavailable."""
    if catalog.is_empty:
        return LookupResult(status=LookupStatus.SERVICE_UNAVAILABLE)
    return match_item(catalog, raw_query, aliases)


def list_pages(catalog: Catalog, page_size: int = RICH_PAGE_SIZE) -> Pages:
    return paginate(catalog, page_size)


class PriceEngine:
    """
    Catalog resolution engine.

    Loads catalogs, resolves queries and lists pages. Reloads replace
    the catalog with a single swap and only after a complete load.
    """

    def __init__(
        self,
        source: str | Path | None = None,
        aliases: AliasTable | None = None,
        http_timeout: float = 10.0,
    ):
        self.source = source
        self.aliases = aliases or AliasTable()
        self.http_timeout = http_timeout
        self._holder = CatalogHolder()

    @property
    def catalog(self) -> Catalog:
        """Current snapshot."""
        return self._holder.get()

    @property
    def is_ready(self) -> bool:
        return not self.catalog.is_empty

    async def reload(self, source: str | Path | None = None) -> LoadReport:
        """
        Load a catalog and install it on success.

        On failure the previous catalog (if any) stays in place. Never
        raises for load failures; the outcome is in the returned report.
        """
        source = source if source is not None else self.source
        if source is None:
            raise ValueError("No catalog source configured")

        try:
            catalog = await load_catalog(source, timeout=self.http_timeout)
        except LoadError as e:
            retained = self.is_ready
            if retained:
                logger.warning(f"Catalog reload from {source} failed ({e}); keeping previous catalog")
            else:
                logger.error(f"Catalog load from {source} failed ({e}); no catalog available")
            return LoadReport(
                ok=False,
                source=str(source),
                item_count=len(self.catalog),
                error=e,
                retained_previous=retained,
            )

        self._holder.swap(catalog)
        return LoadReport(ok=True, source=str(source), item_count=len(catalog))

    def resolve_query(self, raw_query: str | None) -> LookupResult:
        return resolve_query(self.catalog, raw_query, self.aliases)

    def list_pages(self, page_size: int = RICH_PAGE_SIZE) -> Pages:
        return list_pages(self.catalog, page_size)

    @staticmethod
    def price_token_to_number(token: str | None) -> float:
        return price_token_to_number(token)
