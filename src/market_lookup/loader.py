"""
Catalog loading for market-lookup.

Reads raw records from a JSON file or an HTTP(S) URL, validates them and
builds a new Catalog. Any bad record fails the whole load, so a partial
catalog is never produced.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from .models import EMPTY_CATALOG, Catalog, Item, LoadError, LoadErrorReason, SalesStatus

logger = logging.getLogger(__name__)

# Raw field name -> accepted spellings, first wins
FIELD_NAMES: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "price": ("price", "price_token", "priceToken"),
    "sales": ("sales", "sales_status", "salesStatus"),
    "last_update": ("lastUpdate", "last_update"),
    "category": ("category",),
    "icon": ("icon", "icon_ref", "iconRef"),
}


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _field(record: dict[str, Any], key: str) -> Any:
    for name in FIELD_NAMES[key]:
        if name in record:
            return record[name]
    return None


def _optional_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


async def read_source(source: str | Path, timeout: float = 10.0) -> str:
    """
    Read the raw catalog payload.

    Raises:
        LoadError: with reason UNREADABLE if the source cannot be read
    """
    if _is_url(source):
        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(str(source), timeout=timeout)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise LoadError(LoadErrorReason.UNREADABLE, f"Could not fetch {source}: {e}") from e
            return response.text

    path = Path(source)
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, ValueError) as e:
        # ValueError covers undecodable bytes and NUL characters in the path
        raise LoadError(LoadErrorReason.UNREADABLE, f"Could not read {path}: {e}") from e


def parse_payload(text: str) -> list[Any]:
    """
    Decode the payload into a list of raw records.

    Accepts a JSON array, or an object with an "items" array.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(LoadErrorReason.MALFORMED, f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise LoadError(LoadErrorReason.MALFORMED, "JSON is nested too deeply") from e

    if isinstance(data, dict) and isinstance(data.get("items"), list):
        data = data["items"]

    if not isinstance(data, list):
        raise LoadError(
            LoadErrorReason.MALFORMED,
            f"Expected a list of records, got {type(data).__name__}",
        )
    return data


def record_to_item(record: Any, index: int) -> Item:
    """
    Validate one raw record and convert it to an Item.

    Args:
        record: Raw record from the source
        index: Position in the source, used in error messages

    Raises:
        LoadError: with reason SCHEMA if required fields are missing
    """
    if not isinstance(record, dict):
        raise LoadError(LoadErrorReason.SCHEMA, f"Record {index} is not an object")

    name = _field(record, "name")
    if not isinstance(name, str) or not name.strip():
        raise LoadError(LoadErrorReason.SCHEMA, f"Record {index} has no name")

    price = _field(record, "price")
    if not isinstance(price, str) or not price.strip():
        raise LoadError(LoadErrorReason.SCHEMA, f"Record {index} ({name!r}) has no price")

    icon = _field(record, "icon")

    return Item(
        name=name,
        price_token=price,
        sales_status=SalesStatus.from_raw(_field(record, "sales")),
        last_update=_optional_str(_field(record, "last_update")),
        category=_optional_str(_field(record, "category")),
        icon_ref=str(icon) if icon else None,
    )


def build_catalog(records: list[Any]) -> Catalog:
    """Validate every record and build a Catalog, all or nothing."""
    items = [record_to_item(record, index) for index, record in enumerate(records)]

    seen: set[str] = set()
    for item in items:
        if item.folded_name in seen:
            logger.warning(f"Duplicate item name {item.name!r}, the first occurrence wins")
        seen.add(item.folded_name)

    return Catalog(items)


async def load_catalog(source: str | Path, timeout: float = 10.0) -> Catalog:
    """
    Load a catalog from a file path or URL.

    Args:
        source: Path to a JSON file, or an http(s) URL
        timeout: HTTP timeout in seconds (URLs only)

    Returns:
        A fully validated Catalog

    Raises:
        LoadError: if the source is unreadable, malformed or fails validation
    """
    text = await read_source(source, timeout=timeout)
    catalog = build_catalog(parse_payload(text))
    logger.info(f"Loaded {len(catalog)} item(s) from {source}")
    return catalog


class CatalogHolder:
    """
    Owns the current catalog snapshot.

    The only operations are get() and swap(). A swap rebinds a single
    reference, so readers always see one complete snapshot.
    """

    def __init__(self, catalog: Catalog = EMPTY_CATALOG):
        self._catalog = catalog

    def get(self) -> Catalog:
        return self._catalog

    def swap(self, catalog: Catalog) -> Catalog:
        """Install a new snapshot and return the one it replaced."""
        previous = self._catalog
        self._catalog = catalog
        return previous
