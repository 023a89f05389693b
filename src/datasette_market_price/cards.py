"""
Card payloads for price lookups.

Cards are plain dicts (title, colour, fields, footer) that any front end
can render as a decorated message.
"""

from typing import Any

from market_lookup.models import Item
from market_lookup.paginate import Pages

HOT_COLOR = 0xFF6B6B
COLD_COLOR = 0x6BB0FF
LIST_COLOR = 0xFDCB6E


def price_hint(prefix: str) -> str:
    return f"Use {prefix}price [Item Name] to check price."


def item_card(item: Item, prefix: str = "!") -> dict[str, Any]:
    """Card describing a single item."""
    marker = "🔥" if item.is_hot else "❄️"
    label = "Hot" if item.is_hot else "Cold"

    card: dict[str, Any] = {
        "type": "item",
        "title": f"🏷️ {item.name}",
        "color": HOT_COLOR if item.is_hot else COLD_COLOR,
        "fields": [
            {"name": "💰 Current Price", "value": f"**{item.price_token}**", "inline": True},
            {"name": "🌟 Status", "value": f"{marker} {label}", "inline": True},
            {"name": "🗓️ Last Update", "value": item.last_update, "inline": True},
            {"name": "📦 Category", "value": item.category, "inline": True},
        ],
        "footer": price_hint(prefix),
        "item": item.to_dict(),
    }
    if item.icon_ref:
        card["thumbnail"] = item.icon_ref
    return card


def flattened_length(pages: Pages) -> int:
    """Length of the listing if every name were rendered as `name` | `name`."""
    return len(" | ".join(f"`{name}`" for group in pages for name in group))


def listing_card(pages: Pages, prefix: str = "!", max_length: int = 2000, compact: bool = False) -> dict[str, Any]:
    """
    Card listing every item name.

    Rich listings get one field per page; compact listings join all names
    into the description. Listings longer than max_length collapse into a
    summary with the item count.
    """
    card: dict[str, Any] = {
        "type": "listing",
        "title": "📋 Market Item List",
        "color": LIST_COLOR,
        "footer": f"Use {prefix}price [Item Name]",
        "total_items": pages.total_items,
    }

    if flattened_length(pages) > max_length:
        card["summary"] = True
        card["description"] = (
            f"There are {pages.total_items} items in the market. "
            f"Too many to list here; use {prefix}price [Item Name] to look one up."
        )
        return card

    card["summary"] = False
    if compact:
        names = " | ".join(f"`{name}`" for group in pages for name in group)
        card["description"] = f"Please specify an item from the list below:\n\n{names}"
        return card

    card["description"] = "Please specify an item from the list below:"
    card["fields"] = [
        {
            "name": f"Items {index * pages.page_size + 1}-{index * pages.page_size + len(group)}",
            "value": "\n".join(group),
            "inline": True,
        }
        for index, group in enumerate(pages)
    ]
    return card


def not_found_card(query: str, prefix: str = "!") -> dict[str, Any]:
    return {
        "type": "error",
        "error": "not_found",
        "message": f"❌ Item not found. Please use `{prefix}price` for the full list of items.",
        "query": query,
    }


def unavailable_card() -> dict[str, Any]:
    return {
        "type": "error",
        "error": "service_unavailable",
        "message": "Error: Market data is currently unavailable. Please check the logs.",
    }
