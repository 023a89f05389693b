"""Tests for card payloads."""

from datasette_market_price.cards import (
    COLD_COLOR,
    HOT_COLOR,
    item_card,
    listing_card,
    not_found_card,
    unavailable_card,
)
from market_lookup.models import Catalog, Item, SalesStatus
from market_lookup.paginate import paginate


def make_catalog(count: int, prefix: str = "Item") -> Catalog:
    return Catalog([Item(name=f"{prefix} {n}", price_token="1") for n in range(count)])


class TestItemCard:
    """Test single item cards."""

    def test_hot_item(self):
        item = Item(
            name="Diamond",
            price_token="1.5b",
            sales_status=SalesStatus.HOT,
            last_update="today",
            category="Gems",
            icon_ref="https://example.org/d.png",
        )
        card = item_card(item)

        assert card["title"].endswith(" Diamond")
        assert card["color"] == HOT_COLOR
        assert card["fields"][0]["value"] == "**1.5b**"
        assert card["fields"][1]["value"].endswith("Hot")
        assert card["thumbnail"] == "https://example.org/d.png"
        assert card["footer"] == "Use !price [Item Name] to check price."

    def test_cold_item_without_icon(self):
        card = item_card(Item(name="Iron", price_token="75"), prefix="?")

        assert card["color"] == COLD_COLOR
        assert card["fields"][1]["value"].endswith("Cold")
        assert "thumbnail" not in card
        assert card["footer"].startswith("Use ?price")


class TestListingCard:
    """Test catalog listing cards."""

    def test_rich_listing_one_field_per_page(self):
        card = listing_card(paginate(make_catalog(45), 20))

        assert card["summary"] is False
        assert len(card["fields"]) == 3
        assert card["fields"][0]["name"] == "Items 1-20"
        assert card["fields"][2]["name"] == "Items 41-45"
        assert card["fields"][2]["value"].split("\n") == [f"Item {n}" for n in range(40, 45)]

    def test_compact_listing(self):
        card = listing_card(paginate(make_catalog(3), 10), compact=True)

        assert "fields" not in card
        assert card["description"].endswith("`Item 0` | `Item 1` | `Item 2`")

    def test_collapses_to_summary_when_too_long(self):
        catalog = make_catalog(200, prefix="A Very Long Market Item Name")
        card = listing_card(paginate(catalog, 20), max_length=2000)

        assert card["summary"] is True
        assert "200 items" in card["description"]
        assert "!price [Item Name]" in card["description"]
        assert "fields" not in card

    def test_empty_listing(self):
        card = listing_card(paginate(Catalog(), 20))
        assert card["total_items"] == 0
        assert card["fields"] == []


class TestErrorCards:
    """Test error payloads."""

    def test_not_found(self):
        card = not_found_card("unobtainium")
        assert card["error"] == "not_found"
        assert "`!price`" in card["message"]

    def test_unavailable(self):
        assert unavailable_card()["error"] == "service_unavailable"
