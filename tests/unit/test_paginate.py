"""Tests for catalog pagination."""

import pytest

from market_lookup.models import Catalog, Item
from market_lookup.paginate import COMPACT_PAGE_SIZE, RICH_PAGE_SIZE, paginate


def make_catalog(count: int) -> Catalog:
    return Catalog([Item(name=f"Item {n:02d}", price_token="1") for n in range(count)])


class TestPaginate:
    """Test grouping of item names."""

    def test_group_sizes(self):
        pages = paginate(make_catalog(45), 20)
        assert [len(group) for group in pages] == [20, 20, 5]

    def test_preserves_order(self):
        catalog = make_catalog(45)
        flattened = [name for group in paginate(catalog, 20) for name in group]
        assert flattened == catalog.names()

    def test_empty_catalog(self):
        pages = paginate(Catalog(), 20)
        assert list(pages) == []
        assert len(pages) == 0

    def test_exact_multiple(self):
        assert [len(group) for group in paginate(make_catalog(20), 10)] == [10, 10]

    def test_restartable(self):
        pages = paginate(make_catalog(5), 2)
        assert list(pages) == list(pages)

    def test_len_and_total(self):
        pages = paginate(make_catalog(45), 20)
        assert len(pages) == 3
        assert pages.total_items == 45

    def test_default_page_size(self):
        assert paginate(make_catalog(1)).page_size == RICH_PAGE_SIZE == 20
        assert COMPACT_PAGE_SIZE == 10

    @pytest.mark.parametrize("page_size", [0, -1])
    def test_invalid_page_size(self, page_size):
        with pytest.raises(ValueError):
            paginate(make_catalog(3), page_size)
