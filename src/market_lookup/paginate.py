"""
Catalog listing pagination.

Splits item names into consecutive, order-preserving groups. Group size
is bounded; total rendered length is the presenter's concern.
"""

from collections.abc import Iterator

from .models import Catalog

RICH_PAGE_SIZE = 20
COMPACT_PAGE_SIZE = 10


class Pages:
    """
    Lazy, restartable sequence of name groups.

    Each call to iter() starts again from the first group.
    """

    def __init__(self, names: tuple[str, ...], page_size: int):
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        self._names = names
        self.page_size = page_size

    def __iter__(self) -> Iterator[list[str]]:
        for start in range(0, len(self._names), self.page_size):
            yield list(self._names[start : start + self.page_size])

    def __len__(self) -> int:
        return -(-len(self._names) // self.page_size)

    @property
    def total_items(self) -> int:
        return len(self._names)


def paginate(catalog: Catalog, page_size: int = RICH_PAGE_SIZE) -> Pages:
    """Group the catalog's item names into pages of at most page_size."""
    return Pages(tuple(catalog.names()), page_size)
