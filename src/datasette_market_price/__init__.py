"""Datasette plugin for market price lookups."""

from datasette_market_price.plugin import (
    register_routes,
    startup,
)

__all__ = [
    "register_routes",
    "startup",
]
