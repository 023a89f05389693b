"""Shared pytest fixtures for market-price tests."""

import json

import pytest

SAMPLE_RECORDS = [
    {
        "name": "Diamond",
        "price": "1.5b",
        "sales": "hot",
        "lastUpdate": "2025-10-18 21:00",
        "category": "Gems",
        "icon": "https://example.org/icons/diamond.png",
    },
    {
        "name": "Diamond Sword",
        "price": "950m",
        "sales": "cold",
        "lastUpdate": "2025-10-18 21:00",
        "category": "Weapons",
    },
    {
        "name": "Emerald",
        "price": "250k",
        "sales": "hot",
        "lastUpdate": "2025-10-17 09:30",
        "category": "Gems",
    },
]


@pytest.fixture
def sample_records():
    """Fresh copy of the sample records."""
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def write_catalog(tmp_path):
    """Write records (or raw text) to a catalog file and return its path."""

    def _write(records, filename: str = "market_data.json"):
        path = tmp_path / filename
        if isinstance(records, str):
            path.write_text(records, encoding="utf-8")
        else:
            path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def catalog_path(write_catalog, sample_records):
    """Catalog file holding the sample records."""
    return write_catalog(sample_records)


@pytest.fixture(autouse=True)
def clear_source_env(monkeypatch):
    """Keep a developer's MARKET_CATALOG_SOURCE out of the tests."""
    monkeypatch.delenv("MARKET_CATALOG_SOURCE", raising=False)
