"""
Alias table for localized and alternate item names.

Aliases are static data, loaded from YAML and keyed by locale:

    aliases:
      ar:
        "الماس": "Diamond"
      es:
        "diamante": "Diamond"

A flat mapping (alias -> canonical name) is accepted too.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "default"


class AliasTable:
    """Exact map from case-folded alias token to canonical item name."""

    def __init__(self, entries: dict[str, str] | None = None, locales: dict[str, dict[str, str]] | None = None):
        self._entries: dict[str, str] = {}
        self._locales: dict[str, dict[str, str]] = {}
        if entries:
            self.add_locale(DEFAULT_LOCALE, entries)
        for locale, mapping in (locales or {}).items():
            self.add_locale(locale, mapping)

    def add_locale(self, locale: str, mapping: dict[str, str]) -> None:
        """Register aliases for a locale. Later registrations win on conflict."""
        bucket = self._locales.setdefault(locale, {})
        for alias, canonical in mapping.items():
            if not isinstance(alias, str) or not isinstance(canonical, str):
                raise ValueError(f"Alias entries must be strings, got {alias!r} -> {canonical!r}")
            key = alias.strip().casefold()
            if not key or not canonical.strip():
                continue
            previous = self._entries.get(key)
            if previous is not None and previous != canonical:
                logger.warning(f"Alias {alias!r} remapped from {previous!r} to {canonical!r} ({locale})")
            bucket[key] = canonical
            self._entries[key] = canonical

    def resolve(self, query: str) -> str:
        """
        Map a query to the canonical name it stands for.

        Returns the canonical name case-folded on a hit, otherwise the
        query unchanged. No partial or fuzzy matching.
        """
        canonical = self._entries.get(query.casefold())
        if canonical is None:
            return query
        return canonical.casefold()

    def locales(self) -> list[str]:
        return sorted(self._locales)

    def for_locale(self, locale: str) -> dict[str, str]:
        return dict(self._locales.get(locale, {}))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and alias.casefold() in self._entries

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AliasTable":
        """
        Build a table from a mapping.

        Values that are themselves mappings are treated as locales,
        plain string values as flat (default locale) aliases.
        """
        table = cls()
        if not data:
            return table

        if "aliases" in data and isinstance(data["aliases"], dict):
            data = data["aliases"]

        flat: dict[str, str] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                table.add_locale(str(key), value)
            else:
                flat[key] = value
        if flat:
            table.add_locale(DEFAULT_LOCALE, flat)
        return table

    @classmethod
    def from_yaml(cls, path: Path) -> "AliasTable":
        """Load aliases from a YAML file. Missing file gives an empty table."""
        if not path.exists():
            logger.debug(f"Alias file not found: {path}")
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Alias file must contain a mapping: {path}")

        table = cls.from_dict(data)
        logger.info(f"Loaded {len(table)} alias(es) for {len(table.locales())} locale(s) from {path}")
        return table


EMPTY_ALIASES = AliasTable()
