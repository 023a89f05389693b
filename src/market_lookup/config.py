"""
Configuration for market-lookup.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .aliases import AliasTable
from .paginate import COMPACT_PAGE_SIZE, RICH_PAGE_SIZE

PLUGIN_NAME = "datasette-market-price"
SOURCE_ENV = "MARKET_CATALOG_SOURCE"


@dataclass
class EngineConfig:
    """Complete market-lookup configuration."""

    catalog_source: str = "market_data.json"  # Path or http(s) URL
    aliases_path: Path | None = None
    aliases: dict[str, Any] = field(default_factory=dict)  # Inline aliases
    reload_interval_seconds: float = 0  # 0 disables periodic reload
    http_timeout_seconds: float = 10.0

    # Presentation
    page_size: int = RICH_PAGE_SIZE
    compact_page_size: int = COMPACT_PAGE_SIZE
    max_render_length: int = 2000
    command_prefix: str = "!"

    def __post_init__(self):
        env_source = os.environ.get(SOURCE_ENV)
        if env_source:
            self.catalog_source = env_source

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Create config from a dictionary (e.g., from YAML)."""
        config = cls()

        if "catalog_source" in data and not os.environ.get(SOURCE_ENV):
            config.catalog_source = str(data["catalog_source"])
        if data.get("aliases_path"):
            config.aliases_path = Path(data["aliases_path"])
        if "aliases" in data:
            config.aliases = data["aliases"] or {}
        if "reload_interval_seconds" in data:
            config.reload_interval_seconds = float(data["reload_interval_seconds"])
        if "http_timeout_seconds" in data:
            config.http_timeout_seconds = float(data["http_timeout_seconds"])
        if "page_size" in data:
            config.page_size = int(data["page_size"])
        if "compact_page_size" in data:
            config.compact_page_size = int(data["compact_page_size"])
        if "max_render_length" in data:
            config.max_render_length = int(data["max_render_length"])
        if "command_prefix" in data:
            config.command_prefix = data["command_prefix"]

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "EngineConfig":
        """Load config from a YAML file (datasette.yaml format)."""
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Engine config lives under plugins.datasette-market-price.engine
        # Any level may be present but null
        plugin_config = (data.get("plugins") or {}).get(PLUGIN_NAME) or {}
        return cls.from_dict(plugin_config.get("engine") or {})

    def build_aliases(self) -> AliasTable:
        """Alias table from the alias file plus any inline aliases."""
        table = AliasTable.from_yaml(self.aliases_path) if self.aliases_path else AliasTable()
        if self.aliases:
            inline = AliasTable.from_dict(self.aliases)
            for locale in inline.locales():
                table.add_locale(locale, inline.for_locale(locale))
        return table

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "catalog_source": self.catalog_source,
            "aliases_path": str(self.aliases_path) if self.aliases_path else None,
            "reload_interval_seconds": self.reload_interval_seconds,
            "http_timeout_seconds": self.http_timeout_seconds,
            "page_size": self.page_size,
            "compact_page_size": self.compact_page_size,
            "max_render_length": self.max_render_length,
            "command_prefix": self.command_prefix,
        }
