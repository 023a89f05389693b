"""
CLI runner for market-lookup.

Usage:
    python -m market_lookup.run [OPTIONS]

    # Load the catalog once and report the item count
    python -m market_lookup.run --once

    # Look up an item
    python -m market_lookup.run --query "diamond"

    # Keep reloading on the configured interval
    python -m market_lookup.run --daemon
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import EngineConfig
from .engine import PriceEngine
from .models import LoadReport, LookupStatus
from .prices import price_token_to_number

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("market-lookup")


def build_engine(config: EngineConfig) -> PriceEngine:
    return PriceEngine(
        source=config.catalog_source,
        aliases=config.build_aliases(),
        http_timeout=config.http_timeout_seconds,
    )


async def run_once(config: EngineConfig) -> LoadReport:
    """Load the catalog once and report the outcome."""
    engine = build_engine(config)
    report = await engine.reload()
    if report.ok:
        logger.info(f"Catalog ready: {report.item_count} item(s)")
    return report


async def run_query(config: EngineConfig, query: str) -> int:
    """Resolve a single query and print the result as JSON."""
    engine = build_engine(config)
    await engine.reload()

    result = engine.resolve_query(query)
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))

    if result.status is LookupStatus.EMPTY:
        for number, group in enumerate(engine.list_pages(config.page_size), 1):
            print(f"Page {number}: " + " | ".join(group))
        return 0
    return 0 if result.found else 1


async def run_list(config: EngineConfig) -> int:
    """Print the catalog listing, one page per line."""
    engine = build_engine(config)
    report = await engine.reload()
    if not report.ok:
        return 1

    pages = engine.list_pages(config.page_size)
    for number, group in enumerate(pages, 1):
        print(f"Page {number}/{len(pages)}: " + " | ".join(group))
    return 0


async def run_daemon(config: EngineConfig) -> None:
    """Reload the catalog on a fixed interval."""
    interval = config.reload_interval_seconds or 300
    engine = build_engine(config)

    logger.info("Starting market-lookup daemon")
    logger.info(f"Source: {config.catalog_source}")
    logger.info(f"Reloading every {interval:g} seconds")

    while True:
        try:
            report = await engine.reload()
            if report.ok:
                logger.info(f"Cycle complete: {report.item_count} item(s)")
        except Exception:
            logger.exception("Reload cycle failed")
        await asyncio.sleep(interval)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="market-lookup: Catalog resolution engine for market prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Load and validate the catalog
    python -m market_lookup.run --source market_data.json --once

    # Look up an item by name or alias
    python -m market_lookup.run --query "diamond sword"

    # Normalize a price token
    python -m market_lookup.run --price 1.5b

    # Use a specific config file
    python -m market_lookup.run --config datasette.yaml --list
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=Path("datasette.yaml"),
        help="Path to config file (default: datasette.yaml)",
    )
    parser.add_argument(
        "--source",
        type=str,
        help="Override catalog source (path or URL) from config",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Load the catalog once, report the item count and exit",
    )
    parser.add_argument(
        "--query",
        type=str,
        help="Resolve a query and print the matching item",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the paginated item listing",
    )
    parser.add_argument(
        "--price",
        type=str,
        help="Print the numeric value of a price token",
    )
    parser.add_argument(
        "--daemon",
        action="store_true",
        help="Reload the catalog on the configured interval",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.price is not None:
        print(f"{price_token_to_number(args.price):g}")
        return 0

    config = EngineConfig.from_yaml(args.config)
    if args.source:
        config.catalog_source = args.source

    logger.info(f"Config loaded from {args.config}")
    logger.debug(f"Config: {config.to_dict()}")

    if args.query is not None:
        return asyncio.run(run_query(config, args.query))

    if args.list:
        return asyncio.run(run_list(config))

    if args.daemon:
        try:
            asyncio.run(run_daemon(config))
        except KeyboardInterrupt:
            logger.info("Daemon stopped by user")
        return 0

    if args.once:
        report = asyncio.run(run_once(config))
        return 0 if report.ok else 1

    # Default: show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
