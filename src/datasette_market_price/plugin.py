"""
Datasette plugin exposing market price lookups.

Routes:
- /-/price?q=NAME     Item card, or the listing when q is blank
- /-/price/list       Paginated listing of every item
- /-/ping             Health check, never touches the engine
"""

import asyncio
import logging
import weakref
from dataclasses import dataclass
from typing import Any

from datasette import Response, hookimpl
from datasette.utils.asgi import Request

from market_lookup.config import PLUGIN_NAME, EngineConfig
from market_lookup.engine import PriceEngine
from market_lookup.models import LookupStatus

from .cards import item_card, listing_card, not_found_card, unavailable_card

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Plugin Configuration
# -----------------------------------------------------------------------------


def get_plugin_config(datasette) -> EngineConfig:
    """Get engine configuration from datasette.yaml."""
    config = datasette.plugin_config(PLUGIN_NAME) or {}
    return EngineConfig.from_dict(config.get("engine") or {})


# -----------------------------------------------------------------------------
# Engine State (one per Datasette instance)
# -----------------------------------------------------------------------------


@dataclass
class PluginState:
    config: EngineConfig
    engine: PriceEngine
    load_attempted: bool = False
    reload_task: asyncio.Task | None = None


_states: "weakref.WeakKeyDictionary[Any, PluginState]" = weakref.WeakKeyDictionary()


def get_state(datasette) -> PluginState:
    state = _states.get(datasette)
    if state is None:
        config = get_plugin_config(datasette)
        engine = PriceEngine(
            source=config.catalog_source,
            aliases=config.build_aliases(),
            http_timeout=config.http_timeout_seconds,
        )
        state = PluginState(config=config, engine=engine)
        _states[datasette] = state
    return state


async def ensure_loaded(state: PluginState) -> None:
    """Run the initial load if startup has not done it yet."""
    if not state.load_attempted:
        state.load_attempted = True
        await state.engine.reload()


async def reload_loop(state: PluginState) -> None:
    """
    Reload the catalog every reload_interval_seconds.

    A failed reload is logged and the loop carries on with the next tick;
    only cancellation stops it.
    """
    interval = state.config.reload_interval_seconds
    while True:
        await asyncio.sleep(interval)
        try:
            report = await state.engine.reload()
            logger.debug(f"Scheduled reload: {report.to_dict()}")
        except Exception:
            logger.exception("Scheduled catalog reload failed")


# -----------------------------------------------------------------------------
# Route Handlers
# -----------------------------------------------------------------------------


def _is_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _listing_response(state: PluginState, page_size: int, compact: bool) -> Response:
    pages = state.engine.list_pages(page_size)
    card = listing_card(
        pages,
        prefix=state.config.command_prefix,
        max_length=state.config.max_render_length,
        compact=compact,
    )
    return Response.json(card)


async def price_lookup(request: Request, datasette) -> Response:
    """Look up an item by name or alias."""
    state = get_state(datasette)
    await ensure_loaded(state)

    query = request.args.get("q", "")
    result = state.engine.resolve_query(query)

    if result.status is LookupStatus.SERVICE_UNAVAILABLE:
        return Response.json(unavailable_card(), status=503)

    if result.status is LookupStatus.EMPTY:
        compact = _is_truthy(request.args.get("compact"))
        page_size = state.config.compact_page_size if compact else state.config.page_size
        return _listing_response(state, page_size, compact)

    if result.status is LookupStatus.NOT_FOUND:
        return Response.json(not_found_card(query.strip(), state.config.command_prefix), status=404)

    card = item_card(result.item, state.config.command_prefix)
    card["match"] = result.match.value
    return Response.json(card)


async def price_list(request: Request, datasette) -> Response:
    """List every item, grouped into pages."""
    state = get_state(datasette)
    await ensure_loaded(state)

    if not state.engine.is_ready:
        return Response.json(unavailable_card(), status=503)

    compact = _is_truthy(request.args.get("compact"))
    default_size = state.config.compact_page_size if compact else state.config.page_size
    raw_size = request.args.get("page_size")
    try:
        page_size = int(raw_size) if raw_size else default_size
    except ValueError:
        return Response.json({"error": "page_size must be an integer"}, status=400)
    if page_size < 1:
        return Response.json({"error": "page_size must be at least 1"}, status=400)

    return _listing_response(state, page_size, compact)


async def ping(request: Request, datasette) -> Response:
    """Health check."""
    return Response.text("Pong!")


# -----------------------------------------------------------------------------
# Datasette Hooks
# -----------------------------------------------------------------------------


@hookimpl
def register_routes():
    """Register plugin routes with Datasette."""
    return [
        (r"^/-/price$", price_lookup),
        (r"^/-/price/list$", price_list),
        (r"^/-/ping$", ping),
    ]


@hookimpl
def startup(datasette):
    """
    Run on Datasette startup.

    Loads the catalog and, if configured, starts the periodic reload.
    """

    async def inner():
        state = get_state(datasette)
        await ensure_loaded(state)
        if state.config.reload_interval_seconds > 0 and state.reload_task is None:
            logger.info(f"Reloading catalog every {state.config.reload_interval_seconds:g} seconds")
            state.reload_task = asyncio.create_task(reload_loop(state))

    return inner
