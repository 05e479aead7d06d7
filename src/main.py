"""Find My Rave FastAPI application entry point.

Wires together providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml`` and configures
structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.event.skiddle_provider import SkiddleEventProvider
from src.services.event_detail_service import EventDetailService
from src.services.event_search_service import EventSearchService
from src.services.query_normalizer import QueryNormalizer
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=config["logging"]["level"],
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _validate_search_config(search_cfg: dict[str, Any]) -> None:
    """Reject search settings the pagination path cannot honour."""
    default_size = search_cfg.get("default_page_size", 12)
    max_size = search_cfg.get("max_page_size", 24)
    if default_size < 1 or max_size < default_size:
        raise ConfigurationError(
            f"search page sizes must satisfy 1 <= default ({default_size}) <= max ({max_size})"
        )
    factor = search_cfg.get("genre_inflation_factor", 2)
    if factor < 1:
        raise ConfigurationError(f"genre_inflation_factor must be at least 1, got {factor}")


def _build_all(app_config: dict[str, Any], app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    events_cfg = app_config.get("events", {})
    search_cfg = app_config.get("search", {})
    cache_cfg = app_config.get("cache", {})
    _validate_search_config(search_cfg)

    http_client = httpx.AsyncClient(timeout=events_cfg.get("timeout", 15.0))

    skiddle = SkiddleEventProvider(
        http_client=http_client,
        api_key=app_settings.skiddle_api_key,
        api_base=events_cfg.get("skiddle_api_base", app_settings.skiddle_api_base),
        radius=search_cfg.get("location_radius_miles", 20),
        timeout=events_cfg.get("timeout", 15.0),
    )
    if not skiddle.is_available():
        _logger.warning("skiddle_not_configured", hint="set SKIDDLE_API_KEY")

    cache_ttl = cache_cfg.get("ttl", 3600)
    cache = MemoryCacheProvider(max_size=cache_cfg.get("max_size", 1000), ttl=cache_ttl)

    query_normalizer = QueryNormalizer(
        default_page_size=search_cfg.get("default_page_size", 12),
        max_page_size=search_cfg.get("max_page_size", 24),
        default_order=search_cfg.get("default_order", "trending"),
    )
    search_service = EventSearchService(
        provider=skiddle,
        inflation_factor=search_cfg.get("genre_inflation_factor", 2),
    )
    detail_service = EventDetailService(
        providers={skiddle.get_provider_name(): skiddle},
        cache=cache,
        ttl=cache_ttl,
    )

    return {
        "http_client": http_client,
        "cache": cache,
        "query_normalizer": query_normalizer,
        "search_service": search_service,
        "detail_service": detail_service,
        "provider_registry": {skiddle.get_provider_name(): skiddle.is_available()},
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(config, settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version="0.1.0",
        environment=settings.app_env,
        providers=components["provider_registry"],
        inflation_factor=components["search_service"].inflation_factor,
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Find My Rave API",
        version="0.1.0",
        description=(
            "Search electronic-music events from Skiddle, filtered by genre, "
            "date range, and location. Pagination is an estimate whenever a "
            "genre filter is active."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
