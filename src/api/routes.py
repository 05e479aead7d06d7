"""FastAPI API routes for Find My Rave.

    Endpoint                               Method  Description
    ───────────────────────────────────────────────────────────────────
    /api/v1/events/search                  GET     Search events (paginated)
    /api/v1/events/{platform}/{event_id}   GET     Single event (cached)
    /api/v1/genres                         GET     Genre keys for filtering
    /api/v1/health                         GET     Health check + providers

Services are resolved from ``app.state`` via ``Depends`` using the
``Annotated`` pattern, so tests can build a bare app with mock services.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.schemas import ErrorResponse, GenreInfo, GenresResponse, HealthResponse
from src.config.genres import GENRE_TO_SKIDDLE_IDS
from src.models.event import EventSearchPage, NormalizedEvent
from src.services.event_detail_service import EventDetailService
from src.services.event_search_service import EventSearchService
from src.services.query_normalizer import QueryNormalizer
from src.utils.errors import UpstreamError, ValidationError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

_SEARCH_ERROR_MESSAGE = "Error fetching events"
_DETAIL_ERROR_MESSAGE = "Error fetching event details"
_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_query_normalizer(request: Request) -> QueryNormalizer:
    """Return the query normalizer from application state."""
    return request.app.state.query_normalizer


def _get_search_service(request: Request) -> EventSearchService:
    """Return the event search service from application state."""
    return request.app.state.search_service


def _get_detail_service(request: Request) -> EventDetailService:
    """Return the event detail service from application state."""
    return request.app.state.detail_service


NormalizerDep = Annotated[QueryNormalizer, Depends(_get_query_normalizer)]
SearchServiceDep = Annotated[EventSearchService, Depends(_get_search_service)]
DetailServiceDep = Annotated[EventDetailService, Depends(_get_detail_service)]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


# ---------------------------------------------------------------------------
# Event endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/events/search",
    response_model=EventSearchPage,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Search events with optional genre and date filters",
)
async def search_events(
    request: Request,
    normalizer: NormalizerDep,
    search_service: SearchServiceDep,
) -> EventSearchPage | JSONResponse:
    """Return one page of events plus pagination.

    When ``genre`` is set, ``totalResults`` and ``totalPages`` are estimates
    and a page shorter than ``limit`` means there are no further results.
    Genre pages are cut from overlapping upstream windows (page N reads from
    raw offset ``(N-1) * limit`` but page 1 may sample well past it), so the
    same event can show up on more than one page.
    """
    try:
        filters = normalizer.normalize(request.query_params)
    except ValidationError as exc:
        _logger.info("search_validation_failed", field=exc.field, message=exc.message)
        return _error(400, exc.message)

    try:
        return await search_service.search(filters)
    except UpstreamError as exc:
        _logger.error(
            "search_upstream_failed",
            provider=exc.provider_name,
            status=exc.status_code,
            message=exc.message,
        )
        return _error(500, _SEARCH_ERROR_MESSAGE)


@router.get(
    "/events/{platform}/{event_id}",
    response_model=NormalizedEvent,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a single event by platform and id",
)
async def get_event(
    platform: str,
    event_id: str,
    detail_service: DetailServiceDep,
) -> NormalizedEvent | JSONResponse:
    """Return one event, served from cache when it was looked up recently."""
    try:
        event = await detail_service.get_event(platform.lower(), event_id)
    except UpstreamError as exc:
        _logger.error(
            "event_detail_upstream_failed",
            platform=platform,
            event_id=event_id,
            status=exc.status_code,
            message=exc.message,
        )
        return _error(500, _DETAIL_ERROR_MESSAGE)

    if event is None:
        return _error(404, "Event not found")
    return event


@router.get(
    "/genres",
    response_model=GenresResponse,
    summary="List genres accepted by the search endpoint",
)
async def list_genres() -> GenresResponse:
    return GenresResponse(
        genres=[
            GenreInfo(key=key, skiddle_genre_ids=sorted(ids, key=int))
            for key, ids in GENRE_TO_SKIDDLE_IDS.items()
        ]
    )


# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and provider availability."""
    providers: dict[str, bool] = {}
    if hasattr(request.app.state, "provider_registry"):
        providers = dict(request.app.state.provider_registry)

    if providers and all(providers.values()):
        status = "healthy"
    elif any(providers.values()):
        status = "degraded"
    else:
        status = "unhealthy"

    return HealthResponse(status=status, version=_VERSION, providers=providers)
