"""Event search aggregator: fetch, genre-filter, paginate, shape.

Skiddle paginates server-side but cannot filter by our coarse genres, so
genre filtering happens here after each upstream fetch.  That leaves the
true number of matching events unknown, and the pagination block is an
**estimate** whenever a genre filter is active:

1. No genre filter: fetch exactly one page at the page's offset and trust
   the provider's total count.  Exact.
2. Genre filter: over-fetch ``page_size * inflation_factor`` items at the
   page's offset and filter them.
3. If page 1 is still short and the provider has more than one block,
   fetch the next block once, filter it, and append.
4. Estimate the total as ``ceil(provider_total * matched / sampled)``,
   where the ratio comes from the batches actually fetched for this
   request.  The ratio is not carried between pages, so page counts can
   drift as a client pages forward.
5. Slice the requested page window out of the matches.  A short slice is
   returned as-is; clients should treat it as the end of results even if
   ``hasMore`` says otherwise.

A failed supplemental fetch fails the whole request; no partial page is
returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from src.interfaces.event_provider import IEventProvider
from src.models.event import EventSearchPage, FilterSet, NormalizedEvent, PaginationResult
from src.services.genre_classifier import filter_by_genre
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

_DEFAULT_INFLATION_FACTOR = 2


def estimate_total(provider_total: int, matched: int, sampled: int) -> int:
    """Scale *provider_total* by the observed match ratio, rounding up.

    Returns 0 when nothing was sampled.
    """
    if sampled <= 0:
        return 0
    return -(-provider_total * matched // sampled)


class EventSearchService:
    """Runs one search request against an event provider.

    Parameters
    ----------
    provider:
        The upstream event provider.
    inflation_factor:
        Multiplier applied to the page size when a genre filter is active.
    """

    def __init__(
        self,
        provider: IEventProvider,
        inflation_factor: int = _DEFAULT_INFLATION_FACTOR,
    ) -> None:
        if inflation_factor < 1:
            raise ConfigurationError(
                f"genre_inflation_factor must be at least 1, got {inflation_factor}"
            )
        self._provider = provider
        self._inflation_factor = inflation_factor
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def inflation_factor(self) -> int:
        return self._inflation_factor

    async def search(self, filters: FilterSet) -> EventSearchPage:
        """Return the requested page of events and its pagination block.

        Raises
        ------
        UpstreamError
            If any upstream fetch fails.
        ShapingError
            If a surviving raw event cannot be normalized.
        """
        provider_name = self._provider.get_provider_name()
        if filters.platform not in ("all", provider_name):
            self._logger.info("search_platform_not_served", platform=filters.platform)
            return EventSearchPage(
                events=[],
                pagination=PaginationResult.from_total(filters.page, filters.page_size, 0),
            )

        if filters.has_genre_filter:
            raw_events, total_results = await self._search_with_genre(filters)
        else:
            upstream = await self._provider.search(filters, filters.offset, filters.page_size)
            raw_events = upstream.results[: filters.page_size]
            total_results = upstream.total_count

        events = [NormalizedEvent.from_skiddle(raw) for raw in raw_events]
        pagination = PaginationResult.from_total(filters.page, filters.page_size, total_results)

        self._logger.info(
            "event_search_complete",
            page=filters.page,
            page_size=filters.page_size,
            genre=filters.genre,
            returned=len(events),
            total_results=pagination.total_results,
            total_pages=pagination.total_pages,
        )
        return EventSearchPage(events=events, pagination=pagination)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _search_with_genre(
        self, filters: FilterSet
    ) -> tuple[list[Mapping[str, Any]], int]:
        page_size = filters.page_size
        offset = filters.offset
        fetch_limit = page_size * self._inflation_factor

        first = await self._provider.search(filters, offset, fetch_limit)
        sampled = len(first.results)
        matches = filter_by_genre(first.results, filters.genre)
        self._logger.debug(
            "genre_filter_applied",
            genre=filters.genre,
            sampled=sampled,
            matched=len(matches),
        )

        if len(matches) < page_size and filters.page == 1 and first.total_count > fetch_limit:
            supplemental = await self._provider.search(filters, offset + fetch_limit, fetch_limit)
            extra = filter_by_genre(supplemental.results, filters.genre)
            sampled += len(supplemental.results)
            matches.extend(extra)
            self._logger.debug(
                "genre_supplemental_fetch",
                genre=filters.genre,
                offset=offset + fetch_limit,
                sampled=len(supplemental.results),
                matched=len(extra),
            )

        total_results = estimate_total(first.total_count, len(matches), sampled)
        self._logger.debug(
            "pagination_estimated",
            provider_total=first.total_count,
            matched=len(matches),
            sampled=sampled,
            estimated_total=total_results,
        )

        start = (filters.page - 1) * page_size - offset
        return matches[start : start + page_size], total_results
