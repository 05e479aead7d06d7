"""Unit tests for EventSearchService: genre filtering and pagination estimates."""

from __future__ import annotations

from unittest.mock import call

import pytest

from src.models.event import FilterSet, UpstreamPage
from src.services.event_search_service import EventSearchService, estimate_total
from src.utils.errors import ConfigurationError, ShapingError, UpstreamError
from tests.conftest import make_batch, make_raw_event


class TestEstimateTotal:
    def test_scales_by_ratio(self) -> None:
        assert estimate_total(240, 6, 24) == 60

    def test_rounds_up(self) -> None:
        assert estimate_total(100, 1, 3) == 34

    def test_no_sample_means_zero(self) -> None:
        assert estimate_total(500, 0, 0) == 0

    def test_no_matches_means_zero(self) -> None:
        assert estimate_total(500, 0, 24) == 0


# ======================================================================
# No genre filter: exact path
# ======================================================================


class TestSearchWithoutGenre:
    @pytest.mark.asyncio
    async def test_scenario_all_genres_first_page(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(12, 0), total_count=100
        )
        service = EventSearchService(mock_event_provider)
        filters = FilterSet(page=1, page_size=12)

        page = await service.search(filters)

        assert len(page.events) == 12
        assert page.pagination.total_results == 100
        assert page.pagination.total_pages == 9
        assert page.pagination.has_more is True
        mock_event_provider.search.assert_awaited_once_with(filters, 0, 12)

    @pytest.mark.asyncio
    async def test_uses_page_offset(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(12, 0), total_count=100
        )
        service = EventSearchService(mock_event_provider)
        filters = FilterSet(page=3, page_size=12)

        page = await service.search(filters)

        mock_event_provider.search.assert_awaited_once_with(filters, 24, 12)
        assert page.pagination.current_page == 3

    @pytest.mark.asyncio
    async def test_total_is_provider_total_exactly(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(5, 0), total_count=5
        )
        page = await EventSearchService(mock_event_provider).search(FilterSet(page=1, page_size=12))
        assert page.pagination.total_results == 5
        assert page.pagination.total_pages == 1
        assert page.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_idempotent_against_stable_upstream(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(12, 4), total_count=60
        )
        service = EventSearchService(mock_event_provider)
        filters = FilterSet(page=2, page_size=12)

        first = await service.search(filters)
        second = await service.search(filters)

        assert first == second
        assert mock_event_provider.search.await_args_list == [
            call(filters, 12, 12),
            call(filters, 12, 12),
        ]

    @pytest.mark.asyncio
    async def test_other_platform_returns_empty_page(self, mock_event_provider) -> None:
        page = await EventSearchService(mock_event_provider).search(
            FilterSet(platform="ticketmaster")
        )
        assert page.events == []
        assert page.pagination.total_results == 0
        mock_event_provider.search.assert_not_awaited()


# ======================================================================
# Genre filter: estimated path
# ======================================================================


class TestSearchWithGenre:
    @pytest.mark.asyncio
    async def test_scenario_supplemental_fetch_on_short_first_page(
        self, mock_event_provider
    ) -> None:
        mock_event_provider.search.side_effect = [
            UpstreamPage(results=make_batch(24, 6), total_count=240),
            UpstreamPage(results=make_batch(24, 6, start_id=100), total_count=240),
        ]
        service = EventSearchService(mock_event_provider, inflation_factor=2)
        filters = FilterSet(page=1, page_size=12, genre="techno")

        page = await service.search(filters)

        assert mock_event_provider.search.await_args_list == [
            call(filters, 0, 24),
            call(filters, 24, 24),
        ]
        assert len(page.events) == 12
        assert page.pagination.total_results == 60
        assert page.pagination.total_pages == 5
        assert page.pagination.has_more is True

    @pytest.mark.asyncio
    async def test_single_batch_ratio(self, mock_event_provider) -> None:
        # Total not above the fetch limit, so no supplemental fetch.
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(24, 6), total_count=24
        )
        service = EventSearchService(mock_event_provider, inflation_factor=2)

        page = await service.search(FilterSet(page=1, page_size=12, genre="techno"))

        assert mock_event_provider.search.await_count == 1
        assert len(page.events) == 6
        assert page.pagination.total_results == 6
        assert page.pagination.total_pages == 1

    @pytest.mark.asyncio
    async def test_no_supplemental_fetch_when_page_filled(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(24, 18), total_count=240
        )
        service = EventSearchService(mock_event_provider, inflation_factor=2)

        page = await service.search(FilterSet(page=1, page_size=12, genre="techno"))

        assert mock_event_provider.search.await_count == 1
        assert len(page.events) == 12
        assert page.pagination.total_results == 180

    @pytest.mark.asyncio
    async def test_no_supplemental_fetch_beyond_first_page(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(24, 3), total_count=240
        )
        service = EventSearchService(mock_event_provider, inflation_factor=2)
        filters = FilterSet(page=2, page_size=12, genre="techno")

        page = await service.search(filters)

        mock_event_provider.search.assert_awaited_once_with(filters, 12, 24)
        assert len(page.events) == 3
        assert page.pagination.total_results == 30
        assert page.pagination.current_page == 2
        assert page.pagination.total_pages == 3
        assert page.pagination.has_more is True

    @pytest.mark.asyncio
    async def test_inflation_factor_sets_fetch_limit(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(60, 60), total_count=60
        )
        service = EventSearchService(mock_event_provider, inflation_factor=5)
        filters = FilterSet(page=1, page_size=12, genre="techno")

        page = await service.search(filters)

        mock_event_provider.search.assert_awaited_once_with(filters, 0, 60)
        assert len(page.events) == 12

    @pytest.mark.asyncio
    async def test_idempotent_against_stable_upstream(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=make_batch(24, 4), total_count=60
        )
        service = EventSearchService(mock_event_provider)
        filters = FilterSet(page=1, page_size=12, genre="techno")

        first = await service.search(filters)
        second = await service.search(filters)

        assert first == second
        assert first.pagination.total_results == 10
        assert mock_event_provider.search.await_count == 4

    @pytest.mark.asyncio
    async def test_empty_upstream_yields_one_empty_page(self, mock_event_provider) -> None:
        page = await EventSearchService(mock_event_provider).search(
            FilterSet(page=1, page_size=12, genre="house")
        )
        assert page.events == []
        assert page.pagination.total_results == 0
        assert page.pagination.total_pages == 1
        assert page.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_supplemental_failure_fails_request(self, mock_event_provider) -> None:
        mock_event_provider.search.side_effect = [
            UpstreamPage(results=make_batch(24, 2), total_count=240),
            UpstreamError("Skiddle returned HTTP 503", provider_name="skiddle", status_code=503),
        ]
        service = EventSearchService(mock_event_provider)

        with pytest.raises(UpstreamError):
            await service.search(FilterSet(page=1, page_size=12, genre="techno"))

    def test_inflation_factor_must_be_positive(self, mock_event_provider) -> None:
        with pytest.raises(ConfigurationError):
            EventSearchService(mock_event_provider, inflation_factor=0)


class TestFailures:
    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, mock_event_provider) -> None:
        mock_event_provider.search.side_effect = UpstreamError("down", provider_name="skiddle")
        with pytest.raises(UpstreamError):
            await EventSearchService(mock_event_provider).search(FilterSet())
        assert mock_event_provider.search.await_count == 1

    @pytest.mark.asyncio
    async def test_malformed_event_raises_shaping_error(self, mock_event_provider) -> None:
        mock_event_provider.search.return_value = UpstreamPage(
            results=[make_raw_event(1, venue=None)], total_count=1
        )
        with pytest.raises(ShapingError):
            await EventSearchService(mock_event_provider).search(FilterSet())
