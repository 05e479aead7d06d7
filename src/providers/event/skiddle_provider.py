"""Skiddle events API client.

Translates a :class:`~src.models.event.FilterSet` into Skiddle's
``/events/search/`` query-string dialect and returns raw result pages.

Skiddle quirks worth knowing:

* ``totalcount`` comes back as a string-encoded integer.
* A location search is expressed as a second ``keyword`` plus ``radius``
  and ``geodist=1``, so the query string may carry ``keyword`` twice.
* Genre filtering is not supported server-side in the form we need; see
  :mod:`src.services.genre_classifier`.

Each call is a single attempt.  Non-2xx responses and transport failures
raise :class:`~src.utils.errors.UpstreamError`; rate-limit responses are
not retried either.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.interfaces.event_provider import IEventProvider
from src.models.event import FilterSet, UpstreamPage
from src.utils.errors import UpstreamError
from src.utils.logging import get_logger

_DEFAULT_API_BASE = "https://www.skiddle.com/api/v1"
_DEFAULT_RADIUS = 20
_DEFAULT_TIMEOUT = 15.0
_PROVIDER_NAME = "skiddle"


class SkiddleEventProvider(IEventProvider):
    """Searches Skiddle's public events API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    api_key:
        Skiddle API key.
    api_base:
        Base URL of the Skiddle API (no trailing slash).
    radius:
        Search radius in miles applied to location searches.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        api_base: str = _DEFAULT_API_BASE,
        radius: int = _DEFAULT_RADIUS,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._radius = radius
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def build_search_params(
        self,
        filters: FilterSet,
        offset: int,
        limit: int,
    ) -> list[tuple[str, str]]:
        """Build the ``/events/search/`` query string as ordered key/value pairs."""
        params: list[tuple[str, str]] = [
            ("api_key", self._api_key),
            ("offset", str(offset)),
            ("limit", str(limit)),
            ("order", filters.order),
            ("description", "1"),
            ("ticketsavailable", "1"),
        ]
        if filters.keyword:
            params.append(("keyword", filters.keyword))
        if filters.location:
            params.extend(
                [
                    ("keyword", filters.location),
                    ("radius", str(self._radius)),
                    ("geodist", "1"),
                ]
            )
        if filters.min_date is not None:
            params.append(("minDate", filters.min_date.isoformat()))
        if filters.max_date is not None:
            params.append(("maxDate", filters.max_date.isoformat()))
        return params

    async def _get_json(
        self,
        url: str,
        params: list[tuple[str, str]],
        allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        """GET *url* once and decode the JSON body.

        Returns ``None`` for a 404 when *allow_not_found* is set.
        """
        if not self._api_key:
            raise UpstreamError("Skiddle API key is not configured", provider_name=_PROVIDER_NAME)

        try:
            response = await self._http.get(url, params=params, timeout=self._timeout)
        except httpx.HTTPError as exc:
            self._logger.warning("skiddle_request_failed", url=url, error=str(exc))
            raise UpstreamError(
                f"Request to Skiddle failed: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        if allow_not_found and response.status_code == 404:
            return None

        if not 200 <= response.status_code < 300:
            self._logger.warning(
                "skiddle_http_error", url=url, status=response.status_code
            )
            raise UpstreamError(
                f"Skiddle returned HTTP {response.status_code}",
                provider_name=_PROVIDER_NAME,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "Skiddle returned a non-JSON body", provider_name=_PROVIDER_NAME
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamError(
                "Skiddle returned an unexpected body", provider_name=_PROVIDER_NAME
            )
        return data

    # ------------------------------------------------------------------
    # IEventProvider implementation
    # ------------------------------------------------------------------

    async def search(self, filters: FilterSet, offset: int, limit: int) -> UpstreamPage:
        params = self.build_search_params(filters, offset, limit)
        data = await self._get_json(f"{self._api_base}/events/search/", params) or {}

        results = data.get("results") or []
        if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
            raise UpstreamError(
                "Skiddle returned results that are not a list of events",
                provider_name=_PROVIDER_NAME,
            )
        try:
            total_count = int(data.get("totalcount") or 0)
        except (TypeError, ValueError) as exc:
            raise UpstreamError(
                f"Skiddle returned a malformed totalcount: {data.get('totalcount')!r}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        self._logger.debug(
            "skiddle_search_fetched",
            offset=offset,
            limit=limit,
            returned=len(results),
            total_count=total_count,
        )
        return UpstreamPage(results=results, total_count=max(total_count, 0))

    async def get_event(self, event_id: str) -> dict[str, Any] | None:
        params = [
            ("api_key", self._api_key),
            ("platform", "all"),
            ("imageFilter", "1"),
        ]
        data = await self._get_json(
            f"{self._api_base}/events/{event_id}/", params, allow_not_found=True
        )
        if data is None:
            return None
        result = data.get("results")
        return result if isinstance(result, dict) else None

    def get_provider_name(self) -> str:
        """Return ``'skiddle'``."""
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        """``True`` when an API key is configured."""
        return bool(self._api_key)
