"""Abstract base class for event search providers.

Defines the contract for querying a third-party events API (e.g. Skiddle)
for paginated search results and single-event details.  The search
service only talks to this interface, so the provider can be replaced
by a mock in tests or by another platform's adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.models.event import FilterSet, UpstreamPage


class IEventProvider(ABC):
    """Contract for third-party event search services."""

    @abstractmethod
    async def search(self, filters: FilterSet, offset: int, limit: int) -> UpstreamPage:
        """Fetch one block of raw events matching *filters*.

        Parameters
        ----------
        filters:
            Validated search filters.  Pagination fields are ignored in
            favour of *offset* and *limit*.
        offset:
            Zero-based index of the first upstream result to return.
        limit:
            Number of upstream results to request.

        Returns
        -------
        UpstreamPage
            Raw provider records plus the provider-reported total count.

        Raises
        ------
        UpstreamError
            On any non-2xx response or transport failure.  Implementations
            make a single attempt and never retry.
        """

    @abstractmethod
    async def get_event(self, event_id: str) -> dict[str, Any] | None:
        """Fetch a single raw event by its provider id.

        Returns ``None`` when the provider reports the event does not
        exist.  Raises ``UpstreamError`` on other failures.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the platform name, e.g. ``'skiddle'``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured and usable."""
