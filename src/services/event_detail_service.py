"""Single-event lookups with a TTL cache in front of the event providers."""

from __future__ import annotations

from collections.abc import Mapping

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.event_provider import IEventProvider
from src.models.event import NormalizedEvent
from src.utils.logging import get_logger


def event_cache_key(platform: str, event_id: str) -> str:
    return f"event:{platform}:{event_id}"


class EventDetailService:
    """Resolves ``(platform, event_id)`` to a :class:`NormalizedEvent`.

    Hits are served from *cache*; misses go to the provider registered for
    the platform and are cached for *ttl* seconds.  Unknown platforms and
    missing events resolve to ``None`` and are not cached.
    """

    def __init__(
        self,
        providers: Mapping[str, IEventProvider],
        cache: ICacheProvider,
        ttl: int | None = None,
    ) -> None:
        self._providers = dict(providers)
        self._cache = cache
        self._ttl = ttl
        self._logger = get_logger(__name__)

    @property
    def platforms(self) -> list[str]:
        return sorted(self._providers)

    async def get_event(self, platform: str, event_id: str) -> NormalizedEvent | None:
        provider = self._providers.get(platform)
        if provider is None:
            return None

        key = event_cache_key(platform, event_id)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        raw = await provider.get_event(event_id)
        if raw is None:
            self._logger.info("event_not_found", platform=platform, event_id=event_id)
            return None

        event = NormalizedEvent.from_skiddle(raw)
        await self._cache.set(key, event, ttl=self._ttl)
        return event
