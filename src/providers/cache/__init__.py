"""Cache providers.

In-memory per-item TTL cache used for single-event detail lookups, so a
popular event page does not hit the events provider on every view.

MemoryCacheProvider is not shared across processes.  For multi-worker
deployments, swap in a Redis adapter implementing ICacheProvider without
changing any business logic.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
