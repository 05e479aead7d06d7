"""Public interface definitions for external service providers.

Every external service is reached through the abstract base classes in
this package.  Concrete adapters live in ``src/providers/`` and are wired
up in ``src/main.py``.

    Interface         →  Concrete implementations (in src/providers/)
    ──────────────────────────────────────────────────────────────
    IEventProvider    →  SkiddleEventProvider
    ICacheProvider    →  MemoryCacheProvider
"""

from __future__ import annotations

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.event_provider import IEventProvider

__all__ = [
    "ICacheProvider",
    "IEventProvider",
]
