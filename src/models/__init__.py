"""Find My Rave domain models: re-exports all public model classes."""

from __future__ import annotations

from src.models.event import (
    DateRange,
    EventSearchPage,
    FilterSet,
    NormalizedEvent,
    PaginationResult,
    SkiddleGenre,
    UpstreamPage,
)

__all__ = [
    "DateRange",
    "EventSearchPage",
    "FilterSet",
    "NormalizedEvent",
    "PaginationResult",
    "SkiddleGenre",
    "UpstreamPage",
]
