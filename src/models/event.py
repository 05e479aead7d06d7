"""Pydantic v2 models for event search.

All models use frozen config (immutable).  Models that leave the API are
serialized with camelCase aliases (``startDate``, ``totalPages``...) to
match the JSON contract the web client consumes; Python code uses the
snake_case field names.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.config.genres import ALL_GENRES
from src.utils.errors import ShapingError

_CAMEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DateRange(str, Enum):  # noqa: UP042
    """Date-range shorthands accepted by the search endpoint."""

    ALL = "all"
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this-week"
    WEEKEND = "weekend"
    CUSTOM = "custom"


class FilterSet(BaseModel):
    """Canonical, validated search filters built by the query normalizer.

    ``min_date``/``max_date`` hold the resolved date bounds, whether they
    came from a shorthand, a custom date, or explicit parameters.
    """

    model_config = ConfigDict(frozen=True)

    keyword: str | None = None
    location: str | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)
    genre: str = ALL_GENRES
    date_range: DateRange = DateRange.ALL
    custom_date: date | None = None
    min_date: date | None = None
    max_date: date | None = None
    order: str = "trending"
    skip: int = Field(default=0, ge=0)
    platform: str = "all"

    @property
    def offset(self) -> int:
        """Upstream offset of the first item on the requested page."""
        return (self.page - 1) * self.page_size

    @property
    def has_genre_filter(self) -> bool:
        return self.genre != ALL_GENRES


class SkiddleGenre(BaseModel):
    """A genre tag as Skiddle reports it on an event."""

    model_config = ConfigDict(frozen=True)

    genreid: str
    name: str = ""


class UpstreamPage(BaseModel):
    """One raw page from the events provider.

    ``results`` are provider-shaped dicts and only live for the duration
    of one request.
    """

    model_config = ConfigDict(frozen=True)

    results: list[dict[str, Any]] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)


def _parse_coordinate(value: Any) -> float | None:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(parsed) else parsed


class NormalizedEvent(BaseModel):
    """An event in the application's own shape, built from a provider record."""

    model_config = _CAMEL_CONFIG

    id: str
    title: str
    description: str = ""
    start_date: str
    end_date: str
    location: str | None = None
    town: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None
    min_age: str | None = None
    entry_price: str | None = None
    genres: list[SkiddleGenre] = Field(default_factory=list)
    link: str | None = None
    platform: str = "skiddle"

    @classmethod
    def from_skiddle(cls, raw: Mapping[str, Any]) -> NormalizedEvent:
        """Map a raw Skiddle event record to a :class:`NormalizedEvent`.

        Missing end date falls back to the start date; missing age
        restriction and entry price become ``None``.

        Raises
        ------
        ShapingError
            If the venue is missing or not an object, or a genre entry is
            not an object.
        """
        venue = raw.get("venue")
        if not isinstance(venue, Mapping):
            raise ShapingError(
                f"Event {raw.get('id')!r} has no venue object",
                provider_name="skiddle",
            )

        genres: list[SkiddleGenre] = []
        for genre in raw.get("genres") or []:
            if not isinstance(genre, Mapping):
                raise ShapingError(
                    f"Event {raw.get('id')!r} has a malformed genre entry",
                    provider_name="skiddle",
                )
            genres.append(
                SkiddleGenre(genreid=str(genre.get("genreid", "")), name=genre.get("name") or "")
            )

        start_date = str(raw.get("startdate") or "")
        min_age = raw.get("MinAge")
        entry_price = raw.get("entryprice")

        return cls(
            id=str(raw.get("id", "")),
            title=raw.get("eventname") or "",
            description=raw.get("description") or "",
            start_date=start_date,
            end_date=str(raw.get("enddate") or start_date),
            location=venue.get("name"),
            town=venue.get("town"),
            latitude=_parse_coordinate(venue.get("latitude")),
            longitude=_parse_coordinate(venue.get("longitude")),
            image_url=raw.get("largeimageurl") or raw.get("imageurl") or None,
            min_age=str(min_age) if min_age else None,
            entry_price=str(entry_price) if entry_price else None,
            genres=genres,
            link=raw.get("link") or None,
            platform="skiddle",
        )


class PaginationResult(BaseModel):
    """Pagination block returned with every search page.

    ``total_results`` is exact when no genre filter is active and an
    estimate otherwise.
    """

    model_config = _CAMEL_CONFIG

    current_page: int
    total_pages: int
    total_results: int
    has_more: bool

    @classmethod
    def from_total(cls, page: int, page_size: int, total_results: int) -> PaginationResult:
        total_pages = max(1, math.ceil(total_results / page_size))
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_results=total_results,
            has_more=page < total_pages,
        )


class EventSearchPage(BaseModel):
    """Events for one requested page plus its pagination block."""

    model_config = _CAMEL_CONFIG

    events: list[NormalizedEvent] = Field(default_factory=list)
    pagination: PaginationResult
