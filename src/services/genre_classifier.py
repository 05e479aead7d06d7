"""Genre reclassifier: filter raw provider events by Find My Rave genre."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from src.config.genres import ALL_GENRES, GENRE_TO_SKIDDLE_IDS


def event_genre_ids(raw_event: Mapping[str, Any]) -> set[str]:
    """Return the provider genre ids tagged on *raw_event* as strings."""
    ids: set[str] = set()
    for genre in raw_event.get("genres") or []:
        if isinstance(genre, Mapping) and genre.get("genreid") is not None:
            ids.add(str(genre["genreid"]))
    return ids


def filter_by_genre(
    raw_events: Sequence[Mapping[str, Any]],
    genre: str,
    mapping: Mapping[str, frozenset[str]] = GENRE_TO_SKIDDLE_IDS,
) -> list[Mapping[str, Any]]:
    """Keep the events whose genre ids intersect the ids mapped to *genre*.

    ``"all"`` passes every event through.  A genre missing from *mapping*
    matches nothing.
    """
    if genre == ALL_GENRES:
        return list(raw_events)

    wanted = mapping.get(genre, frozenset())
    return [event for event in raw_events if not wanted.isdisjoint(event_genre_ids(event))]
