"""Shared pytest fixtures for the Find My Rave test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.event_provider import IEventProvider
from src.models.event import UpstreamPage

# Skiddle genre ids used throughout the tests.
TECHNO_ID = "9"
HOUSE_ID = "1"
POP_ID = "500"


def make_raw_event(
    event_id: int | str = 1,
    genre_ids: list[str] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Build a Skiddle-shaped raw event record."""
    raw: dict[str, Any] = {
        "id": str(event_id),
        "eventname": f"Warehouse Rave {event_id}",
        "description": "All night long",
        "startdate": "2026-10-23T22:00:00+00:00",
        "enddate": "2026-10-24T06:00:00+00:00",
        "venue": {
            "id": 77,
            "name": "The Warehouse Project",
            "town": "Manchester",
            "latitude": "53.4668",
            "longitude": "-2.2339",
        },
        "largeimageurl": "https://d31fr2pwly4c4s.cloudfront.net/large.jpg",
        "imageurl": "https://d31fr2pwly4c4s.cloudfront.net/small.jpg",
        "MinAge": "18",
        "entryprice": "£25.00",
        "genres": [{"genreid": gid, "name": f"genre-{gid}"} for gid in (genre_ids or [])],
        "link": f"https://www.skiddle.com/e/{event_id}",
    }
    raw.update(overrides)
    return raw


def make_batch(
    size: int,
    matching: int,
    genre_id: str = TECHNO_ID,
    start_id: int = 1,
) -> list[dict[str, Any]]:
    """Build *size* raw events where the first *matching* carry *genre_id*."""
    return [
        make_raw_event(
            start_id + i,
            genre_ids=[genre_id] if i < matching else [POP_ID],
        )
        for i in range(size)
    ]


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def raw_event_factory() -> Callable[..., dict[str, Any]]:
    return make_raw_event


@pytest.fixture
def mock_event_provider() -> IEventProvider:
    """Mock IEventProvider whose ``search`` returns an empty page by default.

    Override with ``mock_event_provider.search.side_effect = [...]`` to
    script a sequence of upstream pages.
    """
    mock = MagicMock(spec=IEventProvider)
    mock.get_provider_name.return_value = "skiddle"
    mock.is_available.return_value = True
    mock.search = AsyncMock(return_value=UpstreamPage(results=[], total_count=0))
    mock.get_event = AsyncMock(return_value=None)
    return mock
