"""Pydantic response schemas for the Find My Rave API.

Search and detail endpoints return the domain models from
:mod:`src.models.event` directly (camelCase on the wire); the schemas here
cover the error body and the system endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint on failure."""

    message: str


class GenreInfo(BaseModel):
    """One Find My Rave genre and the Skiddle ids it covers."""

    key: str
    skiddle_genre_ids: list[str] = Field(default_factory=list)


class GenresResponse(BaseModel):
    """Genres accepted by the ``genre`` search parameter, plus ``all``."""

    genres: list[GenreInfo]


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]
