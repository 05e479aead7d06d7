"""Genre taxonomy: Find My Rave genre keys mapped to Skiddle genre ids.

Skiddle tags each event with a list of ``{"genreid": ..., "name": ...}``
objects.  The application exposes a coarser set of genres; each key below
lists the Skiddle ids that count as a match.  An id may sit under more
than one key (e.g. a house/garage crossover) and that overlap is left
unresolved: the event matches both.
"""

from __future__ import annotations

ALL_GENRES = "all"

GENRE_TO_SKIDDLE_IDS: dict[str, frozenset[str]] = {
    "house": frozenset({"1", "10", "14", "22", "102", "108"}),
    "techno": frozenset({"9", "111"}),  # techno, minimal
    "dnb": frozenset({"8", "80"}),  # drum & bass, jungle
    "trance": frozenset({"2", "17", "28"}),
    "dubstep": frozenset({"65"}),
    "garage": frozenset({"3"}),  # UK garage
    "hardstyle": frozenset({"18", "81"}),  # hardstyle, hardcore
    "electronic": frozenset({"61", "79"}),  # general electronic / EDM
}

GENRE_KEYS: tuple[str, ...] = tuple(GENRE_TO_SKIDDLE_IDS)


def is_known_genre(genre: str) -> bool:
    """Return ``True`` for ``"all"`` or any key in :data:`GENRE_TO_SKIDDLE_IDS`."""
    return genre == ALL_GENRES or genre in GENRE_TO_SKIDDLE_IDS
