"""Query normalizer: raw search query parameters to a validated FilterSet.

Parameter names follow the web client (``event``, ``location``, ``limit``,
``dateRange``, ``customDate``...).  Empty values are treated as absent.
Malformed values raise :class:`~src.utils.errors.ValidationError` naming
the offending parameter; the page size is clamped rather than rejected
when it exceeds the configured maximum.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, timedelta

from src.config.genres import ALL_GENRES, GENRE_KEYS, is_known_genre
from src.models.event import DateRange, FilterSet
from src.utils.errors import ValidationError

_SATURDAY = 6
_FRIDAY = 5


def _day_of_week(day: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % 7


def resolve_date_range(
    date_range: DateRange,
    today: date,
    custom_date: date | None = None,
) -> tuple[date | None, date | None]:
    """Resolve a date-range shorthand to concrete ``(min_date, max_date)``.

    ``this-week`` runs from today to the upcoming Saturday; ``weekend``
    runs from the upcoming Friday (today, on a Friday) to the Sunday after
    it.  ``custom`` only resolves when *custom_date* is given.  ``all``
    resolves to ``(None, None)``.
    """
    if date_range is DateRange.TODAY:
        return today, today
    if date_range is DateRange.TOMORROW:
        tomorrow = today + timedelta(days=1)
        return tomorrow, tomorrow
    if date_range is DateRange.THIS_WEEK:
        end_of_week = today + timedelta(days=_SATURDAY - _day_of_week(today))
        return today, end_of_week
    if date_range is DateRange.WEEKEND:
        friday = today + timedelta(days=(_FRIDAY - _day_of_week(today) + 7) % 7)
        return friday, friday + timedelta(days=2)
    if date_range is DateRange.CUSTOM and custom_date is not None:
        return custom_date, custom_date
    return None, None


def _clean(params: Mapping[str, str], name: str) -> str | None:
    value = params.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_int(params: Mapping[str, str], name: str) -> int | None:
    raw = _clean(params, name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer, got {raw!r}", field=name) from None


def _parse_date(params: Mapping[str, str], name: str) -> date | None:
    raw = _clean(params, name)
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"'{name}' must be a YYYY-MM-DD date, got {raw!r}", field=name) from None


class QueryNormalizer:
    """Turns raw query parameters into a :class:`FilterSet`.

    Parameters
    ----------
    default_page_size:
        Page size used when ``limit`` is absent.
    max_page_size:
        Hard upper bound on the page size; larger requests are clamped.
    default_order:
        Upstream ordering used when ``order`` is absent.
    """

    def __init__(
        self,
        default_page_size: int = 12,
        max_page_size: int = 24,
        default_order: str = "trending",
    ) -> None:
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._default_order = default_order

    def normalize(self, params: Mapping[str, str], today: date | None = None) -> FilterSet:
        """Validate *params* and resolve date shorthands relative to *today*."""
        today = today or date.today()

        page = _parse_int(params, "page")
        if page is None:
            page = 1
        if page < 1:
            raise ValidationError(f"'page' must be at least 1, got {page}", field="page")

        limit = _parse_int(params, "limit")
        if limit is None:
            limit = self._default_page_size
        if limit < 1:
            raise ValidationError(f"'limit' must be at least 1, got {limit}", field="limit")
        page_size = min(limit, self._max_page_size)

        skip = _parse_int(params, "skip") or 0
        if skip < 0:
            raise ValidationError(f"'skip' must not be negative, got {skip}", field="skip")

        genre = (_clean(params, "genre") or ALL_GENRES).lower()
        if not is_known_genre(genre):
            raise ValidationError(
                f"Unknown genre {genre!r}; expected 'all' or one of {', '.join(GENRE_KEYS)}",
                field="genre",
            )

        raw_range = (_clean(params, "dateRange") or DateRange.ALL.value).lower()
        try:
            date_range = DateRange(raw_range)
        except ValueError:
            date_range = DateRange.ALL

        custom_date = _parse_date(params, "customDate")
        min_date, max_date = resolve_date_range(date_range, today, custom_date)
        if min_date is None and max_date is None:
            min_date = _parse_date(params, "minDate")
            max_date = _parse_date(params, "maxDate")
        if min_date is not None and max_date is not None and min_date > max_date:
            raise ValidationError("'minDate' must not be after 'maxDate'", field="minDate")

        return FilterSet(
            keyword=_clean(params, "event"),
            location=_clean(params, "location"),
            page=page,
            page_size=page_size,
            genre=genre,
            date_range=date_range,
            custom_date=custom_date,
            min_date=min_date,
            max_date=max_date,
            order=_clean(params, "order") or self._default_order,
            skip=skip,
            platform=(_clean(params, "platform") or "all").lower(),
        )
