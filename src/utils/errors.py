"""Custom exception hierarchy for Find My Rave.

All application exceptions inherit from :class:`FindMyRaveError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "skiddle") caused the failure.

    FindMyRaveError  (base -- catch-all for any application error)
    +-- ValidationError       (malformed query parameters, HTTP 400)
    +-- UpstreamError         (events provider non-2xx / network failure)
    +-- ShapingError          (unexpected shape in a raw provider event)
    +-- ConfigurationError    (startup / missing config)

The API middleware maps each class to an HTTP status; see
:mod:`src.api.middleware`.
"""


class FindMyRaveError(Exception):
    """Base exception for all Find My Rave errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[skiddle] HTTP 503``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------

class ValidationError(FindMyRaveError):
    """Raised when a query parameter cannot be parsed or is out of range.

    ``field`` names the offending query parameter (e.g. ``"page"``).
    """

    def __init__(
        self,
        message: str = "Invalid request parameter",
        field: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._field = field
        super().__init__(message=message, provider_name=provider_name)

    @property
    def field(self) -> str | None:
        return self._field


# ---------------------------------------------------------------------------
# External service errors
# ---------------------------------------------------------------------------

class UpstreamError(FindMyRaveError):
    """Raised when the events provider returns non-2xx or is unreachable.

    ``status_code`` is the upstream HTTP status when one was received,
    ``None`` for transport failures.
    """

    def __init__(
        self,
        message: str = "Events provider request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status_code(self) -> int | None:
        return self._status_code


class ShapingError(FindMyRaveError):
    """Raised when a raw provider event cannot be mapped to a NormalizedEvent."""

    def __init__(
        self,
        message: str = "Unexpected event shape from provider",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(FindMyRaveError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
