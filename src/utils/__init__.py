"""Utility modules for Find My Rave.

- **errors** -- Exception hierarchy rooted at FindMyRaveError; the API
  layer maps each subclass to an HTTP status.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from src.utils.errors import (
    ConfigurationError,
    FindMyRaveError,
    ShapingError,
    UpstreamError,
    ValidationError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "FindMyRaveError",
    "ShapingError",
    "UpstreamError",
    "ValidationError",
    "configure_logging",
    "get_logger",
]
