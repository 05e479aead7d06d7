"""Event search providers."""

from src.providers.event.skiddle_provider import SkiddleEventProvider

__all__ = ["SkiddleEventProvider"]
