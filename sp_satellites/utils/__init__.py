"""
Utilities package for the satellite list client.

Exports shared helpers for logging, timing, and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from sp_satellites.utils.logging import configure_from_settings, configure_logging, get_logger
from sp_satellites.utils.timing import Timing, timed

__all__ = [
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "Timing",
    "timed",
]
