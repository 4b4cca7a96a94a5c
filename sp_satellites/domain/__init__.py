"""
Domain package for the satellite list client.

Exports the list schema (column mapping), drafts and returned records.
Keep this package focused on data definitions and validation concerns.
"""

from sp_satellites.domain.models import (
    DEFAULT_STATUS,
    FIELD_MAP,
    REQUIRED_FIELDS,
    SatelliteDraft,
    SatelliteRecord,
)

__all__ = [
    "DEFAULT_STATUS",
    "FIELD_MAP",
    "REQUIRED_FIELDS",
    "SatelliteDraft",
    "SatelliteRecord",
]
