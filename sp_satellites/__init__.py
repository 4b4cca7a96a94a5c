"""
SharePoint Satellite List client.

Async REST client and form adapter for the `Satellite_Fixed` SharePoint list:

- create, list, get, update and delete list items over the SharePoint REST API
- request digest (anti-forgery token) supplied by pluggable providers
- field validation for NORAD IDs, COSPAR IDs and launch dates
- form binding through an explicit field map, batch import and a CLI
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from sp_satellites.batch import BatchItemResult, create_many, persist_results
from sp_satellites.client import SatelliteListClient
from sp_satellites.config import Settings, get_settings
from sp_satellites.digest import (
    PageDigestProvider,
    RequestDigestProvider,
    SettingsDigestProvider,
    StaticDigestProvider,
    fetch_context_digest,
)
from sp_satellites.domain.models import FIELD_MAP, SatelliteDraft, SatelliteRecord
from sp_satellites.errors import (
    RemoteError,
    RequestDigestError,
    SatelliteClientError,
    TransportError,
    ValidationError,
)
from sp_satellites.forms import FormAdapter, HostHooks, NullHostHooks, collect_form_data
from sp_satellites.utils.logging import configure_from_settings, configure_logging, get_logger
from sp_satellites.validation import validate_satellite_data

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Client
    "SatelliteListClient",
    # Digest providers
    "RequestDigestProvider",
    "StaticDigestProvider",
    "SettingsDigestProvider",
    "PageDigestProvider",
    "fetch_context_digest",
    # Domain
    "FIELD_MAP",
    "SatelliteDraft",
    "SatelliteRecord",
    # Errors
    "SatelliteClientError",
    "ValidationError",
    "RemoteError",
    "TransportError",
    "RequestDigestError",
    # Forms and validation
    "FormAdapter",
    "HostHooks",
    "NullHostHooks",
    "collect_form_data",
    "validate_satellite_data",
    # Batch
    "BatchItemResult",
    "create_many",
    "persist_results",
    # Logging
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
