"""
Request digest providers.

SharePoint requires an `X-RequestDigest` header on every POST/PATCH/DELETE. The
client never caches the value: it asks its provider on each mutating call, and
the provider either returns the current token or raises RequestDigestError.

Concrete providers cover the usual sources:

- StaticDigestProvider: a value obtained elsewhere.
- SettingsDigestProvider: the `SP_REQUEST_DIGEST` setting.
- PageDigestProvider: the `__REQUESTDIGEST` hidden input of a rendered page.
- fetch_context_digest: asks `/_api/contextinfo` for a fresh value.
"""

from __future__ import annotations

import abc
from typing import Optional, Protocol, runtime_checkable

import httpx
from bs4 import BeautifulSoup

from sp_satellites.config import Settings, get_settings
from sp_satellites.errors import RemoteError, RequestDigestError, TransportError
from sp_satellites.utils.logging import get_logger

log = get_logger(__name__)

DIGEST_ELEMENT_ID = "__REQUESTDIGEST"
MISSING_DIGEST_MESSAGE = (
    "Request digest not found. Ensure this runs against a SharePoint page or "
    "configure SP_REQUEST_DIGEST."
)


@runtime_checkable
class RequestDigestProvider(Protocol):
    """
    Capability: supply the current request digest or fail.

    Attributes
    ----------
    name : str
        A short identifier used in log lines.
    """

    name: str

    def get_digest(self) -> str:
        """
        Return the current digest value.

        Raises
        ------
        RequestDigestError
            If no digest can be located.
        """
        ...


class AbstractDigestProvider(abc.ABC):
    """
    ABC helper for class-based providers.

    Subclasses implement `_lookup`; empty values are rejected here.
    """

    name: str

    def get_digest(self) -> str:
        value = self._lookup()
        if not value:
            raise RequestDigestError(MISSING_DIGEST_MESSAGE)
        return value

    @abc.abstractmethod
    def _lookup(self) -> Optional[str]:  # pragma: no cover - interface only
        raise NotImplementedError


class StaticDigestProvider(AbstractDigestProvider):
    name = "static"

    def __init__(self, value: Optional[str]) -> None:
        self._value = value

    def _lookup(self) -> Optional[str]:
        return self._value


class SettingsDigestProvider(AbstractDigestProvider):
    """Read `SP_REQUEST_DIGEST` from settings at call time."""

    name = "settings"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings

    def _lookup(self) -> Optional[str]:
        settings = self._settings or get_settings()
        return settings.request_digest


class PageDigestProvider(AbstractDigestProvider):
    """
    Locate the digest element in the HTML of a SharePoint page.

    The markup is parsed on every call so that a refreshed page (new digest)
    can be swapped in with `update_page`.
    """

    name = "page"

    def __init__(self, html: str, element_id: str = DIGEST_ELEMENT_ID) -> None:
        self._html = html
        self._element_id = element_id

    def update_page(self, html: str) -> None:
        self._html = html

    def _lookup(self) -> Optional[str]:
        soup = BeautifulSoup(self._html or "", "html.parser")
        element = soup.find(id=self._element_id) or soup.find(attrs={"name": self._element_id})
        if element is None:
            return None
        value = element.get("value")
        return value if isinstance(value, str) else None


def _extract_form_digest(payload: dict) -> Optional[str]:
    # JSON light: {"FormDigestValue": ...}; verbose: {"d": {"GetContextWebInformation": {...}}}
    if "FormDigestValue" in payload:
        return payload["FormDigestValue"]
    info = payload.get("d", {}).get("GetContextWebInformation", {})
    return info.get("FormDigestValue")


async def fetch_context_digest(http: httpx.AsyncClient, site_url: str) -> StaticDigestProvider:
    """
    Request a fresh digest from `<site>/_api/contextinfo`.

    Returns
    -------
    StaticDigestProvider
        Provider holding the returned `FormDigestValue`.

    Raises
    ------
    RemoteError
        If the endpoint answers with a non-success status.
    TransportError
        If the endpoint cannot be reached.
    RequestDigestError
        If the response carries no digest value.
    """
    url = f"{site_url.rstrip('/')}/_api/contextinfo"
    log.info("Requesting context digest", extra={"operation": "contextinfo", "url": url})
    try:
        response = await http.post(url, headers={"Accept": "application/json"})
    except httpx.HTTPError as exc:
        raise TransportError(
            "Failed to fetch request digest", str(exc) or type(exc).__name__, method="POST", url=url
        ) from exc
    if not response.is_success:
        raise RemoteError(
            "Failed to fetch request digest",
            response.status_code,
            response.reason_phrase,
            method="POST",
            url=url,
        )
    value = _extract_form_digest(response.json())
    if not value:
        raise RequestDigestError("contextinfo response did not include FormDigestValue")
    return StaticDigestProvider(value)


__all__ = [
    "DIGEST_ELEMENT_ID",
    "AbstractDigestProvider",
    "PageDigestProvider",
    "RequestDigestProvider",
    "SettingsDigestProvider",
    "StaticDigestProvider",
    "fetch_context_digest",
]
