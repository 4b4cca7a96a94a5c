"""
REST client for the SharePoint `Satellite_Fixed` list.

Translates the list operations (create, list, get by id, update, delete and
the two search shortcuts) into SharePoint REST requests against a single
collection endpoint, and normalizes responses and failures:

- successful reads are parsed into SatelliteRecord models;
- every non-success status raises RemoteError with the server's message when
  the error payload carries one, and the HTTP status text otherwise;
- input problems raise ValidationError before anything is sent.

Mutating requests read the request digest from the injected provider at call
time. Update and delete always send `If-Match: *`, so the server performs no
version check and the last write wins.

Usage:
    async with SatelliteListClient(site_url, StaticDigestProvider(digest)) as client:
        created = await client.create({"title": "ISS (ZARYA)", "norad_id": "25544",
                                       "cospar_id": "1998-067A"})
        await client.update(created.identifier, {"Status": "Under Maintenance"})
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from sp_satellites.config import Settings, get_settings
from sp_satellites.digest import RequestDigestProvider, SettingsDigestProvider
from sp_satellites.domain.models import SatelliteDraft, SatelliteRecord
from sp_satellites.errors import RemoteError, TransportError, ValidationError
from sp_satellites.infrastructure.http_factory import create_async_client
from sp_satellites.utils.logging import get_logger
from sp_satellites.utils.timing import timed
from sp_satellites.validation import require_fields

log = get_logger(__name__)

DEFAULT_LIST_NAME = "Satellite_Fixed"
DEFAULT_TOP = 100
ITEMS_URL_TEMPLATE = "{site}/_api/web/lists/getbytitle('{list_name}')/items"

JSON_CONTENT = "application/json"
DIGEST_HEADER = "X-RequestDigest"
OVERWRITE_HEADER = "If-Match"
OVERWRITE_ANY = "*"

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def quote_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted OData string literal."""
    return str(value).replace("'", "''")


def _server_message(response: httpx.Response) -> Optional[str]:
    """
    Pull the message out of a SharePoint error payload.

    Handles `{"error": {"message": "..."}}`, the verbose
    `{"error": {"message": {"value": "..."}}}` and the JSON light
    `{"odata.error": {...}}` shapes. Returns None for anything else.
    """
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error") or payload.get("odata.error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if isinstance(message, dict):
        message = message.get("value")
    if isinstance(message, str) and message:
        return message
    return None


def _unwrap(payload: Any) -> Any:
    # odata=verbose wraps bodies in {"d": ...}
    if isinstance(payload, dict) and set(payload) == {"d"}:
        return payload["d"]
    return payload


class SatelliteListClient:
    """
    Async client bound to one SharePoint list.

    Parameters
    ----------
    site_url : str
        Absolute URL of the SharePoint web hosting the list.
    digest_provider : RequestDigestProvider
        Supplies the request digest for POST/PATCH/DELETE; consulted on every
        mutating call.
    http : httpx.AsyncClient | None
        Transport to use. When omitted, one is created from settings and
        closed by `aclose()`.
    list_name : str
        Title of the list.
    default_top : int
        Page-size cap used by `list` when none is given.
    """

    def __init__(
        self,
        site_url: str,
        digest_provider: RequestDigestProvider,
        http: Optional[httpx.AsyncClient] = None,
        list_name: str = DEFAULT_LIST_NAME,
        default_top: int = DEFAULT_TOP,
        settings: Optional[Settings] = None,
    ) -> None:
        if not site_url:
            raise ValueError("site_url is required")
        self.site_url = site_url.rstrip("/")
        self.list_name = list_name
        self.default_top = default_top
        self.items_url = ITEMS_URL_TEMPLATE.format(
            site=self.site_url, list_name=quote_literal(list_name)
        )
        self._digest_provider = digest_provider
        self._owns_http = http is None
        self._http = http if http is not None else create_async_client(settings)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        digest_provider: Optional[RequestDigestProvider] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> "SatelliteListClient":
        """Build a client from `SP_*` settings."""
        settings = settings or get_settings()
        return cls(
            site_url=settings.site_url,
            digest_provider=digest_provider or SettingsDigestProvider(settings),
            http=http,
            list_name=settings.list_name,
            default_top=settings.default_top,
            settings=settings,
        )

    async def __aenter__(self) -> "SatelliteListClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _item_url(self, identifier: Any) -> str:
        try:
            item_id = int(identifier)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Item identifier must be an integer, got {identifier!r}", field="identifier"
            ) from None
        return f"{self.items_url}({item_id})"

    def _read_headers(self) -> Dict[str, str]:
        return {"Accept": JSON_CONTENT, "Content-Type": JSON_CONTENT}

    def _write_headers(self, overwrite: bool = False, body: bool = True) -> Dict[str, str]:
        headers = {"Accept": JSON_CONTENT}
        if body:
            headers["Content-Type"] = JSON_CONTENT
        headers[DIGEST_HEADER] = self._digest_provider.get_digest()
        if overwrite:
            headers[OVERWRITE_HEADER] = OVERWRITE_ANY
        return headers

    async def _send(
        self,
        operation: str,
        action: str,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """
        Issue one request.

        Raises RemoteError on a non-success status and TransportError when
        no response arrives.
        """
        trace: Dict[str, Any] = {"operation": operation, "method": method, "url": url}
        try:
            with timed(operation) as timing:
                response = await self._http.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as exc:
            failure = TransportError(action, str(exc) or type(exc).__name__, method=method, url=url)
            trace["duration_ms"] = timing.duration_ms
            log.error(f"[{operation.upper()}] {failure}", extra=trace)
            raise failure from exc

        trace["status"] = response.status_code
        trace["duration_ms"] = timing.duration_ms
        if response.is_success:
            log.debug(f"[{operation.upper()}] {method} {url} -> {response.status_code}", extra=trace)
            return response

        error = RemoteError(
            action,
            response.status_code,
            response.reason_phrase,
            server_message=_server_message(response),
            method=method,
            url=url,
        )
        log.error(f"[{operation.upper()}] {error}", extra=trace)
        raise error

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create(self, record: Union[SatelliteDraft, Mapping[str, Any]]) -> SatelliteRecord:
        """
        Add a satellite to the list.

        Parameters
        ----------
        record : SatelliteDraft | Mapping
            Title, NORAD ID and COSPAR ID are required; the remaining columns
            default to empty text, `Status="Operational"` and no launch date.

        Returns
        -------
        SatelliteRecord
            The item as created by SharePoint, including its identifier.

        Raises
        ------
        ValidationError
            If a required field is empty (no request is sent).
        RemoteError
            If SharePoint rejects the request.
        """
        draft = require_fields(record)
        payload = draft.to_payload()
        log.info("Adding satellite", extra={"operation": "create", "payload": payload})

        response = await self._send(
            "create",
            "SharePoint API error",
            "POST",
            self.items_url,
            headers=self._write_headers(),
            json=payload,
        )
        created = SatelliteRecord.model_validate(_unwrap(response.json()))
        log.info(
            "Satellite added successfully",
            extra={"operation": "create", "identifier": created.identifier},
        )
        return created

    async def list(
        self, top: Optional[int] = None, filter: Optional[str] = None
    ) -> List[SatelliteRecord]:
        """
        Fetch up to `top` satellites, optionally restricted by an OData filter.

        The filter is URL-encoded and otherwise sent as given; building a
        valid expression is the caller's job. Only the first page is read.
        A `top` below 1 raises ValidationError before any request.
        """
        if top is None:
            top = self.default_top
        if top < 1:
            raise ValidationError(f"top must be a positive integer, got {top}", field="top")
        url = f"{self.items_url}?$top={int(top)}"
        if filter:
            url += f"&$filter={quote(filter, safe=_URI_COMPONENT_SAFE)}"

        log.info("Fetching satellites", extra={"operation": "list", "top": top, "filter": filter})
        response = await self._send(
            "list", "Failed to fetch satellites", "GET", url, headers=self._read_headers()
        )
        payload = _unwrap(response.json())
        items = payload.get("value", payload.get("results", [])) if isinstance(payload, dict) else []
        records = [SatelliteRecord.model_validate(item) for item in items[:top]]
        log.info("Retrieved satellites", extra={"operation": "list", "count": len(records)})
        return records

    async def get_by_id(self, identifier: int) -> SatelliteRecord:
        """Fetch one satellite by its SharePoint item id."""
        url = self._item_url(identifier)
        log.info("Fetching satellite", extra={"operation": "get_by_id", "identifier": identifier})
        response = await self._send(
            "get_by_id", "Failed to fetch satellite", "GET", url, headers=self._read_headers()
        )
        return SatelliteRecord.model_validate(_unwrap(response.json()))

    async def update(self, identifier: int, fields: Mapping[str, Any]) -> bool:
        """
        Overwrite the given columns of one item; other columns are untouched.

        Parameters
        ----------
        identifier : int
            SharePoint item id.
        fields : Mapping[str, Any]
            Column internal names to new values, e.g. `{"Status": "Retired"}`.
        """
        url = self._item_url(identifier)
        log.info(
            "Updating satellite",
            extra={"operation": "update", "identifier": identifier, "fields": sorted(fields)},
        )
        await self._send(
            "update",
            "Failed to update satellite",
            "PATCH",
            url,
            headers=self._write_headers(overwrite=True),
            json=dict(fields),
        )
        log.info("Satellite updated successfully", extra={"operation": "update", "identifier": identifier})
        return True

    async def delete(self, identifier: int) -> bool:
        """Remove one item from the list."""
        url = self._item_url(identifier)
        log.info("Deleting satellite", extra={"operation": "delete", "identifier": identifier})
        await self._send(
            "delete",
            "Failed to delete satellite",
            "DELETE",
            url,
            headers=self._write_headers(overwrite=True, body=False),
        )
        log.info("Satellite deleted successfully", extra={"operation": "delete", "identifier": identifier})
        return True

    async def search_by_catalog_id(self, norad_id: str) -> List[SatelliteRecord]:
        """Satellites whose NORAD catalog number equals `norad_id`."""
        return await self.list(filter=f"NORAD_ID eq '{quote_literal(norad_id)}'")

    search_by_norad_id = search_by_catalog_id

    async def search_by_title(self, title: str) -> List[SatelliteRecord]:
        """Satellites whose title contains `title`."""
        return await self.list(filter=f"substringof('{quote_literal(title)}', Title)")


__all__ = [
    "DEFAULT_LIST_NAME",
    "DEFAULT_TOP",
    "ITEMS_URL_TEMPLATE",
    "SatelliteListClient",
    "quote_literal",
]
