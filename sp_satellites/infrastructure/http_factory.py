"""
HTTP client factory utilities for the satellite list client.

Centralizes construction of the `httpx.AsyncClient` used to talk to
SharePoint so that timeouts and credentials come from one place. The client
adds no retry layer: every request is issued exactly once.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import httpx

from sp_satellites.config import Settings, get_settings


def build_base_headers(settings: Optional[Settings] = None) -> Dict[str, str]:
    """
    Headers sent with every request.

    A bearer token is attached when `SP_ACCESS_TOKEN` is configured (app-only
    or delegated OAuth access); otherwise the transport relies on whatever
    cookies or auth the caller installs on the client.
    """
    settings = settings or get_settings()
    headers = {"Accept": "application/json"}
    if settings.access_token:
        headers["Authorization"] = f"Bearer {settings.access_token}"
    return headers


def create_async_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a new async HTTP client configured from settings.

    Parameters
    ----------
    settings : Settings | None
        Settings to use; defaults to the cached application settings.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (e.g. `httpx.MockTransport` in tests).

    Returns
    -------
    httpx.AsyncClient
        A client the caller is responsible for closing.
    """
    settings = settings or get_settings()
    return httpx.AsyncClient(
        headers=build_base_headers(settings),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


@asynccontextmanager
async def async_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """
    Context manager yielding a configured client and closing it afterwards.

    Example
    -------
        async with async_client() as http:
            response = await http.get(url)
    """
    client = create_async_client(settings, transport=transport)
    try:
        yield client
    finally:
        await client.aclose()


__all__ = [
    "async_client",
    "build_base_headers",
    "create_async_client",
]
