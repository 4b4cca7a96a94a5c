"""
Pytest configuration for the satellite list client.

Provides fixtures for:
- Settings isolated from the developer's environment and `.env`
- A recording SharePoint stub built on `httpx.MockTransport`
- Clients wired to that stub
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from sp_satellites.client import SatelliteListClient
from sp_satellites.config import Settings
from sp_satellites.digest import StaticDigestProvider

SITE_URL = "https://contoso.sharepoint.com/sites/space"
DIGEST = "0xDEADBEEF,18 Oct 2026 12:00:00 -0000"

Responder = Callable[[httpx.Request], httpx.Response]


class SharePointStub:
    """
    Records every request and answers through a responder function.
    """

    def __init__(self, responder: Optional[Responder] = None) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Responder = responder or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def json_body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)

    def http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """
    Undo `configure_logging` calls made by a test (CLI runs install stderr handlers).
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific values; ignores `.env`.
    """
    return Settings(
        _env_file=None,
        site_url=SITE_URL,
        list_name="Satellite_Fixed",
        request_digest=DIGEST,
        default_top=100,
        log_level="DEBUG",
    )


@pytest.fixture
def stub() -> SharePointStub:
    return SharePointStub()


@pytest.fixture
def make_client(stub: SharePointStub) -> Callable[..., SatelliteListClient]:
    """
    Build a client against the stub; `digest` may be overridden (None = missing).
    """

    def _make(responder: Optional[Responder] = None, digest: Optional[str] = DIGEST, **kwargs: Any):
        if responder is not None:
            stub.responder = responder
        return SatelliteListClient(
            SITE_URL,
            StaticDigestProvider(digest),
            http=stub.http(),
            **kwargs,
        )

    return _make


@pytest.fixture(scope="session")
def live_settings() -> Settings:
    """
    Settings for live tests, read from the environment.
    """
    if os.getenv("RUN_INTEGRATION_TESTS", "0") != "1":
        pytest.skip("Integration tests require RUN_INTEGRATION_TESTS=1 and a SharePoint site")
    settings = Settings()
    if not settings.site_url:
        pytest.skip("SP_SITE_URL is not configured")
    return settings
