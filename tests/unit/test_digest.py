from __future__ import annotations

import httpx
import pytest

from sp_satellites.config import Settings
from sp_satellites.digest import (
    PageDigestProvider,
    RequestDigestProvider,
    SettingsDigestProvider,
    StaticDigestProvider,
    fetch_context_digest,
)
from sp_satellites.errors import RemoteError, RequestDigestError, TransportError

from tests.conftest import SITE_URL, SharePointStub

PAGE = """
<html><body>
<form id="aspnetForm">
  <input type="hidden" name="__REQUESTDIGEST" id="__REQUESTDIGEST"
         value="0x1A2B,18 Oct 2026 12:00:00 -0000" />
</form>
</body></html>
"""


def test_providers_satisfy_protocol():
    assert isinstance(StaticDigestProvider("x"), RequestDigestProvider)
    assert isinstance(PageDigestProvider(PAGE), RequestDigestProvider)


def test_static_provider_rejects_empty_value():
    assert StaticDigestProvider("abc").get_digest() == "abc"
    with pytest.raises(RequestDigestError, match="Request digest not found"):
        StaticDigestProvider(None).get_digest()


def test_settings_provider_reads_value_at_call_time(test_settings: Settings):
    provider = SettingsDigestProvider(test_settings)
    assert provider.get_digest() == test_settings.request_digest

    empty = Settings(_env_file=None, request_digest=None)
    with pytest.raises(RequestDigestError):
        SettingsDigestProvider(empty).get_digest()


def test_page_provider_finds_hidden_input():
    assert PageDigestProvider(PAGE).get_digest() == "0x1A2B,18 Oct 2026 12:00:00 -0000"


def test_page_provider_fails_when_element_absent_and_recovers_after_update():
    provider = PageDigestProvider("<html><body><p>No form here</p></body></html>")

    with pytest.raises(RequestDigestError):
        provider.get_digest()

    provider.update_page(PAGE)
    assert provider.get_digest().startswith("0x1A2B")


@pytest.mark.asyncio
async def test_fetch_context_digest_reads_form_digest_value():
    stub = SharePointStub(lambda request: httpx.Response(200, json={"FormDigestValue": "0xFRESH"}))

    async with stub.http() as http:
        provider = await fetch_context_digest(http, SITE_URL + "/")

    assert provider.get_digest() == "0xFRESH"
    assert stub.last.method == "POST"
    assert stub.last.url.path == "/sites/space/_api/contextinfo"


@pytest.mark.asyncio
async def test_fetch_context_digest_supports_verbose_payload():
    payload = {"d": {"GetContextWebInformation": {"FormDigestValue": "0xVERBOSE"}}}
    stub = SharePointStub(lambda request: httpx.Response(200, json=payload))

    async with stub.http() as http:
        provider = await fetch_context_digest(http, SITE_URL)

    assert provider.get_digest() == "0xVERBOSE"


@pytest.mark.asyncio
async def test_fetch_context_digest_raises_remote_error_on_denied():
    stub = SharePointStub(lambda request: httpx.Response(403))

    async with stub.http() as http:
        with pytest.raises(RemoteError, match="Forbidden"):
            await fetch_context_digest(http, SITE_URL)


@pytest.mark.asyncio
async def test_fetch_context_digest_wraps_timeouts():
    def time_out(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with SharePointStub(time_out).http() as http:
        with pytest.raises(TransportError, match="Failed to fetch request digest: timed out"):
            await fetch_context_digest(http, SITE_URL)
