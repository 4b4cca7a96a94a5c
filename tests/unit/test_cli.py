from __future__ import annotations

import json
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from sp_satellites import main as cli

from tests.conftest import SharePointStub

runner = CliRunner()


@pytest.fixture
def cli_stub(monkeypatch, test_settings) -> SharePointStub:
    stub = SharePointStub()
    quiet = test_settings.model_copy(update={"log_level": "WARNING"})
    monkeypatch.setattr(cli, "get_settings", lambda: quiet)

    @asynccontextmanager
    async def stub_client(settings):
        http = stub.http()
        try:
            yield http
        finally:
            await http.aclose()

    monkeypatch.setattr(cli, "async_client", stub_client)
    return stub


def test_info_shows_configuration(cli_stub):
    result = runner.invoke(cli.app, ["info"])

    assert result.exit_code == 0
    assert "list=Satellite_Fixed" in result.output
    assert "digest=set" in result.output


def test_list_json_output(cli_stub):
    cli_stub.responder = lambda request: httpx.Response(
        200, json={"value": [{"Id": 1, "Title": "ISS (ZARYA)", "NORAD_ID": "25544"}]}
    )

    result = runner.invoke(cli.app, ["list", "--top", "5", "--json"])

    assert result.exit_code == 0, result.output
    assert cli_stub.last.url.params["$top"] == "5"
    rows = json.loads(result.output)
    assert rows[0]["identifier"] == 1
    assert rows[0]["norad_id"] == "25544"


def test_add_validates_before_sending(cli_stub):
    result = runner.invoke(
        cli.app, ["add", "--title", "ISS", "--norad-id", "25544", "--cospar-id", "98-067A"]
    )

    assert result.exit_code == 1
    assert "COSPAR ID format" in result.output
    assert cli_stub.requests == []


def test_add_creates_item(cli_stub):
    cli_stub.responder = lambda request: httpx.Response(
        201, json={**json.loads(request.content), "Id": 12}
    )

    result = runner.invoke(
        cli.app,
        ["add", "--title", "ISS (ZARYA)", "--norad-id", "25544", "--cospar-id", "1998-067A"],
    )

    assert result.exit_code == 0, result.output
    assert "ID: 12" in result.output
    assert cli_stub.json_body()["Status"] == "Operational"


def test_update_parses_assignments(cli_stub):
    cli_stub.responder = lambda request: httpx.Response(204)

    result = runner.invoke(cli.app, ["update", "4", "--set", "Status=Under Maintenance"])

    assert result.exit_code == 0, result.output
    assert cli_stub.json_body() == {"Status": "Under Maintenance"}
    assert cli_stub.last.headers["If-Match"] == "*"


def test_update_rejects_malformed_assignment(cli_stub):
    result = runner.invoke(cli.app, ["update", "4", "--set", "Status"])

    assert result.exit_code != 0
    assert cli_stub.requests == []


def test_delete_remote_error_exits_with_message(cli_stub):
    cli_stub.responder = lambda request: httpx.Response(404)

    result = runner.invoke(cli.app, ["delete", "9", "--yes"])

    assert result.exit_code == 1
    assert "Not Found" in result.output


def test_delete_can_be_cancelled(cli_stub):
    result = runner.invoke(cli.app, ["delete", "9"], input="n\n")

    assert result.exit_code == 0
    assert "cancelled" in result.output
    assert cli_stub.requests == []


def test_search_norad_uses_equality_filter(cli_stub):
    cli_stub.responder = lambda request: httpx.Response(200, json={"value": []})

    result = runner.invoke(cli.app, ["search-norad", "25544"])

    assert result.exit_code == 0, result.output
    assert cli_stub.last.url.params["$filter"] == "NORAD_ID eq '25544'"


def test_import_persists_and_reports_failures(cli_stub, tmp_path: Path):
    source = tmp_path / "sats.json"
    source.write_text(
        json.dumps(
            [
                {"title": "Landsat 9", "norad_id": "49260", "cospar_id": "2021-088A"},
                {"title": "Broken"},
            ]
        ),
        encoding="utf-8",
    )
    cli_stub.responder = lambda request: httpx.Response(
        201, json={**json.loads(request.content), "Id": 3}
    )

    result = runner.invoke(
        cli.app, ["import", str(source), "--results-dir", str(tmp_path / "out")]
    )

    assert result.exit_code == 1
    assert len(cli_stub.requests) == 1
    latest = json.loads((tmp_path / "out" / "latest.json").read_text(encoding="utf-8"))
    assert latest["succeeded"] == 1
    assert latest["total"] == 2


def test_list_rejects_zero_top(cli_stub):
    result = runner.invoke(cli.app, ["list", "--top", "0"])

    assert result.exit_code == 1
    assert "top must be a positive integer" in result.output
    assert cli_stub.requests == []


def test_unreachable_site_exits_with_message(cli_stub):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    cli_stub.responder = refuse

    result = runner.invoke(cli.app, ["search-norad", "25544"])

    assert result.exit_code == 1
    assert "Error: Failed to fetch satellites: connection refused" in result.output


@pytest.mark.parametrize(
    "content",
    [None, "{not json", json.dumps("ISS"), json.dumps([42])],
    ids=["missing", "bad-json", "not-a-list", "bad-item"],
)
def test_import_reports_unreadable_file(cli_stub, tmp_path: Path, content):
    source = tmp_path / "sats.json"
    if content is not None:
        source.write_text(content, encoding="utf-8")

    result = runner.invoke(cli.app, ["import", str(source), "--no-persist"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert cli_stub.requests == []
