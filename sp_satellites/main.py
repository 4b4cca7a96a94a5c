from __future__ import annotations

import asyncio
import json
import sys
from typing import Awaitable, Callable, Dict, List, Optional, TypeVar

import typer

from sp_satellites.batch import create_many, load_drafts, persist_results
from sp_satellites.client import SatelliteListClient
from sp_satellites.config import Settings, get_settings
from sp_satellites.digest import RequestDigestProvider, fetch_context_digest
from sp_satellites.errors import SatelliteClientError
from sp_satellites.infrastructure.http_factory import async_client
from sp_satellites.reporter import print_batch_results, print_records
from sp_satellites.utils.logging import configure_from_settings
from sp_satellites.validation import validate_satellite_data

app = typer.Typer(help="SharePoint satellite list client CLI.")

T = TypeVar("T")

_FETCH_DIGEST_OPTION = typer.Option(
    False,
    "--fetch-digest",
    help="Request a fresh digest from /_api/contextinfo instead of SP_REQUEST_DIGEST.",
)


async def _with_client(
    settings: Settings,
    fetch_digest: bool,
    action: Callable[[SatelliteListClient], Awaitable[T]],
) -> T:
    async with async_client(settings) as http:
        provider: Optional[RequestDigestProvider] = None
        if fetch_digest:
            provider = await fetch_context_digest(http, settings.site_url)
        client = SatelliteListClient.from_settings(settings, digest_provider=provider, http=http)
        return await action(client)


def _run(action: Callable[[SatelliteListClient], Awaitable[T]], fetch_digest: bool = False) -> T:
    """
    Configure logging, run one client action and map package errors to exit code 1.
    """
    settings = get_settings()
    configure_from_settings(settings)
    if not settings.site_url:
        typer.echo("SP_SITE_URL is not configured.", err=True)
        raise typer.Exit(code=2)
    try:
        return asyncio.run(_with_client(settings, fetch_digest, action))
    except SatelliteClientError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _parse_assignments(assignments: List[str]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected Field=Value, got '{item}'", param_hint="--set")
        fields[name.strip()] = value
    return fields


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    digest = "set" if settings.request_digest else "not set"
    token = "set" if settings.access_token else "not set"
    typer.echo(
        f"site={settings.site_url or '<unset>'} | list={settings.list_name} | "
        f"top={settings.default_top} timeout={settings.http_timeout_seconds}s | "
        f"digest={digest} token={token}"
    )


@app.command("list")
def list_satellites(
    top: Optional[int] = typer.Option(None, "--top", "-n", help="Maximum number of items."),
    filter: Optional[str] = typer.Option(None, "--filter", "-f", help="OData filter expression."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """
    List satellites (first page only).
    """
    records = _run(lambda client: client.list(top=top, filter=filter))
    if as_json:
        typer.echo(json.dumps([r.to_logical() for r in records], indent=2))
    else:
        print_records(records)


@app.command()
def get(identifier: int = typer.Argument(..., help="SharePoint item id.")) -> None:
    """
    Show one satellite.
    """
    record = _run(lambda client: client.get_by_id(identifier))
    typer.echo(json.dumps(record.to_logical(), indent=2))


@app.command()
def add(
    title: str = typer.Option(..., "--title", help="Satellite name."),
    norad_id: str = typer.Option(..., "--norad-id", help="NORAD catalog number."),
    cospar_id: str = typer.Option(..., "--cospar-id", help="COSPAR ID, e.g. 1998-067A."),
    mission_type: str = typer.Option("", "--mission-type"),
    status: str = typer.Option("", "--status", help="Defaults to Operational."),
    orbit_type: str = typer.Option("", "--orbit-type"),
    launch_date: str = typer.Option("", "--launch-date", help="YYYY-MM-DD."),
    sensor_names: str = typer.Option("", "--sensor-names", help="Comma-separated."),
    fetch_digest: bool = _FETCH_DIGEST_OPTION,
) -> None:
    """
    Validate and add a satellite.
    """
    try:
        draft = validate_satellite_data(
            {
                "title": title.strip(),
                "norad_id": norad_id.strip(),
                "cospar_id": cospar_id.strip(),
                "mission_type": mission_type.strip(),
                "status": status.strip(),
                "orbit_type": orbit_type.strip(),
                "launch_date": launch_date.strip(),
                "sensor_names": sensor_names.strip(),
            }
        )
    except SatelliteClientError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    created = _run(lambda client: client.create(draft), fetch_digest=fetch_digest)
    typer.echo(f"Satellite added successfully! ID: {created.identifier}")


@app.command()
def update(
    identifier: int = typer.Argument(..., help="SharePoint item id."),
    assignments: List[str] = typer.Option(
        ..., "--set", "-s", help="Column assignment, e.g. --set Status='Under Maintenance'."
    ),
    fetch_digest: bool = _FETCH_DIGEST_OPTION,
) -> None:
    """
    Overwrite columns of one satellite (internal column names).
    """
    fields = _parse_assignments(assignments)
    _run(lambda client: client.update(identifier, fields), fetch_digest=fetch_digest)
    typer.echo(f"Satellite {identifier} updated successfully.")


@app.command()
def delete(
    identifier: int = typer.Argument(..., help="SharePoint item id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    fetch_digest: bool = _FETCH_DIGEST_OPTION,
) -> None:
    """
    Delete one satellite.
    """
    if not yes and not typer.confirm(f"Delete satellite {identifier}?"):
        typer.echo("Deletion cancelled.")
        return
    _run(lambda client: client.delete(identifier), fetch_digest=fetch_digest)
    typer.echo(f"Satellite {identifier} deleted successfully.")


@app.command("search-norad")
def search_norad(norad_id: str = typer.Argument(..., help="NORAD catalog number.")) -> None:
    """
    Find satellites by NORAD ID.
    """
    records = _run(lambda client: client.search_by_catalog_id(norad_id))
    print_records(records, title=f"NORAD ID {norad_id}")


@app.command("search-title")
def search_title(text: str = typer.Argument(..., help="Part of the satellite name.")) -> None:
    """
    Find satellites whose title contains TEXT.
    """
    records = _run(lambda client: client.search_by_title(text))
    print_records(records, title=f"Title contains '{text}'")


@app.command("import")
def import_satellites(
    path: str = typer.Argument(..., help="JSON file with a list of satellites."),
    results_dir: str = typer.Option("results", "--results-dir", help="Where to save outcomes."),
    persist: bool = typer.Option(True, "--persist/--no-persist", help="Save outcomes as JSON."),
    fetch_digest: bool = _FETCH_DIGEST_OPTION,
) -> None:
    """
    Add every satellite in a JSON file, one request per item.
    """
    try:
        drafts = load_drafts(path)
    except (OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    results = _run(lambda client: create_many(client, drafts), fetch_digest=fetch_digest)
    print_batch_results(results)
    if persist:
        persist_results(results, results_dir)
    if not all(r["success"] for r in results):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
