"""
Seed script for the satellite list.

Writes a JSON file of well-known satellites and optionally adds them to the
configured SharePoint list, one create request per satellite.
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import typer

from sp_satellites.batch import create_many
from sp_satellites.client import SatelliteListClient
from sp_satellites.config import get_settings
from sp_satellites.reporter import print_batch_results
from sp_satellites.utils.logging import configure_from_settings

app = typer.Typer(help="Generate sample satellites and load them into SharePoint.")

SAMPLE_SATELLITES: List[Dict[str, Any]] = [
    {
        "title": "ISS (ZARYA)",
        "norad_id": "25544",
        "cospar_id": "1998-067A",
        "mission_type": "Space Station",
        "status": "Operational",
        "orbit_type": "Low Earth Orbit",
        "launch_date": "1998-11-20",
        "sensor_names": "Cupola, Destiny Module, Columbus Module",
    },
    {
        "title": "Hubble Space Telescope",
        "norad_id": "20580",
        "cospar_id": "1990-037B",
        "mission_type": "Space Telescope",
        "status": "Operational",
        "launch_date": "1990-04-24",
    },
    {
        "title": "James Webb Space Telescope",
        "norad_id": "51463",
        "cospar_id": "2021-130A",
        "mission_type": "Space Telescope",
        "status": "Operational",
        "launch_date": "2021-12-25",
    },
    {
        "title": "Landsat 9",
        "norad_id": "49260",
        "cospar_id": "2021-088A",
        "mission_type": "Earth Observation",
        "status": "Operational",
        "launch_date": "2021-09-27",
    },
]


def _write_samples(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(SAMPLE_SATELLITES, f, indent=2)


async def _load(samples: List[Dict[str, Any]]) -> list:
    async with SatelliteListClient.from_settings() as client:
        return await create_many(client, samples)


@app.command()
def main(
    output: Path = typer.Option(
        Path("satellites.sample.json"),
        "--output",
        "-o",
        help="Where to write the sample JSON.",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only write the JSON file; skip adding to SharePoint.",
    ),
) -> None:
    """
    Write sample satellites and optionally add them to the list.
    """
    _write_samples(output)
    typer.echo(f"Wrote {len(SAMPLE_SATELLITES)} satellites -> {output}")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    settings = get_settings()
    configure_from_settings(settings)
    start = time.perf_counter()
    results = asyncio.run(_load(SAMPLE_SATELLITES))
    print_batch_results(results)
    typer.echo(f"Load completed in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
