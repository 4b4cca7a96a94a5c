from __future__ import annotations

from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from sp_satellites.batch import BatchItemResult
from sp_satellites.domain.models import SatelliteRecord


def _cell(value: Optional[object]) -> str:
    return "" if value is None else str(value)


def print_records(
    records: Sequence[SatelliteRecord],
    title: str = "Satellites",
    console: Optional[Console] = None,
) -> None:
    """
    Render satellite records as a rich table, in server order.
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No satellites found.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, caption=f"{len(records)} item(s)")
    table.add_column("ID", justify="right", style="magenta", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("NORAD ID", justify="right")
    table.add_column("COSPAR ID")
    table.add_column("Mission Type")
    table.add_column("Status", style="green")
    table.add_column("Orbit Type")
    table.add_column("Launch Date")

    for rec in records:
        table.add_row(
            _cell(rec.identifier),
            _cell(rec.title),
            _cell(rec.norad_id),
            _cell(rec.cospar_id),
            _cell(rec.mission_type),
            _cell(rec.status),
            _cell(rec.orbit_type),
            _cell(rec.launch_date),
        )

    console.print(table)


def print_batch_results(
    results: List[BatchItemResult], console: Optional[Console] = None
) -> None:
    """
    Render per-item batch outcomes, failures last.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]Nothing to import.[/yellow]")
        return

    succeeded = sum(1 for r in results if r.get("success"))
    table = Table(
        title="Satellite Import",
        box=box.ROUNDED,
        caption=f"{succeeded}/{len(results)} added",
    )
    table.add_column("Satellite", style="cyan")
    table.add_column("Result", no_wrap=True)
    table.add_column("ID", justify="right", style="magenta")
    table.add_column("Error", style="red")

    for res in sorted(results, key=lambda r: not r.get("success")):
        outcome = "[green]added[/green]" if res.get("success") else "[red]failed[/red]"
        table.add_row(
            _cell(res.get("satellite")), outcome, _cell(res.get("id")), _cell(res.get("error"))
        )

    console.print(table)
