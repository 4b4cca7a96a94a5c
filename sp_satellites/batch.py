"""
Batch creation of satellites and persistence of the per-item outcome.

Usage (example from CLI):
    from sp_satellites.batch import create_many

    results = await create_many(client, drafts)

Each draft is created with its own independent request; a failure is recorded
against that item and the loop moves on. Items created before a failure stay
created. Outcomes can be saved under `results/`:
- `results/latest.json` (last import)
- `results/import-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, TypedDict, Union

from sp_satellites.client import SatelliteListClient
from sp_satellites.domain.models import SatelliteDraft
from sp_satellites.errors import SatelliteClientError
from sp_satellites.utils.logging import get_logger

log = get_logger(__name__)


class BatchItemResult(TypedDict, total=False):
    """
    Outcome of one create within a batch.
    """

    success: bool
    satellite: str
    id: Optional[int]
    error: Optional[str]


def load_drafts(path: Path | str) -> List[SatelliteDraft]:
    """
    Read drafts from a JSON file holding a list of objects (or `{"satellites": [...]}`).
    """
    with Path(path).open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("satellites", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of satellite objects")
    return [SatelliteDraft.model_validate(item) for item in payload]


async def create_many(
    client: SatelliteListClient,
    drafts: Iterable[Union[SatelliteDraft, Mapping[str, Any]]],
) -> List[BatchItemResult]:
    """
    Create each draft in order and record success or failure per item.

    Only package errors (validation, remote, digest) are recorded; transport
    failures propagate.
    """
    results: List[BatchItemResult] = []
    for index, item in enumerate(drafts, start=1):
        draft = item if isinstance(item, SatelliteDraft) else SatelliteDraft.model_validate(dict(item))
        log.info(f"[BATCH {index}] Adding {draft.title}...", extra={"norad_id": draft.norad_id})
        try:
            created = await client.create(draft)
        except SatelliteClientError as exc:
            log.warning(f"[BATCH {index}] Failed {draft.title}", extra={"error": str(exc)})
            results.append(
                BatchItemResult(success=False, satellite=draft.title, id=None, error=str(exc))
            )
            continue
        results.append(
            BatchItemResult(success=True, satellite=draft.title, id=created.identifier, error=None)
        )

    succeeded = sum(1 for r in results if r["success"])
    log.info(
        f"[BATCH COMPLETE] {succeeded}/{len(results)} satellite(s) added",
        extra={"succeeded": succeeded, "failed": len(results) - succeeded},
    )
    return results


def persist_results(results: List[BatchItemResult], results_dir: Path | str = "results") -> Path:
    """Write the batch outcome to `latest.json` plus a timestamped archive."""
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"import-{timestamp}.json"

    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total": len(results),
        "succeeded": sum(1 for r in results if r.get("success")),
        "results": results,
    }
    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return latest_path


__all__ = ["BatchItemResult", "create_many", "load_drafts", "persist_results"]
