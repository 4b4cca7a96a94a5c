"""
Form adapter for the "Add New Satellite" dialog.

Binds submitted form values to satellite fields through an explicit mapping,
validates them, and creates the item through a SatelliteListClient. Anything
the host page does afterwards (closing a modal, refreshing a list view) is
reached through HostHooks, whose default implementation does nothing.

The adapter never swallows a validation or remote error: the caller receives
the same exception and its message.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from sp_satellites.client import SatelliteListClient
from sp_satellites.domain.models import DEFAULT_STATUS, SatelliteRecord
from sp_satellites.utils.logging import get_logger
from sp_satellites.validation import validate_satellite_data

log = get_logger(__name__)

# Logical field -> form input names, in lookup order.
FORM_FIELD_MAP: Dict[str, Tuple[str, ...]] = {
    "title": ("Satellite Name", "Title"),
    "norad_id": ("NORAD ID", "NORAD_ID"),
    "cospar_id": ("COSPAR ID", "COSPAR_ID"),
    "mission_type": ("Mission Type", "Mission_Type"),
    "status": ("Status",),
    "orbit_type": ("Orbit Type", "Orbit_Type"),
    "launch_date": ("Launch Date", "Launch_Date"),
    "sensor_names": ("Sensor Names", "Sensor_Names"),
}


class HostHooks(Protocol):
    """Side effects requested from the hosting page after a successful submit."""

    def close_dialog(self) -> None: ...

    def refresh_list(self) -> None: ...


class NullHostHooks:
    """Hooks for hosts without a dialog or list view."""

    def close_dialog(self) -> None:
        return None

    def refresh_list(self) -> None:
        return None


def _first_value(form: Mapping[str, Any], names: Tuple[str, ...]) -> str:
    for name in names:
        if name in form and form[name] is not None:
            return str(form[name]).strip()
    return ""


def collect_form_data(
    form: Mapping[str, Any],
    field_map: Mapping[str, Tuple[str, ...]] = FORM_FIELD_MAP,
) -> Dict[str, str]:
    """
    Read satellite fields out of submitted form values.

    Values are trimmed; absent inputs become empty strings and an empty
    status becomes "Operational".
    """
    data = {field: _first_value(form, names) for field, names in field_map.items()}
    if not data.get("status"):
        data["status"] = DEFAULT_STATUS
    return data


class FormAdapter:
    """
    Collect, validate and submit one form.

    Parameters
    ----------
    client : SatelliteListClient
        Client used to create the item.
    hooks : HostHooks | None
        Host callbacks run after a successful create.
    field_map : Mapping[str, tuple[str, ...]]
        Logical field to form input names.
    """

    def __init__(
        self,
        client: SatelliteListClient,
        hooks: Optional[HostHooks] = None,
        field_map: Mapping[str, Tuple[str, ...]] = FORM_FIELD_MAP,
    ) -> None:
        self.client = client
        self.hooks = hooks or NullHostHooks()
        self.field_map = field_map

    async def submit(self, form: Mapping[str, Any]) -> SatelliteRecord:
        """
        Create a satellite from form values.

        Raises
        ------
        ValidationError
            If a field is missing or malformed; nothing is sent.
        RemoteError
            If SharePoint rejects the create request.
        """
        log.info("[FORM] Submission started")
        data = collect_form_data(form, self.field_map)
        draft = validate_satellite_data(data)
        log.info("[FORM] Validation passed", extra={"norad_id": draft.norad_id})

        created = await self.client.create(draft)
        log.info(
            f'[FORM] Satellite "{draft.title}" has been added successfully',
            extra={"identifier": created.identifier},
        )
        self._run_hook("close_dialog")
        self._run_hook("refresh_list")
        return created

    def _run_hook(self, name: str) -> None:
        try:
            getattr(self.hooks, name)()
        except Exception:  # noqa: BLE001 - hooks are fire-and-forget
            log.warning(f"[FORM] Host hook {name} failed", exc_info=True)


__all__ = [
    "FORM_FIELD_MAP",
    "FormAdapter",
    "HostHooks",
    "NullHostHooks",
    "collect_form_data",
]
