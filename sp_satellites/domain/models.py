"""
Domain models for the satellite list.

Defines the logical-to-physical column mapping of the `Satellite_Fixed` list,
the draft submitted on creation and the record shape returned by SharePoint.
Drafts accept logical snake_case names, camelCase names and the list's own
column names so that form data, JSON files and raw rows all load the same way.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

DEFAULT_STATUS = "Operational"

# Logical attribute -> SharePoint internal column name.
FIELD_MAP: Dict[str, str] = {
    "title": "Title",
    "norad_id": "NORAD_ID",
    "cospar_id": "COSPAR_ID",
    "mission_type": "Mission_Type",
    "status": "Status",
    "orbit_type": "Orbit_Type",
    "launch_date": "Launch_Date",
    "sensor_names": "Sensor_Names",
}

REQUIRED_FIELDS = ("title", "norad_id", "cospar_id")


def _aliases(name: str, camel: str) -> AliasChoices:
    return AliasChoices(name, camel, FIELD_MAP[name])


class SatelliteDraft(BaseModel):
    """
    Input for creating a satellite. The server assigns the identifier.
    """

    title: str = Field("", validation_alias=_aliases("title", "title"))
    norad_id: str = Field("", validation_alias=_aliases("norad_id", "noradId"))
    cospar_id: str = Field("", validation_alias=_aliases("cospar_id", "cosparId"))
    mission_type: Optional[str] = Field(None, validation_alias=_aliases("mission_type", "missionType"))
    status: Optional[str] = Field(None, validation_alias=_aliases("status", "status"))
    orbit_type: Optional[str] = Field(None, validation_alias=_aliases("orbit_type", "orbitType"))
    launch_date: Optional[str] = Field(None, validation_alias=_aliases("launch_date", "launchDate"))
    sensor_names: Optional[str] = Field(None, validation_alias=_aliases("sensor_names", "sensorNames"))

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("title", "norad_id", "cospar_id", mode="before")
    @classmethod
    def _required_as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator(
        "mission_type", "status", "orbit_type", "launch_date", "sensor_names", mode="before"
    )
    @classmethod
    def _optional_as_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    def missing_required(self) -> List[str]:
        """Return the required logical fields that are empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def to_payload(self) -> Dict[str, Any]:
        """
        Build the JSON body for a create request, applying column defaults.
        """
        return {
            "Title": self.title,
            "NORAD_ID": self.norad_id,
            "COSPAR_ID": self.cospar_id,
            "Mission_Type": self.mission_type or "",
            "Status": self.status or DEFAULT_STATUS,
            "Orbit_Type": self.orbit_type or "",
            "Launch_Date": self.launch_date or None,
            "Sensor_Names": self.sensor_names or "",
        }


class SatelliteRecord(BaseModel):
    """
    A list item as returned by SharePoint.

    Columns outside the satellite schema (Created, Modified, odata metadata)
    are kept as model extras.
    """

    identifier: Optional[int] = Field(
        None, validation_alias=AliasChoices("Id", "ID", "identifier")
    )
    title: Optional[str] = Field(None, validation_alias=AliasChoices("Title", "title"))
    norad_id: Optional[str] = Field(None, validation_alias=AliasChoices("NORAD_ID", "norad_id"))
    cospar_id: Optional[str] = Field(None, validation_alias=AliasChoices("COSPAR_ID", "cospar_id"))
    mission_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("Mission_Type", "mission_type")
    )
    status: Optional[str] = Field(None, validation_alias=AliasChoices("Status", "status"))
    orbit_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("Orbit_Type", "orbit_type")
    )
    launch_date: Optional[str] = Field(
        None, validation_alias=AliasChoices("Launch_Date", "launch_date")
    )
    sensor_names: Optional[str] = Field(
        None, validation_alias=AliasChoices("Sensor_Names", "sensor_names")
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "allow",
        "coerce_numbers_to_str": True,
    }

    def to_logical(self) -> Dict[str, Any]:
        """Return the satellite columns under their logical names."""
        data: Dict[str, Any] = {"identifier": self.identifier}
        for name in FIELD_MAP:
            data[name] = getattr(self, name)
        return data


__all__ = [
    "DEFAULT_STATUS",
    "FIELD_MAP",
    "REQUIRED_FIELDS",
    "SatelliteDraft",
    "SatelliteRecord",
]
