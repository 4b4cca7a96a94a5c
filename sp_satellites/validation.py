"""
Field validation rules for satellite input.

`validate_satellite_data` applies the form rules in a fixed order and stops at
the first violation. `require_fields` is the lighter check the client runs
before a create request.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Union

from sp_satellites.domain.models import REQUIRED_FIELDS, SatelliteDraft
from sp_satellites.errors import ValidationError

NORAD_ID_PATTERN = re.compile(r"^\d+$", re.ASCII)
COSPAR_ID_PATTERN = re.compile(r"^\d{4}-\d{3,4}[A-Z]?$", re.ASCII)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)

_REQUIRED_MESSAGES = {
    "title": "Satellite Name is required",
    "norad_id": "NORAD ID is required",
    "cospar_id": "COSPAR ID is required",
}

DraftLike = Union[SatelliteDraft, Mapping[str, Any]]


def _as_draft(data: DraftLike) -> SatelliteDraft:
    if isinstance(data, SatelliteDraft):
        return data
    return SatelliteDraft.model_validate(dict(data))


def is_valid_date(value: str) -> bool:
    """True when `value` is a YYYY-MM-DD string naming a real calendar day."""
    if not DATE_PATTERN.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def require_fields(data: DraftLike) -> SatelliteDraft:
    """
    Ensure title, NORAD ID and COSPAR ID are present.

    Returns the draft so callers can reuse the parsed model.
    """
    draft = _as_draft(data)
    missing = draft.missing_required()
    if missing:
        raise ValidationError(
            f"Required fields missing: {', '.join(missing)}",
            field=missing[0],
        )
    return draft


def validate_satellite_data(data: DraftLike) -> SatelliteDraft:
    """
    Apply the full rule set; raise ValidationError on the first violation.
    """
    draft = _as_draft(data)

    for name in REQUIRED_FIELDS:
        if not getattr(draft, name):
            raise ValidationError(_REQUIRED_MESSAGES[name], field=name)

    if not NORAD_ID_PATTERN.fullmatch(draft.norad_id):
        raise ValidationError("NORAD ID must be numeric", field="norad_id")

    if not COSPAR_ID_PATTERN.fullmatch(draft.cospar_id):
        raise ValidationError(
            "COSPAR ID format should be YYYY-XXX (e.g., 1998-067A)", field="cospar_id"
        )

    if draft.launch_date and not is_valid_date(draft.launch_date):
        raise ValidationError("Launch Date must be in YYYY-MM-DD format", field="launch_date")

    return draft


__all__ = [
    "COSPAR_ID_PATTERN",
    "DATE_PATTERN",
    "NORAD_ID_PATTERN",
    "is_valid_date",
    "require_fields",
    "validate_satellite_data",
]
