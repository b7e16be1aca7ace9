from __future__ import annotations

import math
from typing import Any

from waste_api.models.schemas import BinUpdate


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid fill level
    return isinstance(value, int) and not isinstance(value, bool)


def parse_new_bins(payload: Any) -> tuple[list[str], str | None]:
    """Accept a single `{location}` object or an array of them.

    Every element is checked before anything is returned, so a bad element
    anywhere in the array rejects the whole request.
    """
    if payload is None:
        return [], "Request body must be a bin object or an array of bin objects"

    items = payload if isinstance(payload, list) else [payload]
    locations: list[str] = []
    for item in items:
        location = item.get("location") if isinstance(item, dict) else None
        if not isinstance(location, str):
            return [], "Each bin must have a location string"
        if not location:
            return [], "Bin location must not be empty"
        locations.append(location)
    return locations, None


def parse_bin_update(payload: Any) -> tuple[BinUpdate | None, str | None]:
    """Pick out the recognised fields of a partial update.

    Only a non-object body is an error. Fields of the wrong type are skipped,
    so the update still goes through and refreshes the timestamp.
    """
    if not isinstance(payload, dict):
        return None, "Request body must be a JSON object"

    changes = BinUpdate()

    location = payload.get("location")
    if isinstance(location, str) and location:
        changes.location = location

    fill_level = payload.get("fillLevel")
    if isinstance(fill_level, float) and math.isfinite(fill_level):
        fill_level = int(fill_level)
    if _is_int(fill_level):
        changes.fill_level = fill_level

    flag = payload.get("needsCollection")
    if isinstance(flag, bool):
        changes.needs_collection = flag

    return changes, None
