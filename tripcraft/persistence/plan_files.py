"""Saved plan documents - encode to and decode from JSON files.

Loading accepts documents written by older versions: a day whose travelInfo is
a bare object is migrated to a one-element list (see DayPlan), activities
without identifiers are stamped, and missing request context gets defaults.
"""

import json
import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tripcraft.models.common import ItineraryStyle
from tripcraft.models.destination import DestinationSuggestion
from tripcraft.models.plan import TravelPlan
from tripcraft.models.saved import SavedPlan
from tripcraft.planning.identity import stamp_ids

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid itinerary file format."


class PlanFileError(ValueError):
    """Saved plan document is unreadable or malformed."""

    pass


def plan_filename(name: str) -> str:
    """File name for a saved plan's display name."""
    sanitized = re.sub(r"[^a-z0-9\s-]", "", name, flags=re.IGNORECASE)
    sanitized = re.sub(r"\s+", "_", sanitized).lower()
    return f"{sanitized or 'itinerary'}.json"


def new_saved_plan(
    name: str,
    plan: TravelPlan,
    destination: DestinationSuggestion,
    time_of_year: str = "",
    itinerary_style: ItineraryStyle = ItineraryStyle.mixed,
    additional_notes: str = "",
) -> SavedPlan:
    """Wrap a plan and its request context in a new saved document."""
    return SavedPlan(
        id=str(uuid.uuid4()),
        name=name,
        plan=plan.model_copy(deep=True),
        destination=destination,
        saved_at=datetime.now(timezone.utc),
        time_of_year=time_of_year,
        itinerary_style=itinerary_style,
        additional_notes=additional_notes,
    )


def dump_saved_plan(saved: SavedPlan) -> str:
    """Serialize a saved plan as indented JSON with camelCase keys."""
    return saved.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def load_saved_plan(text: str) -> SavedPlan:
    """Parse and migrate a saved plan document.

    Raises:
        PlanFileError: If the text is not JSON or lacks a plan, itinerary or destination
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlanFileError("Failed to read or parse the file.") from e
    return saved_plan_from_document(doc)


def saved_plan_from_document(doc: Any) -> SavedPlan:
    """Validate and migrate an already-decoded saved plan document."""
    if not isinstance(doc, dict):
        raise PlanFileError(INVALID_FORMAT_MESSAGE)
    doc = dict(doc)
    plan = doc.get("plan")
    if (
        not isinstance(plan, dict)
        or not isinstance(plan.get("itinerary"), list)
        or not doc.get("destination")
    ):
        raise PlanFileError(INVALID_FORMAT_MESSAGE)

    doc.setdefault("id", str(uuid.uuid4()))
    doc.setdefault("name", "")
    doc.setdefault("savedAt", datetime.now(timezone.utc).isoformat())
    for key in ("timeOfYear", "additionalNotes"):
        if doc.get(key) is None:
            doc[key] = ""
    if not doc.get("itineraryStyle"):
        doc["itineraryStyle"] = ItineraryStyle.mixed.value

    try:
        saved = SavedPlan.model_validate(doc)
    except ValidationError as e:
        logger.warning(f"Rejected saved plan: {e}")
        raise PlanFileError(INVALID_FORMAT_MESSAGE) from e

    saved.plan = stamp_ids(saved.plan)
    return saved


def save_plan_file(saved: SavedPlan, directory: Path) -> Path:
    """Write a saved plan into directory, named after its display name."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / plan_filename(saved.name)
    path.write_text(dump_saved_plan(saved), encoding="utf-8")
    logger.info(f"Saved plan {saved.id} to {path}")
    return path


def read_plan_file(path: Path) -> SavedPlan:
    """Read and migrate a saved plan file.

    Raises:
        PlanFileError: If the file cannot be read or is malformed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PlanFileError("Failed to read the file.") from e
    return load_saved_plan(text)
