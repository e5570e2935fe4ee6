"""Request bodies accepted by the sessions API."""

from pydantic import BaseModel, Field

from tripcraft.models.common import ItineraryStyle
from tripcraft.models.destination import DestinationSuggestion
from tripcraft.models.plan import PackingListCategory


class SuggestionsRequest(BaseModel):
    """Destination suggestion request; a non-blank `country` triggers a direct lookup."""

    budget: str
    season: str
    continent: str
    country: str = ""


class SelectDestinationRequest(BaseModel):
    """Pick one of the suggested destinations."""

    destination: DestinationSuggestion


class GeneratePlanRequest(BaseModel):
    """Generate a plan; `duration` of 0 lets the oracle choose."""

    duration: int = Field(..., ge=0, le=30)
    style: ItineraryStyle = ItineraryStyle.mixed
    notes: str = ""


class ReorderRequest(BaseModel):
    """New order of activity identifiers for one day."""

    activity_ids: list[str]


class DayNoteRequest(BaseModel):
    """User note for one day."""

    text: str


class RebuildRequest(BaseModel):
    """Free-text refinement notes."""

    notes: str = ""


class PackingListRequest(BaseModel):
    """Replacement packing list."""

    categories: list[PackingListCategory]


class PackingItemRequest(BaseModel):
    """Item to add under a category."""

    category: str
    item: str = Field(..., min_length=1)


class ExportRequest(BaseModel):
    """Display name for a saved plan."""

    name: str = ""
