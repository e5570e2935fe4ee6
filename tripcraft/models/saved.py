"""Saved plan document - the load/save file format."""

from datetime import datetime

from pydantic import Field

from tripcraft.models.common import ItineraryStyle, WireModel
from tripcraft.models.destination import DestinationSuggestion
from tripcraft.models.plan import TravelPlan


class SavedPlan(WireModel):
    """A plan together with the request context it was generated from."""

    id: str
    name: str
    plan: TravelPlan
    destination: DestinationSuggestion
    saved_at: datetime
    time_of_year: str = ""
    itinerary_style: ItineraryStyle = ItineraryStyle.mixed
    additional_notes: str = ""
