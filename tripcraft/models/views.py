"""Response models returned by the sessions API."""

from pydantic import Field

from tripcraft.models.common import ItineraryStyle, WireModel
from tripcraft.models.destination import DestinationSuggestion
from tripcraft.models.plan import TravelPlan


class SessionView(WireModel):
    """Snapshot of a plan session."""

    session_id: str
    state: str
    modified: bool
    can_rebuild: bool
    error: str | None = None
    suggestions: list[DestinationSuggestion] = Field(default_factory=list)
    destination: DestinationSuggestion | None = None
    style: ItineraryStyle = ItineraryStyle.mixed
    plan: TravelPlan | None = None
    city_sequence: list[str] = Field(default_factory=list)
    cities_marked: list[int] = Field(default_factory=list)
    deleted_activities: list[str] = Field(default_factory=list)
