"""Plan models - the itinerary produced by the oracle and edited by the user."""

from typing import Any

from pydantic import Field, field_validator

from tripcraft.models.common import ActivityType, CostBreakdown, Link, TipKind, WireModel


class Activity(WireModel):
    """Single activity (a place to visit) within a day.

    `id` is assigned locally after every oracle round-trip; the oracle never
    supplies a reliable one.
    """

    id: str | None = None
    name: str
    description: str
    city: str
    type: ActivityType
    links: list[Link] = Field(default_factory=list)
    average_cost: float = 0.0
    cost_breakdown: CostBreakdown = Field(default_factory=CostBreakdown)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    duration: str | None = None
    visiting_tip: str | None = None


class TransportOption(WireModel):
    """One way of covering a travel leg."""

    mode: str
    duration: str
    cost: float
    description: str | None = None


class TravelLeg(WireModel):
    """Inter-city travel leg with its transport options."""

    from_city: str
    to_city: str
    options: list[TransportOption] = Field(default_factory=list)


class KeepInMindItem(WireModel):
    """Advisory tip for a day."""

    type: TipKind
    tip: str


class DayPlan(WireModel):
    """Plan for a single day."""

    day: int = Field(..., ge=1)
    title: str
    activities: list[Activity]
    keep_in_mind: list[KeepInMindItem] = Field(default_factory=list)
    travel_info: list[TravelLeg] | None = None
    user_notes: str | None = None
    weather_forecast: str | None = None

    @field_validator("travel_info", mode="before")
    @classmethod
    def wrap_single_leg(cls, v: Any) -> Any:
        """Older plan files stored a single leg as a bare object."""
        if isinstance(v, dict):
            return [v]
        return v

    @field_validator("travel_info")
    @classmethod
    def validate_leg_count(cls, v: list[TravelLeg] | None) -> list[TravelLeg] | None:
        """Ensure at most two legs (outbound and return of a day trip)."""
        if v is not None and len(v) > 2:
            raise ValueError(f"travelInfo must hold at most 2 legs, got {len(v)}")
        return v


class CityAccommodationCost(WireModel):
    """Estimated accommodation cost for all nights in one city."""

    city: str
    estimated_cost: float
    nights: int


class PackingListCategory(WireModel):
    """Named group of packing items."""

    category_name: str
    items: list[str] = Field(default_factory=list)


class TravelPlan(WireModel):
    """Complete multi-day plan."""

    itinerary: list[DayPlan]
    optimization_suggestions: str
    official_links: list[Link] = Field(default_factory=list)
    city_accommodation_costs: list[CityAccommodationCost] = Field(default_factory=list)
    packing_list: list[PackingListCategory] | None = None
    checked_packing_items: dict[str, bool] | None = None

    def all_activities(self) -> list[Activity]:
        """All activities in day order, then in-day order."""
        return [activity for day in self.itinerary for activity in day.activities]
