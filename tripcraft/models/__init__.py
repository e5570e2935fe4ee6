"""Models package - re-exports for convenience."""

from tripcraft.models.common import (
    ActivityType,
    CostBreakdown,
    ItineraryStyle,
    Link,
    TipKind,
    WireModel,
)
from tripcraft.models.destination import CountryInfo, CurrencyInfo, DestinationSuggestion
from tripcraft.models.plan import (
    Activity,
    CityAccommodationCost,
    DayPlan,
    KeepInMindItem,
    PackingListCategory,
    TransportOption,
    TravelLeg,
    TravelPlan,
)
from tripcraft.models.saved import SavedPlan

__all__ = [
    # Common
    "WireModel",
    "ItineraryStyle",
    "ActivityType",
    "TipKind",
    "CostBreakdown",
    "Link",
    # Destination
    "CurrencyInfo",
    "CountryInfo",
    "DestinationSuggestion",
    # Plan
    "TravelPlan",
    "DayPlan",
    "Activity",
    "TransportOption",
    "TravelLeg",
    "KeepInMindItem",
    "CityAccommodationCost",
    "PackingListCategory",
    # Saved
    "SavedPlan",
]
