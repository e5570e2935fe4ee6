"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model using the camelCase field names of oracle payloads and plan files."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ItineraryStyle(str, Enum):
    """Requested flavour of the whole itinerary."""

    mixed = "Mixed"
    touristy = "Touristy"
    off_beat = "Off-beat"


class ActivityType(str, Enum):
    """Category tag of a single activity."""

    touristy = "Touristy"
    off_beat = "Off-beat"


class TipKind(str, Enum):
    """Kind of advisory tip attached to a day."""

    do = "do"
    dont = "dont"
    warning = "warning"
    info = "info"


class CostBreakdown(WireModel):
    """Cost breakdown in USD."""

    accommodation: float = 0.0
    food: float = 0.0
    activities: float = 0.0


class Link(WireModel):
    """Titled external link."""

    title: str
    url: str
