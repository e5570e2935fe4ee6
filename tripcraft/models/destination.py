"""Destination models - suggestions and direct country lookups."""

from pydantic import Field

from tripcraft.models.common import CostBreakdown, WireModel


class CurrencyInfo(WireModel):
    """Local currency and approximate conversion factors."""

    code: str
    symbol: str
    usd_to_local_rate: float = Field(..., gt=0)
    usd_to_inr_rate: float = Field(..., gt=0)


class CountryInfo(WireModel):
    """Result of a direct country lookup (the destination summary without a name)."""

    description: str
    visa_info: str
    average_cost: float
    cost_breakdown: CostBreakdown
    currency_info: CurrencyInfo


class DestinationSuggestion(CountryInfo):
    """Suggested destination country.

    `average_cost` and `cost_breakdown` are estimates in USD for a solo traveller
    on a 7-day trip.
    """

    name: str
    country: str

    @classmethod
    def from_country_info(cls, name: str, info: CountryInfo) -> "DestinationSuggestion":
        """Build a destination for a country the user typed in directly."""
        return cls(name=name, country=name, **info.model_dump())
