"""Cost summary - pass-through arithmetic over a plan's USD estimates."""

from pydantic import BaseModel

from tripcraft.models.destination import DestinationSuggestion
from tripcraft.models.plan import TravelPlan

# Destination estimates are quoted for a 7-day trip.
ESTIMATE_DAYS = 7


class CostSummary(BaseModel):
    """Estimated trip cost by category, in USD."""

    accommodation: float
    activities: float
    travel: float
    food: float
    grand_total: float
    estimated_budget: int


def estimated_budget(plan: TravelPlan, destination: DestinationSuggestion) -> int:
    """Destination's 7-day estimate prorated to the plan's length."""
    if destination.average_cost <= 0:
        return 0
    return round(destination.average_cost / ESTIMATE_DAYS * len(plan.itinerary))


def summarize_costs(plan: TravelPlan, destination: DestinationSuggestion) -> CostSummary:
    """Sum accommodation, activity, cheapest-travel and prorated food costs.

    The destination's prorated estimate is reported alongside for comparison.
    """
    accommodation = sum(cost.estimated_cost for cost in plan.city_accommodation_costs)
    activities = sum(activity.average_cost for activity in plan.all_activities())
    travel = sum(
        min(option.cost for option in leg.options)
        for day in plan.itinerary
        for leg in day.travel_info or []
        if leg.options
    )
    food = round(destination.cost_breakdown.food / ESTIMATE_DAYS * len(plan.itinerary))
    return CostSummary(
        accommodation=accommodation,
        activities=activities,
        travel=travel,
        food=food,
        grand_total=accommodation + activities + travel + food,
        estimated_budget=estimated_budget(plan, destination),
    )
