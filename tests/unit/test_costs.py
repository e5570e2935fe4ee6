"""Tests for the cost summary."""

from tripcraft.models import DestinationSuggestion, TravelPlan
from tripcraft.planning.costs import estimated_budget, summarize_costs


def test_summary_uses_cheapest_option_per_leg(sample_plan: TravelPlan, destination: DestinationSuggestion) -> None:
    summary = summarize_costs(sample_plan, destination)

    assert summary.accommodation == 410
    assert summary.activities == 90
    # 9 + 9 for the Pisa day trip, 25 Florence to Rome, 60 Rome to Venice
    assert summary.travel == 103
    assert summary.food == 200
    assert summary.grand_total == 803
    assert summary.estimated_budget == 800


def test_legs_without_options_are_skipped(sample_plan: TravelPlan, destination: DestinationSuggestion) -> None:
    legs = sample_plan.itinerary[3].travel_info
    assert legs is not None
    legs[0].options = []

    assert summarize_costs(sample_plan, destination).travel == 43


def test_estimated_budget_is_prorated(sample_plan: TravelPlan, destination: DestinationSuggestion) -> None:
    assert estimated_budget(sample_plan, destination) == 800


def test_estimated_budget_without_average_cost(
    sample_plan: TravelPlan, destination: DestinationSuggestion
) -> None:
    destination.average_cost = 0

    assert estimated_budget(sample_plan, destination) == 0
