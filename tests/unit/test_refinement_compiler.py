"""Tests for city sequences and refinement instructions."""

from tripcraft.models import DayPlan, TravelPlan
from tripcraft.planning.compiler import (
    NO_NOTES_PLACEHOLDER,
    build_removal_directive,
    city_sequence,
    compile_refinement,
)
from tripcraft.planning.tracker import EditTracker


def test_city_sequence_collapses_consecutive_repeats(sample_plan: TravelPlan) -> None:
    assert city_sequence(sample_plan.itinerary) == ["Rome", "Florence", "Rome", "Venice"]


def test_city_sequence_skips_empty_cities(activity_factory) -> None:
    days = [
        DayPlan(day=1, title="A", activities=[activity_factory("X", "Rome"), activity_factory("Y", "")]),
        DayPlan(day=2, title="B", activities=[activity_factory("Z", "Rome")]),
        DayPlan(day=3, title="C", activities=[]),
    ]

    assert city_sequence(days) == ["Rome"]


def test_removal_directive_names_each_marked_stop() -> None:
    cities = ["Rome", "Florence", "Rome", "Venice"]

    directive = build_removal_directive(cities, [2, 0])

    route = "Rome -> Florence -> Rome -> Venice"
    assert directive.startswith("CRITICAL TASK:")
    assert f"- The visit to Rome (which is stop number 1 in the sequence: {route})" in directive
    assert f"- The visit to Rome (which is stop number 3 in the sequence: {route})" in directive
    assert "stop number 2" not in directive
    assert directive.index("stop number 1") < directive.index("stop number 3")
    assert "REMAINING plan" in directive


def test_removal_directive_ignores_out_of_range_positions() -> None:
    assert build_removal_directive(["Rome"], [3, -1]) == ""


def test_notes_only(sample_plan: TravelPlan) -> None:
    assert compile_refinement(sample_plan, EditTracker(), "More food tours") == "More food tours"


def test_no_notes_and_no_marks_gives_placeholder(sample_plan: TravelPlan) -> None:
    assert compile_refinement(sample_plan, EditTracker(), "   ") == NO_NOTES_PLACEHOLDER


def test_marks_are_prepended_to_notes(sample_plan: TravelPlan) -> None:
    tracker = EditTracker()
    tracker.toggle_city_removal(0)
    tracker.toggle_city_removal(2)

    instruction = compile_refinement(sample_plan, tracker, "")

    assert instruction.startswith("CRITICAL TASK:")
    assert "stop number 1" in instruction
    assert "stop number 3" in instruction
    assert instruction.endswith(f"Other refinement notes: {NO_NOTES_PLACEHOLDER}")


def test_deletions_are_not_embedded_in_instruction(sample_plan: TravelPlan) -> None:
    tracker = EditTracker()
    tracker.mark_deleted(sample_plan.itinerary[0].activities[0])

    assert compile_refinement(sample_plan, tracker, "Relax") == "Relax"
