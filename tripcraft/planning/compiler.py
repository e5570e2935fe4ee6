"""Refinement compiler - turns pending edits and notes into one oracle instruction.

Deleted-activity fingerprints are not embedded here; they travel to the oracle
gateway as a separate exclusion list.
"""

from tripcraft.models.plan import DayPlan, TravelPlan
from tripcraft.planning.tracker import EditTracker

NO_NOTES_PLACEHOLDER = "No specific notes provided."


def city_sequence(days: list[DayPlan]) -> list[str]:
    """Ordered city visits, collapsing consecutive repeats.

    A city that reappears after another city produces a second entry.
    """
    cities: list[str] = []
    for day in days:
        for activity in day.activities:
            city = activity.city
            if city and (not cities or cities[-1] != city):
                cities.append(city)
    return cities


def build_removal_directive(cities: list[str], marked: list[int]) -> str:
    """Directive to drop the city visits at the marked positions.

    Positions outside the sequence are ignored. Returns an empty string when
    no marked position is valid.
    """
    route = " -> ".join(cities)
    lines = [
        f"- The visit to {cities[index]} (which is stop number {index + 1} in the sequence: {route})"
        for index in sorted(marked)
        if 0 <= index < len(cities)
    ]
    if not lines:
        return ""
    removals = "\n".join(lines)
    return (
        "CRITICAL TASK: First, you MUST remove the following city stops and all their "
        "associated days/activities from the itinerary. This will make the trip shorter.\n"
        f"{removals}\n\n"
        "Once the cities are removed, apply the user's other refinement notes (if any) "
        "to the REMAINING plan.\n"
    )


def compile_refinement(plan: TravelPlan, tracker: EditTracker, notes: str) -> str:
    """Build the instruction text for a refinement call."""
    notes_text = notes if notes.strip() else NO_NOTES_PLACEHOLDER
    directive = build_removal_directive(city_sequence(plan.itinerary), tracker.cities_marked)
    if not directive:
        return notes_text
    return f"{directive}\n\nOther refinement notes: {notes_text}"
