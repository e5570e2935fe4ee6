"""Activity identity assignment."""

import uuid

from tripcraft.models.plan import TravelPlan


def new_activity_id() -> str:
    """Generate a fresh collision-resistant activity identifier."""
    return str(uuid.uuid4())


def stamp_ids(plan: TravelPlan) -> TravelPlan:
    """Return a copy of the plan in which every activity has a unique identifier.

    Activities that already carry an identifier keep it. An activity without one,
    or whose identifier already appeared earlier in the plan, gets a fresh one.
    """
    stamped = plan.model_copy(deep=True)
    seen: set[str] = set()
    for day in stamped.itinerary:
        for activity in day.activities:
            if not activity.id or activity.id in seen:
                activity.id = new_activity_id()
            seen.add(activity.id)
    return stamped
