"""Plan store - the oracle-confirmed baseline and the user's working copy."""

import logging

from tripcraft.models.plan import DayPlan, PackingListCategory, TravelPlan
from tripcraft.planning.identity import stamp_ids
from tripcraft.planning.tracker import EditTracker

logger = logging.getLogger(__name__)


class PlanStore:
    """Holds the baseline and working plans and applies user mutations.

    Mutations are silent no-ops while no plan is present or when the addressed
    day does not exist. `modified` is derived by comparing the working days
    against the baseline days.
    """

    def __init__(self, tracker: EditTracker | None = None) -> None:
        self.tracker = tracker or EditTracker()
        self.baseline: TravelPlan | None = None
        self.working: TravelPlan | None = None

    @property
    def modified(self) -> bool:
        if self.working is None or self.baseline is None:
            return False
        return self.working.itinerary != self.baseline.itinerary

    def _day(self, day_index: int) -> DayPlan | None:
        if self.working is None or not 0 <= day_index < len(self.working.itinerary):
            return None
        return self.working.itinerary[day_index]

    def set_from_oracle(self, plan: TravelPlan) -> TravelPlan:
        """Replace both snapshots with a fresh oracle (or loaded) plan."""
        stamped = stamp_ids(plan)
        self.baseline = stamped
        self.working = stamped.model_copy(deep=True)
        self.tracker.clear()
        return self.working

    def clear(self) -> None:
        """Drop both snapshots and all pending edits."""
        self.baseline = None
        self.working = None
        self.tracker.clear()

    def delete_activity(self, day_index: int, activity_id: str) -> bool:
        """Remove an activity from a day, recording its fingerprint for exclusion."""
        day = self._day(day_index)
        if day is None:
            return False
        for position, activity in enumerate(day.activities):
            if activity.id == activity_id:
                self.tracker.mark_deleted(activity)
                del day.activities[position]
                return True
        return False

    def reorder_activities(self, day_index: int, new_order: list[str]) -> bool:
        """Reorder a day's activities by identifier. Travel legs are untouched."""
        day = self._day(day_index)
        if day is None:
            return False
        by_id = {activity.id: activity for activity in day.activities}
        if len(new_order) != len(day.activities) or set(new_order) != set(by_id):
            logger.warning(f"Ignoring reorder of day {day_index + 1}: not a permutation")
            return False
        day.activities = [by_id[activity_id] for activity_id in new_order]
        return True

    def update_day_note(self, day_index: int, text: str) -> bool:
        day = self._day(day_index)
        if day is None:
            return False
        day.user_notes = text
        return True

    def discard(self) -> None:
        """Reset the working copy to the baseline and drop pending edits."""
        if self.baseline is None:
            return
        self.working = self.baseline.model_copy(deep=True)
        self.tracker.clear()

    def update_packing_list(self, categories: list[PackingListCategory]) -> None:
        """Replace the packing list; check state is reset since items may differ."""
        if self.working is None:
            return
        self.working.packing_list = [c.model_copy(deep=True) for c in categories]
        self.working.checked_packing_items = {}

    def toggle_checked(self, item: str) -> bool:
        """Flip the packed state of an item. Returns the new state."""
        if self.working is None:
            return False
        checked = self.working.checked_packing_items or {}
        checked[item] = not checked.get(item, False)
        self.working.checked_packing_items = checked
        return checked[item]

    def add_packing_item(self, category: str, item: str) -> bool:
        """Add an item to a category, keeping the category sorted.

        Rejected when the exact item already exists in any category.
        """
        if self.working is None:
            return False
        packing_list = self.working.packing_list or []
        if any(item in c.items for c in packing_list):
            logger.warning(f'Item "{item}" already exists in the packing list.')
            return False
        for existing in packing_list:
            if existing.category_name == category:
                existing.items = sorted([*existing.items, item])
                break
        else:
            packing_list.append(PackingListCategory(category_name=category, items=[item]))
        self.working.packing_list = packing_list
        return True

    def remove_packing_item(self, item: str) -> None:
        if self.working is None or not self.working.packing_list:
            return
        for category in self.working.packing_list:
            category.items = [i for i in category.items if i != item]
        if self.working.checked_packing_items:
            self.working.checked_packing_items.pop(item, None)
