"""Tests for activity identity and edit tracking."""

from tripcraft.models import TravelPlan
from tripcraft.planning.identity import new_activity_id, stamp_ids
from tripcraft.planning.tracker import EditTracker, activity_fingerprint, split_fingerprint


class TestStampIds:
    """Test identifier assignment."""

    def test_missing_ids_are_filled(self, sample_plan: TravelPlan) -> None:
        for activity in sample_plan.all_activities():
            activity.id = None

        stamped = stamp_ids(sample_plan)

        ids = [a.id for a in stamped.all_activities()]
        assert all(ids)
        assert len(set(ids)) == len(ids)

    def test_existing_ids_are_kept(self, sample_plan: TravelPlan) -> None:
        stamped = stamp_ids(sample_plan)

        assert [a.id for a in stamped.all_activities()] == ["a1", "a2", "a3", "a4", "a5", "a6"]

    def test_duplicate_ids_are_replaced(self, sample_plan: TravelPlan) -> None:
        sample_plan.itinerary[1].activities[0].id = "a1"

        stamped = stamp_ids(sample_plan)

        ids = [a.id for a in stamped.all_activities()]
        assert ids[0] == "a1"
        assert ids[2] != "a1"
        assert len(set(ids)) == len(ids)

    def test_input_plan_is_not_mutated(self, sample_plan: TravelPlan) -> None:
        sample_plan.itinerary[0].activities[0].id = None

        stamp_ids(sample_plan)

        assert sample_plan.itinerary[0].activities[0].id is None

    def test_stamping_twice_keeps_ids(self, sample_plan: TravelPlan) -> None:
        for activity in sample_plan.itinerary[0].activities:
            activity.id = None

        once = stamp_ids(sample_plan)
        twice = stamp_ids(once)

        assert [a.id for a in twice.all_activities()] == [a.id for a in once.all_activities()]

    def test_new_ids_are_unique(self) -> None:
        assert len({new_activity_id() for _ in range(100)}) == 100


class TestEditTracker:
    """Test deletion fingerprints and city marks."""

    def test_fingerprint_is_case_insensitive(self, activity_factory) -> None:
        assert activity_fingerprint(activity_factory(" Colosseum ", "ROME")) == "colosseum|rome"

    def test_split_fingerprint_keeps_separator_in_name(self, activity_factory) -> None:
        fingerprint = activity_fingerprint(activity_factory("Bar | Grill", "Rome"))

        assert split_fingerprint(fingerprint) == ("bar | grill", "rome")

    def test_mark_deleted_is_idempotent_and_ordered(self, activity_factory) -> None:
        tracker = EditTracker()
        tracker.mark_deleted(activity_factory("Uffizi", "Florence"))
        tracker.mark_deleted(activity_factory("Colosseum", "Rome"))
        tracker.mark_deleted(activity_factory("uffizi", "florence", "other-id"))

        assert tracker.deleted == ["uffizi|florence", "colosseum|rome"]
        assert tracker.is_deleted(activity_factory("UFFIZI", "Florence"))

    def test_toggle_city_removal(self) -> None:
        tracker = EditTracker()

        assert tracker.toggle_city_removal(2) is True
        assert tracker.toggle_city_removal(0) is True
        assert tracker.cities_marked == [0, 2]
        assert tracker.toggle_city_removal(2) is False
        assert tracker.cities_marked == [0]

    def test_clear(self, activity_factory) -> None:
        tracker = EditTracker()
        tracker.mark_deleted(activity_factory("Uffizi", "Florence"))
        tracker.toggle_city_removal(1)
        assert not tracker.is_empty()

        tracker.clear()

        assert tracker.is_empty()
        assert tracker.deleted == []
        assert tracker.cities_marked == []
