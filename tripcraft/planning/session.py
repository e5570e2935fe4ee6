"""Plan session - the request state machine around one plan.

    idle -> suggesting | detailing -> awaiting_duration -> generating -> ready
    ready -> rebuilding -> ready

Any state returns to idle on reset(). Local edits happen while ready and need
no transition. Oracle failures restore the state held before the call and
re-raise; a failed rebuild leaves the baseline, the working copy and the edit
tracker untouched so the caller can retry.

At most one oracle call per session is expected to be in flight; callers
serialize requests. A rebuild result is applied when it arrives even if the
working copy was edited meanwhile (last writer wins).
"""

import logging
import uuid
from enum import Enum

from tripcraft.llm.gateway import OracleError, OracleGateway
from tripcraft.models.common import ItineraryStyle
from tripcraft.models.destination import DestinationSuggestion
from tripcraft.models.plan import PackingListCategory, TravelPlan
from tripcraft.models.saved import SavedPlan
from tripcraft.persistence.plan_files import load_saved_plan, new_saved_plan
from tripcraft.planning.compiler import city_sequence, compile_refinement
from tripcraft.planning.costs import CostSummary, summarize_costs
from tripcraft.planning.store import PlanStore
from tripcraft.planning.tracker import EditTracker

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Where the session is in the request flow."""

    idle = "idle"
    suggesting = "suggesting"
    detailing = "detailing"
    awaiting_duration = "awaiting_duration"
    generating = "generating"
    ready = "ready"
    rebuilding = "rebuilding"


class PlanSession:
    """One user's journey from destination choice to a refined plan."""

    def __init__(self, gateway: OracleGateway, session_id: str | None = None) -> None:
        self.session_id = session_id or str(uuid.uuid4())
        self.gateway = gateway
        self.tracker = EditTracker()
        self.store = PlanStore(self.tracker)
        self.state = SessionState.idle
        self.suggestions: list[DestinationSuggestion] = []
        self.destination: DestinationSuggestion | None = None
        self.time_of_year = ""
        self.style = ItineraryStyle.mixed
        self.notes = ""
        self.error: str | None = None

    @property
    def plan(self) -> TravelPlan | None:
        return self.store.working

    @property
    def modified(self) -> bool:
        return self.store.modified

    # Destination selection

    async def request_suggestions(
        self, budget: str, season: str, continent: str, country: str = ""
    ) -> list[DestinationSuggestion]:
        """Fetch suggestions, or look up `country` directly and select it."""
        self.error = None
        self.time_of_year = season
        name = country.strip()
        try:
            if name:
                self.state = SessionState.detailing
                info = await self.gateway.get_direct_country_info(name)
                self.select_destination(DestinationSuggestion.from_country_info(name, info))
                return [self.destination] if self.destination else []
            self.state = SessionState.suggesting
            self.suggestions = await self.gateway.get_travel_suggestions(budget, season, continent)
            return self.suggestions
        except OracleError as e:
            self.error = str(e)
            self.state = SessionState.idle
            raise

    async def request_offbeat_suggestions(self) -> list[DestinationSuggestion]:
        self.error = None
        self.state = SessionState.suggesting
        try:
            self.suggestions = await self.gateway.get_offbeat_suggestions()
        except OracleError as e:
            self.error = str(e)
            self.state = SessionState.idle
            raise
        return self.suggestions

    def select_destination(self, destination: DestinationSuggestion) -> None:
        self.destination = destination
        self.state = SessionState.awaiting_duration

    # Generation and refinement

    async def generate_plan(
        self, duration: int, style: ItineraryStyle, notes: str
    ) -> TravelPlan | None:
        """Generate a plan for the selected destination (duration 0: oracle decides)."""
        if self.destination is None:
            return None
        self.error = None
        self.style = style
        self.notes = notes
        self.state = SessionState.generating
        try:
            result = await self.gateway.get_travel_plan(self.destination.name, duration, style, notes)
        except OracleError as e:
            self.error = str(e)
            self.state = SessionState.awaiting_duration
            raise
        plan = self.store.set_from_oracle(result)
        self.state = SessionState.ready
        logger.info(
            f"Session {self.session_id}: generated {len(plan.itinerary)}-day plan "
            f"for {self.destination.name}"
        )
        return plan

    def can_rebuild(self, notes: str = "") -> bool:
        return self.modified or bool(notes.strip()) or bool(self.tracker.cities_marked)

    async def rebuild(self, notes: str) -> TravelPlan | None:
        """Send pending edits and notes to the oracle and adopt the replacement plan."""
        working = self.store.working
        if working is None or self.destination is None:
            return None
        instruction = compile_refinement(working, self.tracker, notes)
        exclusions = self.tracker.deleted
        days = [day.model_copy(deep=True) for day in working.itinerary]

        self.error = None
        self.state = SessionState.rebuilding
        try:
            result = await self.gateway.rebuild_travel_plan(
                self.destination.name, len(days), self.style, days, instruction, exclusions
            )
        except OracleError as e:
            self.error = str(e)
            self.state = SessionState.ready
            raise
        plan = self.store.set_from_oracle(result)
        self.state = SessionState.ready
        logger.info(
            f"Session {self.session_id}: rebuilt plan with {len(exclusions)} exclusion(s)"
        )
        return plan

    # Local edits

    def delete_activity(self, day_index: int, activity_id: str) -> bool:
        return self.store.delete_activity(day_index, activity_id)

    def reorder_activities(self, day_index: int, new_order: list[str]) -> bool:
        return self.store.reorder_activities(day_index, new_order)

    def update_day_note(self, day_index: int, text: str) -> bool:
        return self.store.update_day_note(day_index, text)

    def toggle_city_removal(self, index: int) -> bool:
        if self.store.working is None:
            return False
        return self.tracker.toggle_city_removal(index)

    def city_sequence(self) -> list[str]:
        if self.store.working is None:
            return []
        return city_sequence(self.store.working.itinerary)

    def discard(self) -> None:
        self.store.discard()

    # Packing list

    async def generate_packing_list(self) -> list[PackingListCategory]:
        working = self.store.working
        if working is None or self.destination is None:
            return []
        names = [activity.name for activity in working.all_activities()]
        self.error = None
        try:
            categories = await self.gateway.get_packing_list(
                self.destination.name, len(working.itinerary), names
            )
        except OracleError as e:
            self.error = str(e)
            raise
        self.store.update_packing_list(categories)
        return categories

    def update_packing_list(self, categories: list[PackingListCategory]) -> None:
        self.store.update_packing_list(categories)

    def toggle_packing_item(self, item: str) -> bool:
        return self.store.toggle_checked(item)

    def add_packing_item(self, category: str, item: str) -> bool:
        return self.store.add_packing_item(category, item)

    def remove_packing_item(self, item: str) -> None:
        self.store.remove_packing_item(item)

    # Navigation

    def back(self) -> None:
        """Step back one screen, dropping un-rebuilt edits when leaving the plan."""
        self.error = None
        if self.state == SessionState.ready:
            self.store.discard()
            self.state = SessionState.awaiting_duration
        elif self.state == SessionState.awaiting_duration:
            self.destination = None
            self.store.clear()
            self.state = SessionState.suggesting if self.suggestions else SessionState.idle
        elif self.state == SessionState.suggesting:
            self.suggestions = []
            self.state = SessionState.idle

    def return_to_plan(self) -> None:
        if self.state == SessionState.awaiting_duration and self.store.working is not None:
            self.error = None
            self.state = SessionState.ready

    def reset(self) -> None:
        self.store.clear()
        self.state = SessionState.idle
        self.suggestions = []
        self.destination = None
        self.time_of_year = ""
        self.style = ItineraryStyle.mixed
        self.notes = ""
        self.error = None

    # Persistence

    def load(self, saved: SavedPlan) -> TravelPlan:
        """Adopt a saved plan and its request context."""
        plan = self.store.set_from_oracle(saved.plan)
        self.destination = saved.destination
        self.time_of_year = saved.time_of_year
        self.style = saved.itinerary_style
        self.notes = saved.additional_notes
        self.error = None
        self.state = SessionState.ready
        return plan

    def load_text(self, text: str) -> TravelPlan:
        """Parse a saved plan document and adopt it; state is unchanged on PlanFileError."""
        return self.load(load_saved_plan(text))

    def to_saved(self, name: str = "") -> SavedPlan | None:
        if self.store.working is None or self.destination is None:
            return None
        return new_saved_plan(
            name or f"Trip to {self.destination.name}",
            self.store.working,
            self.destination,
            time_of_year=self.time_of_year,
            itinerary_style=self.style,
            additional_notes=self.notes,
        )

    def cost_summary(self) -> CostSummary | None:
        if self.store.working is None or self.destination is None:
            return None
        return summarize_costs(self.store.working, self.destination)
