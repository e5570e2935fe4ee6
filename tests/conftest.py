"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from tripcraft.cache.normalized import NormalizedCache
from tripcraft.cache.store import InMemoryKeyValueStore
from tripcraft.llm.client import DeterministicStubClient
from tripcraft.llm.gateway import OracleGateway
from tripcraft.models import (
    Activity,
    ActivityType,
    CostBreakdown,
    CurrencyInfo,
    DayPlan,
    DestinationSuggestion,
    TransportOption,
    TravelLeg,
    TravelPlan,
)
from tripcraft.models.plan import CityAccommodationCost


def make_activity(name: str, city: str, activity_id: str | None = None, cost: float = 10) -> Activity:
    """Build a minimal activity."""
    return Activity(
        id=activity_id,
        name=name,
        description=f"{name} in {city}",
        city=city,
        type=ActivityType.touristy,
        average_cost=cost,
        lat=0.0,
        lng=0.0,
    )


def make_leg(from_city: str, to_city: str, *costs: float) -> TravelLeg:
    """Build a travel leg with one option per cost."""
    return TravelLeg(
        from_city=from_city,
        to_city=to_city,
        options=[TransportOption(mode=f"mode{i}", duration="1h", cost=c) for i, c in enumerate(costs)],
    )


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 6, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def sample_plan() -> TravelPlan:
    """Four-day plan visiting Rome, Florence (with a Pisa day trip), Rome again and Venice."""
    return TravelPlan(
        itinerary=[
            DayPlan(
                day=1,
                title="Rome",
                activities=[
                    make_activity("Colosseum", "Rome", "a1", cost=20),
                    make_activity("Pantheon", "Rome", "a2", cost=0),
                ],
            ),
            DayPlan(
                day=2,
                title="Florence and Pisa",
                activities=[
                    make_activity("Uffizi", "Florence", "a3", cost=25),
                    make_activity("Duomo", "Florence", "a4", cost=15),
                ],
                travel_info=[make_leg("Florence", "Pisa", 9, 30), make_leg("Pisa", "Florence", 9)],
            ),
            DayPlan(
                day=3,
                title="Back in Rome",
                activities=[make_activity("Vatican Museums", "Rome", "a5", cost=30)],
                travel_info=[make_leg("Florence", "Rome", 40, 25)],
            ),
            DayPlan(
                day=4,
                title="Venice",
                activities=[make_activity("Rialto Bridge", "Venice", "a6", cost=0)],
                travel_info=[make_leg("Rome", "Venice", 60)],
            ),
        ],
        optimization_suggestions="Start early.",
        city_accommodation_costs=[
            CityAccommodationCost(city="Rome", estimated_cost=200, nights=2),
            CityAccommodationCost(city="Florence", estimated_cost=120, nights=1),
            CityAccommodationCost(city="Venice", estimated_cost=90, nights=1),
        ],
    )


@pytest.fixture
def destination() -> DestinationSuggestion:
    """Italy, with 7-day estimates."""
    return DestinationSuggestion(
        name="Italy",
        country="Italy",
        description="Art, food and history.",
        visa_info="Schengen visa required.",
        average_cost=1400,
        cost_breakdown=CostBreakdown(accommodation=600, food=350, activities=450),
        currency_info=CurrencyInfo(code="EUR", symbol="€", usd_to_local_rate=0.92, usd_to_inr_rate=83.0),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> NormalizedCache:
    """One-hour cache over an in-memory store with a fake clock."""
    return NormalizedCache(kv_store, ttl_seconds=3600, clock=clock)


@pytest.fixture
def stub_client() -> DeterministicStubClient:
    return DeterministicStubClient()


@pytest.fixture
def gateway(stub_client: DeterministicStubClient, cache: NormalizedCache) -> OracleGateway:
    """Gateway over the deterministic stub client."""
    return OracleGateway(client=stub_client, cache=cache)


@pytest.fixture
def activity_factory() -> Callable[..., Activity]:
    """Expose make_activity to tests."""
    return make_activity
