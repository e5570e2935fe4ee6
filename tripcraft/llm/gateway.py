"""Oracle gateway - one memoized call pattern per request kind.

Each operation builds a cache key from normalized request parameters, returns
the cached value on a hit, and otherwise calls the oracle with the schema for
that kind, validates the reply into models and caches it. Refinement calls are
never cached. Every failure surfaces as an OracleError; quota and rate-limit
conditions surface as the more specific OracleQuotaError.
"""

import json
import logging
import re
import time
from collections.abc import Callable
from typing import Any, TypeVar

import openai
from pydantic import TypeAdapter, ValidationError

from tripcraft.cache.normalized import NormalizedCache, create_cache_from_settings, make_cache_key
from tripcraft.config import Settings
from tripcraft.llm import prompts
from tripcraft.llm.client import OracleClient, get_oracle_client
from tripcraft.llm.schemas import (
    COUNTRY_INFO_SCHEMA_NAME,
    PACKING_CATEGORIES_KEY,
    PACKING_LIST_SCHEMA_NAME,
    SCHEMAS,
    SUGGESTIONS_KEY,
    SUGGESTIONS_SCHEMA_NAME,
    TRAVEL_PLAN_SCHEMA_NAME,
)
from tripcraft.models.common import ItineraryStyle
from tripcraft.models.destination import CountryInfo, DestinationSuggestion
from tripcraft.models.plan import DayPlan, PackingListCategory, TravelPlan
from tripcraft.utils.logging import StructuredOracleLogger
from tripcraft.utils.metrics import OracleMetrics, PrometheusOracleMetrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUOTA_MESSAGE = (
    "API quota exceeded. Please check your plan and billing details, then try again later."
)
_QUOTA_MARKERS = re.compile(r"429|quota|rate limit|resource exhausted", re.IGNORECASE)

_suggestions_adapter = TypeAdapter(list[DestinationSuggestion])
_packing_adapter = TypeAdapter(list[PackingListCategory])


class OracleError(Exception):
    """Oracle call failed (transport, provider or malformed reply)."""

    pass


class OracleQuotaError(OracleError):
    """Oracle rejected the call for quota or rate-limit reasons."""

    pass


def failure_message(action: str) -> str:
    """Generic user-facing message for a failed action (e.g. "get travel suggestions")."""
    return f"Failed to {action}. Please check your connection and try again."


def is_quota_failure(exc: BaseException) -> bool:
    """Check whether a failure signals quota exhaustion or rate limiting."""
    if isinstance(exc, openai.RateLimitError):
        return True
    return bool(_QUOTA_MARKERS.search(str(exc)))


def to_oracle_error(exc: BaseException, action: str) -> OracleError:
    """Classify an arbitrary failure into the oracle error taxonomy."""
    if is_quota_failure(exc):
        return OracleQuotaError(QUOTA_MESSAGE)
    return OracleError(failure_message(action))


def _norm(value: str) -> str:
    return value.strip().casefold()


def _unwrap_list(data: Any, key: str) -> Any:
    """Accept either the wrapped object form or a bare array."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and key in data:
        return data[key]
    raise ValueError(f"Expected an object with a '{key}' array")


class OracleGateway:
    """Memoizing gateway to the generative oracle."""

    def __init__(
        self,
        client: OracleClient,
        cache: NormalizedCache | None = None,
        metrics: OracleMetrics | None = None,
        call_logger: StructuredOracleLogger | None = None,
    ) -> None:
        """Initialize gateway.

        Args:
            client: Oracle client issuing the raw calls
            cache: Result cache (optional, no caching when absent)
            metrics: Metrics recorder (optional, defaults to no-op)
            call_logger: Structured call logger (optional)
        """
        self._client = client
        self._cache = cache
        self._metrics = metrics or OracleMetrics()
        self._call_logger = call_logger or StructuredOracleLogger()

    def sweep_cache(self) -> int:
        """Remove stale cache entries. Returns the number removed."""
        if self._cache is None:
            return 0
        return self._cache.sweep()

    async def _request(
        self,
        *,
        kind: str,
        action: str,
        prompt: str,
        schema_name: str,
        parse: Callable[[Any], T],
        dump: Callable[[T], Any],
        empty_default: Any,
        cache_key: str | None,
    ) -> T:
        start_time = time.monotonic()

        if cache_key is not None and self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                try:
                    value = parse(cached)
                except (ValidationError, ValueError) as e:
                    logger.warning(f"Discarding unreadable cached {kind} result: {e}")
                else:
                    elapsed_ms = (time.monotonic() - start_time) * 1000
                    self._metrics.record_latency(kind, "cache_hit", elapsed_ms)
                    self._metrics.inc_cache_hit(kind)
                    self._call_logger.log_call(kind, "cache_hit", elapsed_ms, cache_hit=True)
                    return value

        try:
            text = await self._client.complete_json(
                prompt=prompt, schema_name=schema_name, schema=SCHEMAS[schema_name]
            )
            text = text.strip()
            data = json.loads(text) if text else empty_default
            value = parse(data)
        except Exception as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            error = to_oracle_error(e, action)
            reason = "quota" if isinstance(error, OracleQuotaError) else type(e).__name__
            logger.error(f"Error trying to {action}: {e}")
            self._metrics.inc_error(kind, reason)
            self._metrics.record_latency(kind, "error", elapsed_ms)
            self._call_logger.log_call(kind, "error", elapsed_ms, error_reason=reason)
            raise error from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        self._metrics.record_latency(kind, "success", elapsed_ms)
        self._call_logger.log_call(kind, "success", elapsed_ms)

        if cache_key is not None and self._cache is not None:
            self._cache.set(cache_key, dump(value))
        return value

    async def get_travel_suggestions(
        self, budget: str, season: str, continent: str
    ) -> list[DestinationSuggestion]:
        """Suggest destination countries for a budget tier, season and continent."""
        return await self._request(
            kind="suggestions",
            action="get travel suggestions",
            prompt=prompts.build_suggestions_prompt(budget.strip(), season.strip(), continent.strip()),
            schema_name=SUGGESTIONS_SCHEMA_NAME,
            parse=lambda data: _suggestions_adapter.validate_python(
                _unwrap_list(data, SUGGESTIONS_KEY)
            ),
            dump=lambda value: [s.to_wire() for s in value],
            empty_default=[],
            cache_key=make_cache_key(
                "suggestions-v2", _norm(budget), _norm(season), _norm(continent)
            ),
        )

    async def get_offbeat_suggestions(self) -> list[DestinationSuggestion]:
        """Suggest off-the-beaten-path destination countries."""
        return await self._request(
            kind="suggestions",
            action="get off-beat travel suggestions",
            prompt=prompts.build_offbeat_suggestions_prompt(),
            schema_name=SUGGESTIONS_SCHEMA_NAME,
            parse=lambda data: _suggestions_adapter.validate_python(
                _unwrap_list(data, SUGGESTIONS_KEY)
            ),
            dump=lambda value: [s.to_wire() for s in value],
            empty_default=[],
            cache_key=make_cache_key("suggestions-v2", "off-beat"),
        )

    async def get_direct_country_info(self, country: str) -> CountryInfo:
        """Look up a single country the user named directly."""
        name = country.strip()
        return await self._request(
            kind="country_info",
            action=f"get information for {name}",
            prompt=prompts.build_country_info_prompt(name),
            schema_name=COUNTRY_INFO_SCHEMA_NAME,
            parse=CountryInfo.model_validate,
            dump=lambda value: value.to_wire(),
            empty_default={},
            cache_key=make_cache_key("country-info-v2", _norm(name)),
        )

    async def get_travel_plan(
        self, destination: str, duration: int, style: ItineraryStyle, notes: str
    ) -> TravelPlan:
        """Generate a plan of `duration` days; 0 lets the oracle decide the duration."""
        if duration == 0:
            return await self.get_comprehensive_travel_plan(destination, style, notes)
        name = destination.strip()
        return await self._request(
            kind="plan",
            action=f"create a travel plan for {name}",
            prompt=prompts.build_travel_plan_prompt(name, duration, style, notes.strip()),
            schema_name=TRAVEL_PLAN_SCHEMA_NAME,
            parse=TravelPlan.model_validate,
            dump=lambda value: value.to_wire(),
            empty_default={},
            cache_key=make_cache_key(
                "plan", _norm(name), str(duration), style.value, notes.strip()
            ),
        )

    async def get_comprehensive_travel_plan(
        self, destination: str, style: ItineraryStyle, notes: str
    ) -> TravelPlan:
        """Generate a full-country tour whose duration the oracle chooses."""
        name = destination.strip()
        return await self._request(
            kind="comprehensive_plan",
            action=f"create a comprehensive travel plan for {name}",
            prompt=prompts.build_comprehensive_plan_prompt(name, style, notes.strip()),
            schema_name=TRAVEL_PLAN_SCHEMA_NAME,
            parse=TravelPlan.model_validate,
            dump=lambda value: value.to_wire(),
            empty_default={},
            cache_key=make_cache_key(
                "comprehensive-plan", _norm(name), style.value, notes.strip()
            ),
        )

    async def rebuild_travel_plan(
        self,
        destination: str,
        duration: int,
        style: ItineraryStyle,
        days: list[DayPlan],
        instruction: str,
        exclusions: list[str],
    ) -> TravelPlan:
        """Ask the oracle for a full replacement plan. Never cached."""
        name = destination.strip()
        return await self._request(
            kind="refinement",
            action=f"rebuild the travel plan for {name}",
            prompt=prompts.build_rebuild_prompt(
                name, duration, style, days, instruction, exclusions
            ),
            schema_name=TRAVEL_PLAN_SCHEMA_NAME,
            parse=TravelPlan.model_validate,
            dump=lambda value: value.to_wire(),
            empty_default={},
            cache_key=None,
        )

    async def get_packing_list(
        self, destination: str, duration: int, activity_names: list[str]
    ) -> list[PackingListCategory]:
        """Generate a categorized packing list for the planned activities."""
        name = destination.strip()
        names = [n.strip() for n in activity_names]
        return await self._request(
            kind="packing_list",
            action=f"generate a packing list for {name}",
            prompt=prompts.build_packing_list_prompt(name, duration, names),
            schema_name=PACKING_LIST_SCHEMA_NAME,
            parse=lambda data: _packing_adapter.validate_python(
                _unwrap_list(data, PACKING_CATEGORIES_KEY)
            ),
            dump=lambda value: [c.to_wire() for c in value],
            empty_default=[],
            cache_key=make_cache_key(
                "packing-list", _norm(name), str(duration), json.dumps(names, ensure_ascii=False)
            ),
        )


def create_gateway_from_settings(settings: Settings) -> OracleGateway:
    """Build a gateway with the configured client and cache."""
    return OracleGateway(
        client=get_oracle_client(settings),
        cache=create_cache_from_settings(settings),
        metrics=PrometheusOracleMetrics(),
    )
