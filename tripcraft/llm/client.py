"""Oracle clients - raw structured-output calls to the generative provider.

Security: Reads API key from settings only, never hardcoded.
Provides a deterministic stub when no key is present, for tests and local runs.
"""

import json
import logging
from typing import Any, Protocol

import httpx
from openai import AsyncOpenAI

from tripcraft.config import Settings
from tripcraft.llm.prompts import SYSTEM_PROMPT
from tripcraft.llm.schemas import (
    COUNTRY_INFO_SCHEMA_NAME,
    PACKING_CATEGORIES_KEY,
    PACKING_LIST_SCHEMA_NAME,
    SUGGESTIONS_KEY,
    SUGGESTIONS_SCHEMA_NAME,
    TRAVEL_PLAN_SCHEMA_NAME,
)

logger = logging.getLogger(__name__)


class OracleClient(Protocol):
    """Protocol for oracle client implementations."""

    async def complete_json(self, *, prompt: str, schema_name: str, schema: dict[str, Any]) -> str:
        """Send a prompt and return the raw JSON text of the reply.

        Args:
            prompt: User prompt for this request kind
            schema_name: Name of the output schema
            schema: JSON schema the reply must conform to

        Returns:
            Raw response text (may be empty)
        """
        ...


def _cost(accommodation: float, food: float, activities: float) -> dict[str, float]:
    return {"accommodation": accommodation, "food": food, "activities": activities}


def _activity(name: str, city: str, kind: str, cost: float, lat: float, lng: float) -> dict:
    return {
        "name": name,
        "description": f"A visit to {name}.",
        "city": city,
        "type": kind,
        "links": [],
        "averageCost": cost,
        "costBreakdown": _cost(0, 0, cost),
        "lat": lat,
        "lng": lng,
        "duration": "2 hours",
    }


_STUB_COUNTRY = {
    "description": "A stub destination with plenty to see.",
    "visaInfo": "e-visa available.",
    "averageCost": 1400,
    "costBreakdown": _cost(600, 350, 450),
    "currencyInfo": {"code": "EUR", "symbol": "€", "usdToLocalRate": 0.92, "usdToInrRate": 83.0},
}

_STUB_PAYLOADS: dict[str, dict[str, Any]] = {
    SUGGESTIONS_SCHEMA_NAME: {
        SUGGESTIONS_KEY: [{"name": "Italy", "country": "Italian Republic", **_STUB_COUNTRY}]
    },
    COUNTRY_INFO_SCHEMA_NAME: _STUB_COUNTRY,
    TRAVEL_PLAN_SCHEMA_NAME: {
        "itinerary": [
            {
                "day": 1,
                "title": "Ancient Rome",
                "activities": [
                    _activity("Colosseum", "Rome", "Touristy", 20, 41.8902, 12.4922),
                    _activity("Aventine Keyhole", "Rome", "Off-beat", 0, 41.8833, 12.4784),
                ],
                "keepInMind": [{"type": "do", "tip": "Book tickets online."}],
                "weatherForecast": "Sunny with highs around 25°C.",
            },
            {
                "day": 2,
                "title": "Renaissance Florence",
                "activities": [
                    _activity("Uffizi Gallery", "Florence", "Touristy", 25, 43.7678, 11.2553),
                ],
                "keepInMind": [{"type": "info", "tip": "Museums close on Mondays."}],
                "travelInfo": [
                    {
                        "fromCity": "Rome",
                        "toCity": "Florence",
                        "options": [{"mode": "Train", "duration": "1.5 hours", "cost": 40}],
                    }
                ],
            },
            {
                "day": 3,
                "title": "Day trip to Pisa",
                "activities": [
                    _activity("Leaning Tower", "Pisa", "Touristy", 20, 43.7230, 10.3966),
                ],
                "keepInMind": [{"type": "warning", "tip": "Watch for pickpockets."}],
                "travelInfo": [
                    {
                        "fromCity": "Florence",
                        "toCity": "Pisa",
                        "options": [{"mode": "Train", "duration": "1 hour", "cost": 9}],
                    },
                    {
                        "fromCity": "Pisa",
                        "toCity": "Florence",
                        "options": [{"mode": "Train", "duration": "1 hour", "cost": 9}],
                    },
                ],
            },
        ],
        "optimizationSuggestions": "Stub plan generated without an oracle.",
        "officialLinks": [{"title": "Italia.it", "url": "https://www.italia.it"}],
        "cityAccommodationCosts": [
            {"city": "Rome", "estimatedCost": 150, "nights": 1},
            {"city": "Florence", "estimatedCost": 240, "nights": 2},
        ],
    },
    PACKING_LIST_SCHEMA_NAME: {
        PACKING_CATEGORIES_KEY: [
            {"categoryName": "Documents", "items": ["Passport", "Visa"]},
            {"categoryName": "Clothing", "items": ["Walking shoes"]},
        ]
    },
}


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def complete_json(self, *, prompt: str, schema_name: str, schema: dict[str, Any]) -> str:
        """Return a fixed, schema-conforming payload for the schema name."""
        self.calls.append(schema_name)
        payload = _STUB_PAYLOADS.get(schema_name)
        if payload is None:
            raise ValueError(f"No stub payload for schema {schema_name}")
        return json.dumps(payload)


class OpenAIOracleClient:
    """OpenAI-backed oracle client using structured outputs."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        timeout_seconds: float = 60.0,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            temperature: Sampling temperature
            timeout_seconds: Per-request timeout
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=httpx.Timeout(timeout_seconds))
        self.model = model
        self.temperature = temperature

    async def complete_json(self, *, prompt: str, schema_name: str, schema: dict[str, Any]) -> str:
        """Call the chat completions API constrained to the given schema.

        Provider errors (including openai.RateLimitError) propagate to the caller.
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema, "strict": False},
            },
        )
        return response.choices[0].message.content or ""


def get_oracle_client(settings: Settings) -> OracleClient:
    """Factory function to get appropriate oracle client based on config.

    Returns:
        OpenAIOracleClient if API key is configured, DeterministicStubClient otherwise
    """
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI oracle client")
        return OpenAIOracleClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            temperature=settings.oracle_temperature,
            timeout_seconds=settings.oracle_timeout_seconds,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()
