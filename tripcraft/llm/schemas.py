"""JSON output schemas sent to the oracle, one per request kind.

List results are wrapped in a single-key object because structured output
requires an object at the top level.
"""

from typing import Any

SUGGESTIONS_SCHEMA_NAME = "destination_suggestions"
COUNTRY_INFO_SCHEMA_NAME = "country_info"
TRAVEL_PLAN_SCHEMA_NAME = "travel_plan"
PACKING_LIST_SCHEMA_NAME = "packing_list"

SUGGESTIONS_KEY = "suggestions"
PACKING_CATEGORIES_KEY = "categories"


def _obj(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


def _arr(items: dict[str, Any], description: str | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array", "items": items}
    if description:
        schema["description"] = description
    return schema


def _str(description: str | None = None, enum: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string"}
    if description:
        schema["description"] = description
    if enum:
        schema["enum"] = enum
    return schema


def _num(description: str | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "number"}
    if description:
        schema["description"] = description
    return schema


CURRENCY_INFO = _obj(
    {
        "code": _str("The 3-letter currency code, e.g. EUR"),
        "symbol": _str("The currency symbol, e.g. €"),
        "usdToLocalRate": _num("Approximate conversion rate from 1 USD to the local currency."),
        "usdToInrRate": _num("Approximate conversion rate from 1 USD to Indian Rupees (INR)."),
    },
    ["code", "symbol", "usdToLocalRate", "usdToInrRate"],
)

COST_BREAKDOWN = _obj(
    {
        "accommodation": _num("Estimated cost for accommodation in USD."),
        "food": _num("Estimated cost for food in USD."),
        "activities": _num("Estimated cost for activities in USD."),
    },
    ["accommodation", "food", "activities"],
)

_COUNTRY_PROPERTIES: dict[str, Any] = {
    "description": _str("A short, compelling description of the country (2-3 sentences)."),
    "visaInfo": _str("Visa requirements for Indian citizens, noting e-visa or visa on arrival."),
    "averageCost": _num("Estimated total cost in USD for a solo traveler on a 7-day trip."),
    "costBreakdown": COST_BREAKDOWN,
    "currencyInfo": CURRENCY_INFO,
}

COUNTRY_INFO = _obj(
    _COUNTRY_PROPERTIES,
    ["description", "visaInfo", "averageCost", "costBreakdown", "currencyInfo"],
)

DESTINATION_SUGGESTION = _obj(
    {
        "name": _str("The name of the country suggested."),
        "country": _str("The formal name of the country."),
        **_COUNTRY_PROPERTIES,
    },
    ["name", "country", "description", "visaInfo", "averageCost", "costBreakdown", "currencyInfo"],
)

SUGGESTIONS = _obj({SUGGESTIONS_KEY: _arr(DESTINATION_SUGGESTION)}, [SUGGESTIONS_KEY])

LINK = _obj({"title": _str(), "url": _str()}, ["title", "url"])

ACTIVITY = _obj(
    {
        "name": _str(),
        "description": _str(),
        "city": _str(),
        "type": _str(enum=["Touristy", "Off-beat"]),
        "links": _arr(LINK),
        "averageCost": _num(),
        "costBreakdown": COST_BREAKDOWN,
        "lat": _num(),
        "lng": _num(),
        "duration": _str("e.g. '2-3 hours'"),
        "visitingTip": _str("A concise, actionable tip, e.g. 'Book tickets online in advance'."),
    },
    ["name", "description", "city", "type", "links", "averageCost", "costBreakdown", "lat", "lng"],
)

TRANSPORT_OPTION = _obj(
    {
        "mode": _str("e.g. Train, Bus, Flight"),
        "duration": _str("e.g. '4 hours'"),
        "cost": _num("Estimated cost in USD"),
        "description": _str("Brief description of the option"),
    },
    ["mode", "duration", "cost"],
)

TRAVEL_LEG = _obj(
    {"fromCity": _str(), "toCity": _str(), "options": _arr(TRANSPORT_OPTION)},
    ["fromCity", "toCity", "options"],
)

KEEP_IN_MIND = _obj(
    {"type": _str(enum=["do", "dont", "warning", "info"]), "tip": _str()},
    ["type", "tip"],
)

DAY_PLAN = _obj(
    {
        "day": {"type": "integer"},
        "title": _str("A catchy title for the day's plan"),
        "activities": _arr(ACTIVITY),
        "keepInMind": _arr(KEEP_IN_MIND),
        "travelInfo": _arr(
            TRAVEL_LEG,
            "One entry when moving to another base city. Day trips MUST have two entries: "
            "the outbound journey and the return journey.",
        ),
        "userNotes": _str("The traveler's own note for this day; carry it over unchanged."),
        "weatherForecast": _str("Brief general forecast for the city on this day."),
    },
    ["day", "title", "activities", "keepInMind"],
)

CITY_ACCOMMODATION_COST = _obj(
    {
        "city": _str(),
        "estimatedCost": _num("Total estimated cost for all nights in this city"),
        "nights": {"type": "integer", "description": "Number of nights in this city"},
    },
    ["city", "estimatedCost", "nights"],
)

TRAVEL_PLAN = _obj(
    {
        "itinerary": _arr(DAY_PLAN),
        "optimizationSuggestions": _str("How to best execute the plan."),
        "officialLinks": _arr(LINK, "Official tourism websites, visa portals, etc."),
        "cityAccommodationCosts": _arr(CITY_ACCOMMODATION_COST),
    },
    ["itinerary", "optimizationSuggestions", "officialLinks", "cityAccommodationCosts"],
)

PACKING_LIST = _obj(
    {
        PACKING_CATEGORIES_KEY: _arr(
            _obj({"categoryName": _str(), "items": _arr(_str())}, ["categoryName", "items"])
        )
    },
    [PACKING_CATEGORIES_KEY],
)

SCHEMAS: dict[str, dict[str, Any]] = {
    SUGGESTIONS_SCHEMA_NAME: SUGGESTIONS,
    COUNTRY_INFO_SCHEMA_NAME: COUNTRY_INFO,
    TRAVEL_PLAN_SCHEMA_NAME: TRAVEL_PLAN,
    PACKING_LIST_SCHEMA_NAME: PACKING_LIST,
}
