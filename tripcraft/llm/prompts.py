"""Prompt builders for each oracle request kind."""

import json

from tripcraft.models.common import ItineraryStyle
from tripcraft.models.plan import DayPlan
from tripcraft.planning.tracker import split_fingerprint

SYSTEM_PROMPT = (
    "You are an expert travel agent planning trips for travelers from India. "
    "Always answer with a single JSON document matching the requested schema. "
    "All costs are in USD."
)

_COUNTRY_FIELDS = """For each country, provide:
1. The country name.
2. A short, compelling description (2-3 sentences).
3. A summary of visa requirements for Indian citizens (mention e-visa/visa on arrival).
4. An estimated average cost in USD for a solo traveler for a 7-day trip.
5. A simple cost breakdown (Accommodation, Food, Activities) for that 7-day trip, in USD.
6. Currency information: the local 3-letter currency code, the currency symbol, an approximate
   conversion rate from 1 USD to the local currency, and from 1 USD to Indian Rupees (INR).
Ensure all fields are filled."""

_ACTIVITY_LINKS = (
    "For each activity, find links by simulating a Google search for the activity's name. "
    "Provide up to 3 of the top results. You MUST exclude Wikipedia links. Prioritize "
    "official websites, ticket vendors, and reputable travel guides."
)

_TRAVEL_INFO_RULE = (
    "For days that change the base city (e.g. Rome to Florence) 'travelInfo' holds a single "
    "entry. For day trips (e.g. Florence to Pisa and back the same day) it MUST hold two "
    "entries: the outbound journey and the return journey."
)


def build_suggestions_prompt(budget: str, season: str, continent: str) -> str:
    """Prompt for 5-7 destination countries matching the traveler's preferences."""
    return f"""Suggest 5-7 diverse countries for a traveler from India with these preferences:
- Budget: {budget}
- Time of Year: {season}
- Continent: {continent}

{_COUNTRY_FIELDS}"""


def build_offbeat_suggestions_prompt() -> str:
    """Prompt for hidden-gem destination countries."""
    return f"""Suggest 5-7 unique, off-the-beaten-path countries that suit adventurous travelers
from India. Avoid overly common tourist destinations and highlight each country's unique appeal.

{_COUNTRY_FIELDS}"""


def build_country_info_prompt(country: str) -> str:
    """Prompt for a direct lookup of one country."""
    return f"""For the country "{country}", provide:
1. A short, compelling description of why it's a good travel destination (2-3 sentences).
2. A summary of visa requirements for Indian citizens, stating whether an e-visa or visa on
   arrival is available.
3. An estimated average cost in USD for a solo traveler for a 7-day trip.
4. A simple cost breakdown (Accommodation, Food, Activities) for that 7-day trip, in USD.
5. Currency information: the local 3-letter currency code, the currency symbol, an approximate
   conversion rate from 1 USD to the local currency, and from 1 USD to Indian Rupees (INR)."""


def _plan_requirements() -> str:
    return f"""The plan must include:
1. A day-by-day itinerary. Give each day a brief, general 'weatherForecast' for the time of year.
   For each activity: name, city, short description, whether it is 'Touristy' or 'Off-beat',
   lat/lng coordinates, estimated duration (e.g. "2-3 hours"), a 'visitingTip', and an
   estimated cost in USD with a breakdown. {_ACTIVITY_LINKS}
2. 'travelInfo' for inter-city travel. {_TRAVEL_INFO_RULE}
3. 2-3 'keepInMind' tips per day (dos, don'ts, warnings, info).
4. 'officialLinks' (official tourism board, visa information).
5. 'cityAccommodationCosts' for each city visited, with nights and total cost.
6. A concise 'optimizationSuggestions' paragraph on how to best execute the plan."""


def build_travel_plan_prompt(
    destination: str, duration: int, style: ItineraryStyle, notes: str
) -> str:
    """Prompt for a plan of fixed duration."""
    return f"""Create a detailed {duration}-day travel itinerary for {destination}.
Traveler preferences:
- Style: {style.value}
- Notes: {notes or 'None'}

{_plan_requirements()}"""


def build_comprehensive_plan_prompt(destination: str, style: ItineraryStyle, notes: str) -> str:
    """Prompt for a full-country tour whose duration the oracle decides."""
    return f"""Create a comprehensive, full-country tour itinerary for {destination}. Decide the
optimal duration yourself (between 7 and 14 days) to cover the main highlights without rushing.
Traveler preferences:
- Style: {style.value}
- Notes: {notes or 'None'}

{_plan_requirements()}"""


def format_exclusion_list(exclusions: list[str]) -> str:
    """Render deletion fingerprints (``name|city``) as a directive block.

    Returns an empty string when there is nothing to exclude.
    """
    if not exclusions:
        return ""
    entries = []
    for item in exclusions:
        name, city = split_fingerprint(item)
        entries.append(f"- {name} in {city}")
    lines = "\n".join(entries)
    return f"""IMPORTANT EXCLUSION LIST:
The user has previously deleted the following activities. You MUST NOT include these
activities or any very similar ones in the new plan under any circumstances:
{lines}

If you cannot find enough new, unique activities after respecting this exclusion list, you MUST
say so clearly in 'optimizationSuggestions', for example: "I have included all available
relevant activities and there are no more unique suggestions for this destination based on
your criteria."
"""


def build_rebuild_prompt(
    destination: str,
    duration: int,
    style: ItineraryStyle,
    days: list[DayPlan],
    instruction: str,
    exclusions: list[str],
) -> str:
    """Prompt asking the oracle to revise the current plan."""
    current_plan = json.dumps([day.to_wire() for day in days], indent=2)
    return f"""You are refining an existing plan.
Destination: {destination}
Duration: {duration} days
Style: {style.value}

Here is the current plan the user wants to modify:
{current_plan}

Here are the user's refinement notes:
"{instruction}"

{format_exclusion_list(exclusions)}
Modify the plan based on the notes. You may add, remove, or reorder activities, or change cities
if requested. Every new activity needs all schema fields including a concise 'visitingTip'.
{_ACTIVITY_LINKS} Keep the plan coherent and within the duration. Every day needs a general
'weatherForecast'.

CRITICAL: Preserve the 'userNotes' field of each day. When you modify a day, carry its existing
'userNotes' over unless the user explicitly asks to change them. {_TRAVEL_INFO_RULE}

Return the complete updated plan, including itinerary, optimizationSuggestions, officialLinks and
cityAccommodationCosts."""


def build_packing_list_prompt(destination: str, duration: int, activity_names: list[str]) -> str:
    """Prompt for a categorized packing list."""
    return f"""Create a detailed packing list for a {duration}-day trip to {destination}.
The traveler will be doing the following activities: {', '.join(activity_names)}.
Group the items into logical categories (e.g. 'Clothing', 'Toiletries', 'Documents',
'Electronics', 'Miscellaneous'). Be specific and practical."""
