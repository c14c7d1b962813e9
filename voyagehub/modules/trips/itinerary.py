import logging
from typing import Any, List, Optional

from voyagehub.core.exceptions import MalformedResponse
from voyagehub.core.json_extract import extract_json_array
from voyagehub.modules.trips.schemas import DayPlan, Slot

logger = logging.getLogger(__name__)

SLOTS = ("morning", "afternoon", "evening")
FREE_COSTS = {"", "0", "$0", "free"}


def is_free_cost(cost: Any) -> bool:
    if cost is None or cost == 0:
        return True
    return str(cost).strip().lower() in FREE_COSTS


def _text(value: Any) -> Optional[str]:
    """Model output is loose: nested objects collapse to their name, anything else to str."""
    if value is None:
        return None
    if isinstance(value, dict):
        for key in ("name", "title", "activity"):
            if isinstance(value.get(key), str):
                return value[key]
    return str(value)


def _slot(raw: Any) -> Slot:
    if not isinstance(raw, dict):
        return Slot(activity=_text(raw))
    cost = raw.get("cost")
    return Slot(
        activity=_text(raw.get("activity")),
        description=_text(raw.get("description")),
        cost=cost,
        is_free=is_free_cost(cost),
    )


def parse_day_plans(itinerary: Any) -> List[DayPlan]:
    """Day-by-day plan from a stored itinerary. Unreadable itineraries give an empty plan."""
    if itinerary is None:
        return []
    try:
        days = extract_json_array(itinerary)
    except MalformedResponse:
        logger.info("Stored itinerary has no readable day plan")
        return []

    plans = []
    for index, day in enumerate(days, start=1):
        if not isinstance(day, dict):
            continue
        try:
            day_number = int(day.get("day_number") or day.get("day") or index)
        except (TypeError, ValueError):
            day_number = index
        slots = {name: _slot(day[name]) for name in SLOTS if day.get(name)}
        plans.append(DayPlan(day_number=day_number, **slots))
    return plans
