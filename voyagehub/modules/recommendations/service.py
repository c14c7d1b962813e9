import logging
from typing import Any, List, Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

from voyagehub.core.exceptions import MalformedResponse, UpstreamError
from voyagehub.core.itinerary_client import ItineraryClient
from voyagehub.core.json_extract import extract_json_array, extract_json_object
from voyagehub.modules.destinations.service import DestinationService
from voyagehub.modules.recommendations import links
from voyagehub.modules.recommendations.schemas import (
    HotelRequest, FoodRequest, ActivitiesRequest, RecommendationRequest,
    Hotel, Restaurant, Activity, TransportOption,
    HotelList, RestaurantList, ActivityList, TransportPlan
)

logger = logging.getLogger(__name__)

HOTEL_TIERS = ["all", "budget", "midrange", "luxury"]
FOOD_TIERS = ["all", "affordable", "midrange", "finedining"]
DIETS = ["Both", "Veg", "Non-Veg"]

NETWORK_ERROR = "Network error — check backend"
LOAD_ERRORS = {
    "hotels": "Could not load hotels",
    "food": "Could not load restaurants",
    "activities": "Could not load activities",
    "transport": "Could not load transport info",
}

T = TypeVar("T", bound=BaseModel)


def _listify(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def coerce_items(raw_items: List[Any], model: Type[T]) -> List[T]:
    """Validate model-generated items, dropping the ones that do not fit."""
    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        raw = dict(raw)
        for field in ("highlights", "must_try"):
            if field in raw:
                raw[field] = [str(v) for v in _listify(raw[field])]
        try:
            items.append(model(**raw))
        except ValidationError as e:
            logger.debug(f"Dropping {model.__name__} item: {e.error_count()} validation errors")
    return items


def filter_hotels(hotels: List[Hotel], tier: str) -> List[Hotel]:
    if tier == "all":
        return hotels
    return [h for h in hotels if h.tier == tier]


def filter_restaurants(restaurants: List[Restaurant], tier: str, diet: str) -> List[Restaurant]:
    def keep(r: Restaurant) -> bool:
        tier_match = tier == "all" or r.tier == tier
        diet_match = diet == "Both" or r.dietary == diet or r.dietary == "Both"
        return tier_match and diet_match
    return [r for r in restaurants if keep(r)]


def activity_types(activities: List[Activity]) -> List[str]:
    """'All' followed by each distinct type in first-seen order."""
    types = ["All"]
    for a in activities:
        if a.type and a.type not in types:
            types.append(a.type)
    return types


def filter_activities(activities: List[Activity], activity_type: str) -> List[Activity]:
    if activity_type == "All":
        return activities
    return [a for a in activities if a.type == activity_type]


class RecommendationService:
    def __init__(self, client: ItineraryClient, catalog: DestinationService):
        self.client = client
        self.catalog = catalog

    async def _fetch(self, category: str, request: RecommendationRequest, send_members: bool) -> Any:
        """Raw 'data' text for a category. success=false and transport errors become 502s."""
        try:
            response = await self.client.recommendations(
                request.destination,
                category,
                request.budget,
                request.days,
                members=request.members if send_members else None,
            )
        except UpstreamError as e:
            logger.error(f"Recommendations ({category}) for {request.destination} failed: {e}")
            raise HTTPException(status_code=502, detail=NETWORK_ERROR)
        if not response.get("success"):
            logger.warning(f"Backend reported failure for {category} in {request.destination}")
            raise HTTPException(status_code=502, detail=LOAD_ERRORS[category])
        return response.get("data")

    async def _fetch_list(self, category: str, request: RecommendationRequest, send_members: bool = False) -> List[Any]:
        data = await self._fetch(category, request, send_members)
        try:
            return extract_json_array(data)
        except MalformedResponse:
            raise HTTPException(status_code=502, detail=LOAD_ERRORS[category])

    async def hotels(self, request: HotelRequest) -> HotelList:
        raw = await self._fetch_list("hotels", request)
        hotels = coerce_items(raw, Hotel)
        for h in hotels:
            h.links = links.hotel_links(h.name, request.destination)
        return HotelList(
            destination=request.destination,
            tier=request.tier,
            tiers=HOTEL_TIERS,
            items=filter_hotels(hotels, request.tier),
        )

    async def food(self, request: FoodRequest) -> RestaurantList:
        raw = await self._fetch_list("food", request, send_members=True)
        restaurants = coerce_items(raw, Restaurant)
        for r in restaurants:
            r.links = links.restaurant_links(r.name, request.destination)
        return RestaurantList(
            destination=request.destination,
            tier=request.tier,
            diet=request.diet,
            tiers=FOOD_TIERS,
            diets=DIETS,
            items=filter_restaurants(restaurants, request.tier, request.diet),
        )

    async def activities(self, request: ActivitiesRequest) -> ActivityList:
        """Catalog attractions when we have them, otherwise ask the backend."""
        city = self.catalog.find_by_city(request.destination)
        if city is not None and city.attractions:
            source = "catalog"
            activities = coerce_items([a.model_dump() for a in city.attractions], Activity)
        else:
            source = "ai"
            activities = coerce_items(await self._fetch_list("activities", request), Activity)
        for a in activities:
            a.links = links.activity_links(a.name, request.destination)
        return ActivityList(
            destination=request.destination,
            source=source,
            type=request.type,
            types=activity_types(activities),
            items=filter_activities(activities, request.type),
        )

    async def transport(self, request: RecommendationRequest) -> TransportPlan:
        data = await self._fetch("transport", request, send_members=True)
        try:
            raw = extract_json_object(data)
        except MalformedResponse:
            raise HTTPException(status_code=502, detail=LOAD_ERRORS["transport"])
        return TransportPlan(
            destination=request.destination,
            getting_there=self._options(raw.get("getting_there"), request.destination),
            getting_around=self._options(raw.get("getting_around"), request.destination),
            daily_budget=raw.get("daily_budget"),
            best_app=raw.get("best_app"),
        )

    @staticmethod
    def _options(raw: Optional[Any], destination: str) -> List[TransportOption]:
        options = coerce_items(_listify(raw), TransportOption)
        for option in options:
            option.link = links.provider_link(option.provider, destination, option.url)
        return options
