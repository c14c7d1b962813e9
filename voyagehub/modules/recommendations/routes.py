from fastapi import APIRouter, Depends
from voyagehub.core.itinerary_client import ItineraryClient, get_itinerary_client
from voyagehub.modules.destinations.service import DestinationService, get_destination_service
from voyagehub.modules.recommendations.schemas import (
    RecommendationRequest, HotelRequest, FoodRequest, ActivitiesRequest,
    HotelList, RestaurantList, ActivityList, TransportPlan
)
from voyagehub.modules.recommendations.service import RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def get_recommendation_service(
    client: ItineraryClient = Depends(get_itinerary_client),
    catalog: DestinationService = Depends(get_destination_service)
) -> RecommendationService:
    return RecommendationService(client, catalog)


@router.post("/hotels", response_model=HotelList)
async def hotels(
    request: HotelRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Hotels bucketed by tier (budget / midrange / luxury)"""
    return await service.hotels(request)


@router.post("/food", response_model=RestaurantList)
async def food(
    request: FoodRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Restaurants, filterable by tier and diet"""
    return await service.food(request)


@router.post("/activities", response_model=ActivityList)
async def activities(
    request: ActivitiesRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Things to do. Catalog cities answer locally; others go to the backend"""
    return await service.activities(request)


@router.post("/transport", response_model=TransportPlan)
async def transport(
    request: RecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Getting there and getting around"""
    return await service.transport(request)
