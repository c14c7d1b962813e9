from fastapi import APIRouter, Depends, Query
from voyagehub.core.dependencies import get_optional_user, get_optional_user_supabase
from voyagehub.modules.destinations.schemas import Destination, DestinationSummary, DestinationDetail
from voyagehub.modules.destinations.service import DestinationService, get_destination_service
from voyagehub.modules.favorites.service import FavoriteService
from voyagehub.modules.places.service import PlacesService, get_places_service
from voyagehub.modules.trips.service import TripService
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/destinations", tags=["destinations"])


@router.get("", response_model=List[Destination])
async def list_destinations(
    country: Optional[str] = None,
    service: DestinationService = Depends(get_destination_service)
):
    """Full catalog, optionally for one country"""
    return service.list_destinations(country)


@router.get("/trending", response_model=List[DestinationSummary])
async def trending(
    limit: int = Query(15, ge=1, le=50),
    service: DestinationService = Depends(get_destination_service)
):
    """Ranked by rating x ln(1 + attractions)"""
    return service.trending(limit)


@router.get("/top-rated", response_model=List[DestinationSummary])
async def top_rated(
    limit: int = Query(10, ge=1, le=50),
    service: DestinationService = Depends(get_destination_service)
):
    return service.top_rated(limit)


@router.get("/recommended", response_model=List[DestinationSummary])
async def recommended(
    limit: int = Query(10, ge=1, le=50),
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: DestinationService = Depends(get_destination_service),
    supabase: Optional[Client] = Depends(get_optional_user_supabase)
):
    """Signed-in users get picks away from cities they already planned; guests get the top rated"""
    if not user_data or supabase is None:
        return service.top_rated(limit)
    past = TripService(supabase).past_destinations(user_data["id"])
    return service.recommended_for(past, limit)


@router.get("/{destination_id}", response_model=DestinationDetail)
async def get_destination(
    destination_id: int,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: DestinationService = Depends(get_destination_service),
    places: PlacesService = Depends(get_places_service),
    supabase: Optional[Client] = Depends(get_optional_user_supabase)
):
    """Destination with its Wikipedia description and, when signed in, whether it is a favorite"""
    destination = service.get_destination(destination_id)
    description = await places.get_city_description(destination.city, destination.description)
    is_favorite = False
    if user_data and supabase is not None:
        is_favorite = FavoriteService(supabase).is_favorite(user_data["id"], str(destination.id))
    return DestinationDetail(
        **destination.model_dump(),
        wiki_description=description.description,
        is_favorite=is_favorite,
    )
