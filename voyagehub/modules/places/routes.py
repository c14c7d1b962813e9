from fastapi import APIRouter, Depends, HTTPException, Query
from voyagehub.modules.places.schemas import PlaceResult, CityDescription
from voyagehub.modules.places.service import PlacesService, get_places_service
from voyagehub.modules.destinations.service import DestinationService, get_destination_service
from typing import List

router = APIRouter(prefix="/places", tags=["places"])


@router.get("/search", response_model=List[PlaceResult])
async def search_places(
    q: str = Query("", description="Free-text place name"),
    limit: int = Query(5, ge=1, le=10),
    service: PlacesService = Depends(get_places_service)
):
    """Autocomplete suggestions for the destination field"""
    return await service.search_places(q, limit=limit)


@router.get("/reverse", response_model=PlaceResult)
async def reverse_lookup(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    service: PlacesService = Depends(get_places_service)
):
    """Nearest named place for a coordinate pair"""
    place = await service.reverse_lookup(lat, lon)
    if place is None:
        raise HTTPException(status_code=404, detail="No place found at these coordinates")
    return place


@router.get("/description", response_model=CityDescription)
async def city_description(
    city: str = Query(..., min_length=1),
    service: PlacesService = Depends(get_places_service),
    catalog: DestinationService = Depends(get_destination_service)
):
    """Short description of a city (Wikipedia, falling back to the catalog text)"""
    destination = catalog.find_by_city(city)
    fallback = destination.description if destination else None
    return await service.get_city_description(city, fallback)
