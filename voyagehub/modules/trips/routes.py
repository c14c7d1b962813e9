from fastapi import APIRouter, Depends, HTTPException
from voyagehub.modules.trips.schemas import (
    TripCreate, TripResponse, TripDetailResponse, CountResponse
)
from voyagehub.modules.trips.service import TripService
from voyagehub.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_service(supabase: Client = Depends(get_user_supabase)) -> TripService:
    return TripService(supabase)


@router.get("", response_model=List[TripResponse])
async def list_trips(
    sort: str = "all",
    user_data: Dict = Depends(get_current_user_id),
    service: TripService = Depends(get_trip_service)
):
    """List the current user's trips. sort: all | recent | oldest"""
    return service.list_trips(user_data["id"], sort=sort)


@router.post("", response_model=TripResponse, status_code=201)
async def save_trip(
    trip_data: TripCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TripService = Depends(get_trip_service)
):
    """Save a generated itinerary"""
    return service.save_trip(user_data["id"], trip_data)


@router.get("/count", response_model=CountResponse)
async def count_trips(
    user_data: Dict = Depends(get_current_user_id),
    service: TripService = Depends(get_trip_service)
):
    return CountResponse(count=service.count_trips(user_data["id"]))


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TripService = Depends(get_trip_service)
):
    """Trip with its day-by-day plan"""
    return service.get_trip_detail(user_data["id"], trip_id)


@router.delete("/{trip_id}", status_code=204)
async def delete_trip(
    trip_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TripService = Depends(get_trip_service)
):
    """Remove a trip from the collection"""
    if not service.delete_trip(user_data["id"], trip_id):
        raise HTTPException(status_code=404, detail="Trip not found")
    return None
