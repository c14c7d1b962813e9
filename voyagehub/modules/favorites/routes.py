from fastapi import APIRouter, Depends, HTTPException
from voyagehub.modules.favorites.schemas import (
    FavoriteCreate, FavoriteResponse, FavoriteStatus, CountResponse
)
from voyagehub.modules.favorites.service import FavoriteService
from voyagehub.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/favorites", tags=["favorites"])


def get_favorite_service(supabase: Client = Depends(get_user_supabase)) -> FavoriteService:
    return FavoriteService(supabase)


@router.get("", response_model=List[FavoriteResponse])
async def list_favorites(
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """List the current user's saved destinations, newest first"""
    return service.list_favorites(user_data["id"])


@router.post("", response_model=FavoriteResponse, status_code=201)
async def add_favorite(
    favorite_data: FavoriteCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Save a destination"""
    return service.add_favorite(user_data["id"], favorite_data)


@router.get("/count", response_model=CountResponse)
async def count_favorites(
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    return CountResponse(count=service.count_favorites(user_data["id"]))


@router.get("/{destination_id}", response_model=FavoriteStatus)
async def favorite_status(
    destination_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Whether the destination is saved (drives the heart icon)"""
    return FavoriteStatus(
        destination_id=destination_id,
        is_favorite=service.is_favorite(user_data["id"], destination_id)
    )


@router.delete("/{destination_id}", status_code=204)
async def remove_favorite(
    destination_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Remove a saved destination"""
    if not service.remove_favorite(user_data["id"], destination_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return None
