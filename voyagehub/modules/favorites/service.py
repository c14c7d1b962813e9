import logging
from supabase import Client
from voyagehub.modules.favorites.schemas import FavoriteCreate, FavoriteResponse
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

TABLE = "favorites"


class FavoriteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def add_favorite(self, user_id: str, favorite_data: FavoriteCreate) -> FavoriteResponse:
        """Save a destination for the user"""
        try:
            result = self.supabase.table(TABLE).insert({
                "user_id": user_id,
                "destination_id": favorite_data.destination_id,
                "destination_name": favorite_data.destination_name
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add favorite")

            return FavoriteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding favorite: {e}")
            if "duplicate" in str(e).lower():
                raise HTTPException(status_code=409, detail="Destination is already a favorite")
            raise HTTPException(status_code=500, detail=str(e))

    def remove_favorite(self, user_id: str, destination_id: str) -> bool:
        """Remove a destination from the user's favorites"""
        try:
            result = self.supabase.table(TABLE)\
                .delete()\
                .eq("user_id", user_id)\
                .eq("destination_id", destination_id)\
                .execute()

            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Error removing favorite: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_favorites(self, user_id: str) -> List[FavoriteResponse]:
        """Newest first. Errors yield an empty list so the profile screen still renders."""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()

            return [FavoriteResponse(**fav) for fav in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching favorites: {e}")
            return []

    def count_favorites(self, user_id: str) -> int:
        try:
            result = self.supabase.table(TABLE)\
                .select("id", count="exact", head=True)\
                .eq("user_id", user_id)\
                .execute()

            return result.count or 0
        except Exception as e:
            logger.error(f"Error fetching favorite count: {e}")
            return 0

    def is_favorite(self, user_id: str, destination_id: str) -> bool:
        return any(f.destination_id == destination_id for f in self.list_favorites(user_id))
