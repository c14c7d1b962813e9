import logging
import urllib.parse
from supabase import Client
from voyagehub.modules.trips.schemas import TripCreate, TripResponse, TripDetailResponse
from voyagehub.modules.trips.itinerary import parse_day_plans
from voyagehub.modules.planner.budget import category_budget
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

TABLE = "Trips"
DEFAULT_BUDGET = 1000
SORT_ORDERS = ("all", "recent", "oldest")


def share_message(trip: TripResponse) -> str:
    return f"Check out my {trip.days}-day trip to {trip.destination}!"


def maps_url(destination: str) -> str:
    return "https://www.google.com/maps/search/?api=1&query=" + urllib.parse.quote(destination, safe="")


class TripService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def save_trip(self, user_id: str, trip_data: TripCreate) -> TripResponse:
        """Store a generated itinerary for the user"""
        try:
            result = self.supabase.table(TABLE).insert({
                "user_id": user_id,
                **trip_data.model_dump(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save trip")

            logger.info(f"Saved {trip_data.days}-day trip to {trip_data.destination} for user {user_id}")
            return TripResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving trip: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_trips(self, user_id: str, sort: str = "all") -> List[TripResponse]:
        """Newest first ("all"/"recent") or oldest first. Errors yield an empty list."""
        if sort not in SORT_ORDERS:
            raise HTTPException(status_code=400, detail=f"sort must be one of {', '.join(SORT_ORDERS)}")
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=(sort != "oldest"))\
                .execute()

            return [TripResponse(**trip) for trip in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching trips: {e}")
            return []

    def get_trip(self, user_id: str, trip_id: str) -> TripResponse:
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("id", trip_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching trip {trip_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Trip not found")
        return TripResponse(**result.data[0])

    def get_trip_detail(self, user_id: str, trip_id: str) -> TripDetailResponse:
        """Trip with its itinerary broken into day plans and the per-category request parameters"""
        trip = self.get_trip(user_id, trip_id)
        budget = trip.budget or DEFAULT_BUDGET
        return TripDetailResponse(
            **trip.model_dump(),
            day_plans=parse_day_plans(trip.itinerary),
            share_message=share_message(trip),
            maps_url=maps_url(trip.destination),
            category_request={
                "destination": trip.destination,
                "budget": category_budget(budget),
                "days": trip.days,
                "members": trip.num_people or 1,
            },
        )

    def delete_trip(self, user_id: str, trip_id: str) -> bool:
        try:
            result = self.supabase.table(TABLE)\
                .delete()\
                .eq("id", trip_id)\
                .eq("user_id", user_id)\
                .execute()

            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Error deleting trip: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def count_trips(self, user_id: str) -> int:
        try:
            result = self.supabase.table(TABLE)\
                .select("id", count="exact", head=True)\
                .eq("user_id", user_id)\
                .execute()

            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting trips: {e}")
            return 0

    def past_destinations(self, user_id: str) -> List[str]:
        return [t.destination for t in self.list_trips(user_id)]
