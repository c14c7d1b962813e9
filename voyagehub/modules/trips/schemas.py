from pydantic import BaseModel, Field
from typing import Optional, List, Any, Union, Dict
from datetime import datetime


class TripCreate(BaseModel):
    destination: str = Field(..., min_length=1)
    days: int = Field(..., ge=1)
    itinerary: Any
    budget: Optional[int] = Field(None, ge=0)
    num_people: Optional[int] = Field(None, ge=1, le=20)
    group_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class TripResponse(BaseModel):
    id: Union[int, str]
    user_id: Optional[str] = None
    destination: str
    days: int
    itinerary: Any = None
    budget: Optional[int] = None
    num_people: Optional[int] = None
    group_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Slot(BaseModel):
    activity: Optional[str] = None
    description: Optional[str] = None
    cost: Any = None
    is_free: bool = True


class DayPlan(BaseModel):
    day_number: int
    morning: Optional[Slot] = None
    afternoon: Optional[Slot] = None
    evening: Optional[Slot] = None


class TripDetailResponse(TripResponse):
    day_plans: List[DayPlan] = []
    share_message: str
    maps_url: str
    # what each detail screen (hotels/food/activities/transport) is called with
    category_request: Dict[str, Any]


class CountResponse(BaseModel):
    count: int
