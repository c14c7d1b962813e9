from pydantic import BaseModel, Field
from typing import Optional, List, Any, Union, Literal
from datetime import date

from voyagehub.modules.places.schemas import Coordinates
from voyagehub.modules.destinations.schemas import Destination


GroupType = Literal["Solo", "Couple", "Family", "Friends"]


class CurrencyResponse(BaseModel):
    code: str
    symbol: str
    label: str
    rate: float


class TierResponse(BaseModel):
    key: str
    label: str
    ppd: int


class QuoteRequest(BaseModel):
    start_date: date
    end_date: date
    members: int = Field(1, ge=1, le=20)
    budget: Union[int, str, None] = None  # as typed, in the selected currency
    currency: str = "USD"


class QuoteResponse(BaseModel):
    days: int
    members: int
    currency: str
    budget_usd: int
    minimum_budget: int
    is_tight: bool
    tier: Optional[TierResponse] = None
    category_budget: int
    budget_error: Optional[str] = None


class GenerateRequest(QuoteRequest):
    destination: str = ""
    interests: Union[str, List[str]] = ""
    group_type: GroupType = "Solo"
    coordinates: Optional[Coordinates] = None
    allow_tight_budget: bool = False  # user confirmed the "Budget Too Low" prompt
    save: bool = False


class GenerateResponse(BaseModel):
    itinerary: Any
    destination: str
    days: int
    budget: int
    start_date: str
    end_date: str
    coordinates: Optional[Coordinates] = None
    group_type: str
    members: int
    interests: List[str]
    tier: Optional[TierResponse] = None
    city: Optional[Destination] = None
    trip_id: Optional[Union[int, str]] = None


class PlannerErrorResponse(BaseModel):
    title: str
    message: str
    minimum_budget: Optional[int] = None
    budget_usd: Optional[int] = None
