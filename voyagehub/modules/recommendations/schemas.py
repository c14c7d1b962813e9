from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any, Dict, Literal


HotelTier = Literal["all", "budget", "midrange", "luxury"]
FoodTier = Literal["all", "affordable", "midrange", "finedining"]
Diet = Literal["Both", "Veg", "Non-Veg"]


class RecommendationRequest(BaseModel):
    destination: str = Field(..., min_length=1)
    budget: int = Field(0, ge=0)  # category share of the trip budget, USD
    days: int = Field(1, ge=1)
    members: int = Field(1, ge=1, le=20)


class HotelRequest(RecommendationRequest):
    tier: HotelTier = "all"


class FoodRequest(RecommendationRequest):
    tier: FoodTier = "all"
    diet: Diet = "Both"


class ActivitiesRequest(RecommendationRequest):
    type: str = "All"


class _Item(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    description: Optional[str] = None
    rating: Any = None
    links: Dict[str, str] = Field(default_factory=dict)


class Hotel(_Item):
    tier: Optional[str] = None
    type: Optional[str] = None
    price_per_night: Any = None
    area: Optional[str] = None
    highlights: List[str] = Field(default_factory=list)


class Restaurant(_Item):
    tier: Optional[str] = None
    cuisine: Optional[str] = None
    dietary: Optional[str] = None
    price_per_meal: Any = None
    area: Optional[str] = None
    must_try: List[str] = Field(default_factory=list)


class Activity(_Item):
    type: Optional[str] = None
    isUNESCO: Optional[bool] = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class TransportOption(BaseModel):
    model_config = ConfigDict(extra="allow")

    provider: Optional[str] = None
    type: Optional[str] = None
    price_range: Optional[str] = None
    duration: Optional[str] = None
    cost: Any = None
    description: Optional[str] = None
    tip: Optional[str] = None
    url: Optional[str] = None
    link: Optional[str] = None


class HotelList(BaseModel):
    destination: str
    tier: str
    tiers: List[str]
    items: List[Hotel]


class RestaurantList(BaseModel):
    destination: str
    tier: str
    diet: str
    tiers: List[str]
    diets: List[str]
    items: List[Restaurant]


class ActivityList(BaseModel):
    destination: str
    source: Literal["catalog", "ai"]
    type: str
    types: List[str]
    items: List[Activity]


class TransportPlan(BaseModel):
    destination: str
    getting_there: List[TransportOption] = Field(default_factory=list)
    getting_around: List[TransportOption] = Field(default_factory=list)
    daily_budget: Any = None
    best_app: Any = None
