from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class Attraction(BaseModel):
    name: str
    type: Optional[str] = None
    rating: Optional[float] = None
    description: Optional[str] = None
    isUNESCO: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = ConfigDict(extra="allow")


class Destination(BaseModel):
    id: int
    city: str
    country: str
    description: Optional[str] = None
    rating: float = 0
    totalAttractions: int = 0
    attractions: List[Attraction] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class DestinationSummary(BaseModel):
    id: int
    city: str
    country: str
    rating: float
    totalAttractions: int
    popularity_score: Optional[float] = None


class DestinationDetail(Destination):
    wiki_description: Optional[str] = None
    is_favorite: bool = False
