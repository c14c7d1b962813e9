from pydantic import BaseModel
from typing import Optional


class PlaceResult(BaseModel):
    name: str
    city: Optional[str] = None
    country: Optional[str] = None
    lat: float
    lon: float
    display_name: str


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class CityDescription(BaseModel):
    city: str
    description: Optional[str] = None
    source: str  # "wikipedia" | "fallback"
