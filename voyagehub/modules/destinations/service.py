import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import HTTPException

from voyagehub.config import settings
from voyagehub.modules.destinations.schemas import Destination, DestinationSummary

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / "destinations.json"


def popularity_score(destination: Destination) -> float:
    return destination.rating * math.log(1 + (destination.totalAttractions or 1))


def load_catalog(path: Path) -> List[Destination]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    destinations = [Destination(**d) for d in raw]
    logger.info(f"Loaded {len(destinations)} destinations from {path}")
    return destinations


class DestinationService:
    def __init__(self, destinations: List[Destination]):
        self.destinations = destinations

    def list_destinations(self, country: Optional[str] = None) -> List[Destination]:
        if not country:
            return list(self.destinations)
        country = country.strip().lower()
        return [d for d in self.destinations if d.country.lower() == country]

    def get_destination(self, destination_id: int) -> Destination:
        for d in self.destinations:
            if d.id == destination_id:
                return d
        raise HTTPException(status_code=404, detail="Destination not found")

    def find_by_city(self, city: Optional[str]) -> Optional[Destination]:
        """Exact, case-insensitive city match. A display name like 'Paris, France' also matches."""
        if not city:
            return None
        needle = city.strip().lower()
        head = needle.split(",")[0].strip()
        for d in self.destinations:
            name = d.city.lower()
            if name == needle or name == head:
                return d
        return None

    def trending(self, limit: int = 15) -> List[DestinationSummary]:
        scored = sorted(self.destinations, key=popularity_score, reverse=True)
        return [self._summary(d, popularity_score(d)) for d in scored[:limit]]

    def top_rated(self, limit: int = 10) -> List[DestinationSummary]:
        ranked = sorted(self.destinations, key=lambda d: d.rating, reverse=True)
        return [self._summary(d) for d in ranked[:limit]]

    def recommended_for(self, past_destinations: Iterable[str], limit: int = 10) -> List[DestinationSummary]:
        """Trending picks below the top five, skipping cities the user already planned."""
        visited = {p.split(",")[0].strip().lower() for p in past_destinations if p}
        pool = self.trending(limit=len(self.destinations))[5:]
        picks = [d for d in pool if d.city.lower() not in visited]
        if not picks:
            picks = [d for d in self.trending(limit=len(self.destinations)) if d.city.lower() not in visited]
        return picks[:limit]

    @staticmethod
    def _summary(d: Destination, score: Optional[float] = None) -> DestinationSummary:
        return DestinationSummary(
            id=d.id,
            city=d.city,
            country=d.country,
            rating=d.rating,
            totalAttractions=d.totalAttractions,
            popularity_score=round(score, 4) if score is not None else None,
        )


@lru_cache(maxsize=1)
def _cached_service() -> DestinationService:
    path = Path(settings.destinations_path) if settings.destinations_path else DEFAULT_CATALOG_PATH
    return DestinationService(load_catalog(path))


def get_destination_service() -> DestinationService:
    return _cached_service()
