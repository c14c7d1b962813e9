import logging
import urllib.parse
from typing import Any, Dict, List, Optional

import httpx

from voyagehub.config import settings
from voyagehub.core.throttle import RequestThrottle
from voyagehub.modules.places.schemas import PlaceResult, Coordinates, CityDescription

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MIN_EXTRACT_LENGTH = 50  # shorter Wikipedia extracts are usually disambiguation stubs

# Shared by every PlacesService so the whole process stays within Nominatim's limit
nominatim_throttle = RequestThrottle(settings.nominatim_min_interval)


def _locality(address: Dict[str, Any]) -> Optional[str]:
    return address.get("city") or address.get("town") or address.get("village")


def format_place(place: Dict[str, Any]) -> PlaceResult:
    """Map a Nominatim search hit to the shape the app renders."""
    address = place.get("address") or {}
    full_name = place.get("display_name") or ""
    label = address.get("city") or address.get("town") or place.get("name") or full_name.split(",")[0].strip()
    country = address.get("country")
    return PlaceResult(
        name=full_name,
        city=_locality(address),
        country=country,
        lat=float(place["lat"]),
        lon=float(place["lon"]),
        display_name=f"{label}, {country}" if country else label,
    )


class PlacesService:
    def __init__(
        self,
        nominatim_url: str,
        wikipedia_url: str,
        user_agent: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        throttle: Optional[RequestThrottle] = None,
    ):
        self.nominatim_url = nominatim_url.rstrip("/")
        self.wikipedia_url = wikipedia_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport
        self._throttle = throttle or nominatim_throttle

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def _nominatim(self, path: str, params: Dict[str, Any]) -> Any:
        await self._throttle.wait()
        async with self._client() as client:
            response = await client.get(f"{self.nominatim_url}/{path}", params=params)
            response.raise_for_status()
            return response.json()

    async def search_places(self, query: Optional[str], limit: int = 5) -> List[PlaceResult]:
        """Free-text place search. Never raises: the app just shows no suggestions."""
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return []
        try:
            data = await self._nominatim("search", {
                "q": query.strip(),
                "format": "json",
                "limit": limit,
                "addressdetails": 1,
            })
            results = []
            for place in data or []:
                try:
                    results.append(format_place(place))
                except (KeyError, TypeError, ValueError) as e:
                    logger.debug(f"Skipping malformed Nominatim hit: {e}")
            return results
        except Exception as e:
            logger.error(f"Nominatim search error: {e}")
            return []

    async def reverse_lookup(self, lat: float, lon: float) -> Optional[PlaceResult]:
        try:
            data = await self._nominatim("reverse", {
                "lat": lat,
                "lon": lon,
                "format": "json",
                "addressdetails": 1,
            })
            if not data or "error" in data:
                return None
            return format_place(data)
        except Exception as e:
            logger.error(f"Nominatim reverse lookup error: {e}")
            return None

    async def geocode(self, query: str) -> Optional[Coordinates]:
        """Coordinates of the best match, or None."""
        try:
            data = await self._nominatim("search", {"q": query, "format": "json", "limit": 1})
            if not data:
                return None
            return Coordinates(latitude=float(data[0]["lat"]), longitude=float(data[0]["lon"]))
        except Exception as e:
            logger.error(f"Nominatim geocode error for {query!r}: {e}")
            return None

    async def geocode_attraction(self, city: str, country: str, attraction: str) -> Optional[Coordinates]:
        return await self.geocode(f"{attraction}, {city}, {country}")

    async def get_city_description(self, city: str, fallback: Optional[str] = None) -> CityDescription:
        """Wikipedia summary for the city, or the catalog text when Wikipedia has nothing useful."""
        title = urllib.parse.quote(city.strip().replace(" ", "_"), safe="")
        try:
            async with self._client() as client:
                response = await client.get(f"{self.wikipedia_url}/{title}")
                data = response.json()
            extract = data.get("extract") if isinstance(data, dict) else None
            if extract and len(extract) > MIN_EXTRACT_LENGTH:
                return CityDescription(city=city, description=extract, source="wikipedia")
        except Exception as e:
            logger.warning(f"Wikipedia lookup failed for {city}: {e}")
        return CityDescription(city=city, description=fallback, source="fallback")


def get_places_service() -> PlacesService:
    return PlacesService(
        settings.nominatim_url,
        settings.wikipedia_summary_url,
        settings.user_agent,
        timeout=settings.http_timeout,
    )
