"""
Client for the LLM-backed itinerary backend.

Endpoints:
- POST /generate-trip     -> {"itinerary": ...}
- POST /recommendations   -> {"success": bool, "data": "<model text>"}
- GET  /api/health        -> backend status payload

Single-shot calls: no retries. Failures are logged and raised as UpstreamError.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from voyagehub.config import settings
from voyagehub.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

SERVICE_NAME = "itinerary-backend"


class ItineraryClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {path} failed with status {e.response.status_code}")
            raise UpstreamError(SERVICE_NAME, f"{path} returned {e.response.status_code}", e.response.status_code)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise UpstreamError(SERVICE_NAME, f"{path} unreachable: {e}")
        except ValueError as e:
            logger.error(f"{method} {path} returned non-JSON body: {e}")
            raise UpstreamError(SERVICE_NAME, f"{path} returned invalid JSON")

    async def generate_trip(
        self,
        destination: str,
        days: int,
        interests: List[str],
        num_people: int,
        budget: int,
    ) -> Dict[str, Any]:
        """Ask the backend for a day-by-day itinerary. Budget is total USD."""
        logger.info(f"Generating {days}-day itinerary for {destination} ({num_people} people, ${budget})")
        data = await self._request("POST", "/generate-trip", {
            "destination": destination,
            "days": days,
            "interests": interests,
            "numPeople": num_people,
            "budget": budget,
        })
        if not isinstance(data, dict) or "itinerary" not in data:
            raise UpstreamError(SERVICE_NAME, "/generate-trip response has no itinerary")
        return data

    async def recommendations(
        self,
        destination: str,
        category: str,
        budget: int,
        days: int,
        members: Optional[int] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "destination": destination,
            "type": category,
            "budget": budget,
            "days": days,
        }
        if members is not None:
            payload["members"] = members
        data = await self._request("POST", "/recommendations", payload)
        if not isinstance(data, dict):
            raise UpstreamError(SERVICE_NAME, "/recommendations response is not an object")
        return data

    async def health(self) -> Any:
        return await self._request("GET", "/api/health")


def get_itinerary_client() -> ItineraryClient:
    return ItineraryClient(settings.itinerary_api_url, timeout=settings.http_timeout)
