import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from voyagehub.core.exceptions import UpstreamError
from voyagehub.core.itinerary_client import ItineraryClient
from voyagehub.modules.destinations.service import DestinationService
from voyagehub.modules.places.service import PlacesService
from voyagehub.modules.planner import budget as b
from voyagehub.modules.planner.schemas import (
    QuoteRequest, QuoteResponse, GenerateRequest, GenerateResponse, TierResponse
)
from voyagehub.modules.trips.schemas import TripCreate
from voyagehub.modules.trips.service import TripService

logger = logging.getLogger(__name__)

GENERATE_FAILED = "Failed to generate itinerary. Check if backend is running."


def _tier(tier: Optional[b.BudgetTier]) -> Optional[TierResponse]:
    if tier is None:
        return None
    return TierResponse(key=tier.key, label=tier.label, ppd=tier.ppd)


class PlannerService:
    def __init__(
        self,
        client: ItineraryClient,
        places: PlacesService,
        catalog: DestinationService,
        trips: Optional[TripService] = None,
    ):
        self.client = client
        self.places = places
        self.catalog = catalog
        self.trips = trips

    def quote(self, request: QuoteRequest) -> QuoteResponse:
        """Live budget summary for the planner form. Budget problems are reported, not raised."""
        currency = b.get_currency(request.currency)
        b.validate_date_range(request.start_date, request.end_date)
        days = b.calculate_days(request.start_date, request.end_date)
        members = b.clamp_members(request.members)

        budget_error = None
        try:
            b.validate_budget(request.budget)
        except b.InvalidBudget as e:
            budget_error = e.message

        budget_usd = b.convert_to_usd(request.budget, currency)
        minimum = b.minimum_budget(days, members)
        return QuoteResponse(
            days=days,
            members=members,
            currency=currency.code,
            budget_usd=budget_usd,
            minimum_budget=minimum,
            is_tight=budget_error is None and budget_usd < minimum,
            tier=_tier(b.budget_tier(budget_usd, days, members)),
            category_budget=b.category_budget(budget_usd),
            budget_error=budget_error,
        )

    def check_request(self, request: GenerateRequest, user: Optional[Dict[str, Any]], today: Optional[date] = None):
        """
        Run the generate-button rules in the order the app applies them.
        Returns (days, budget_usd). Raises a PlannerError subclass on the first failure.

        A confirmed tight budget skips the minimum-days rule.
        """
        if not request.destination.strip():
            raise b.MissingDestination()
        if not user:
            raise b.LoginRequired()
        b.validate_budget(request.budget)
        currency = b.get_currency(request.currency)
        b.validate_date_range(request.start_date, request.end_date, today=today)

        days = b.calculate_days(request.start_date, request.end_date)
        members = b.clamp_members(request.members)
        budget_usd = b.convert_to_usd(request.budget, currency)
        minimum = b.minimum_budget(days, members)

        if budget_usd < minimum:
            if not request.allow_tight_budget:
                raise b.TightBudget(days, members, minimum, budget_usd)
            logger.info(f"Proceeding with tight budget ${budget_usd} < ${minimum} for {request.destination}")
            return days, budget_usd
        if days < b.MIN_TRIP_DAYS:
            raise b.TripTooShort()
        return days, budget_usd

    async def generate(self, request: GenerateRequest, user: Optional[Dict[str, Any]]) -> GenerateResponse:
        days, budget_usd = self.check_request(request, user, today=date.today())
        destination = request.destination.strip()
        members = b.clamp_members(request.members)
        interests = self._interests(request.interests)

        try:
            response = await self.client.generate_trip(destination, days, interests, members, budget_usd)
        except UpstreamError as e:
            logger.error(f"Itinerary generation failed for {destination}: {e}")
            raise HTTPException(status_code=502, detail=GENERATE_FAILED)

        coordinates = request.coordinates
        if coordinates is None:
            matches = await self.places.search_places(destination, limit=1)
            if matches:
                coordinates = {"latitude": matches[0].lat, "longitude": matches[0].lon}

        result = GenerateResponse(
            itinerary=response["itinerary"],
            destination=destination,
            days=days,
            budget=budget_usd,
            start_date=b.format_date(request.start_date),
            end_date=b.format_date(request.end_date),
            coordinates=coordinates,
            group_type=request.group_type,
            members=members,
            interests=interests,
            tier=_tier(b.budget_tier(budget_usd, days, members)),
            city=self.catalog.find_by_city(destination),
        )

        if request.save and self.trips is not None:
            trip = self.trips.save_trip(user["id"], TripCreate(
                destination=destination,
                days=days,
                itinerary=result.itinerary,
                budget=budget_usd,
                num_people=members,
                group_type=request.group_type,
                start_date=result.start_date,
                end_date=result.end_date,
            ))
            result.trip_id = trip.id
        return result

    @staticmethod
    def _interests(raw) -> List[str]:
        if isinstance(raw, list):
            return [str(i).strip() for i in raw if str(i).strip()]
        return b.parse_interests(raw)
