from fastapi import APIRouter, Depends, HTTPException
from voyagehub.core.dependencies import get_optional_user, get_optional_user_supabase
from voyagehub.core.itinerary_client import ItineraryClient, get_itinerary_client
from voyagehub.modules.destinations.service import DestinationService, get_destination_service
from voyagehub.modules.places.service import PlacesService, get_places_service
from voyagehub.modules.planner import budget
from voyagehub.modules.planner.schemas import (
    CurrencyResponse, QuoteRequest, QuoteResponse, GenerateRequest, GenerateResponse,
    PlannerErrorResponse
)
from voyagehub.modules.planner.service import PlannerService
from voyagehub.modules.trips.service import TripService
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/planner", tags=["planner"])


def get_planner_service(
    client: ItineraryClient = Depends(get_itinerary_client),
    places: PlacesService = Depends(get_places_service),
    catalog: DestinationService = Depends(get_destination_service),
    supabase: Optional[Client] = Depends(get_optional_user_supabase)
) -> PlannerService:
    trips = TripService(supabase) if supabase is not None else None
    return PlannerService(client, places, catalog, trips)


def planner_http_error(e: budget.PlannerError) -> HTTPException:
    body = PlannerErrorResponse(title=e.title, message=e.message)
    if isinstance(e, budget.TightBudget):
        body.minimum_budget = e.minimum
        body.budget_usd = e.budget_usd
    return HTTPException(status_code=e.status_code, detail=body.model_dump(exclude_none=True))


@router.get("/currencies", response_model=List[CurrencyResponse])
async def list_currencies():
    """Currencies the budget can be entered in, with their USD rates"""
    return [CurrencyResponse(code=c.code, symbol=c.symbol, label=c.label, rate=c.rate) for c in budget.CURRENCIES]


@router.get("/group-types", response_model=List[str])
async def list_group_types():
    return budget.GROUP_TYPES


@router.post("/quote", response_model=QuoteResponse)
async def quote(
    request: QuoteRequest,
    service: PlannerService = Depends(get_planner_service)
):
    """Days, USD budget and tier for the current form values"""
    try:
        return service.quote(request)
    except budget.PlannerError as e:
        raise planner_http_error(e)


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: PlannerService = Depends(get_planner_service)
):
    """
    Validate the plan and ask the itinerary backend for a day-by-day itinerary.
    A budget under $15/person/day answers 409 until resent with allow_tight_budget=true.
    """
    try:
        return await service.generate(request, user_data)
    except budget.PlannerError as e:
        raise planner_http_error(e)
