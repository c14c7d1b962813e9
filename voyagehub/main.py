import logging
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from voyagehub.config import settings
from voyagehub.core.exceptions import UpstreamError
from voyagehub.core.itinerary_client import ItineraryClient, get_itinerary_client
from voyagehub.modules.auth import routes as auth_routes
from voyagehub.modules.planner import routes as planner_routes
from voyagehub.modules.recommendations import routes as recommendations_routes
from voyagehub.modules.places import routes as places_routes
from voyagehub.modules.destinations import routes as destinations_routes
from voyagehub.modules.trips import routes as trips_routes
from voyagehub.modules.favorites import routes as favorites_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError):
    logger.error("Upstream failure: %s", exc)
    return JSONResponse(status_code=502, content={"detail": f"{exc.service} is unavailable"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(planner_routes.router, prefix="/api/v1")
app.include_router(recommendations_routes.router, prefix="/api/v1")
app.include_router(places_routes.router, prefix="/api/v1")
app.include_router(destinations_routes.router, prefix="/api/v1")
app.include_router(trips_routes.router, prefix="/api/v1")
app.include_router(favorites_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup (itinerary backend: %s)", settings.itinerary_api_url)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to voyagehub-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness check: extend here with Supabase checks if needed."""
    return {"status": "ready"}


@app.get("/api/health")
@limiter.exempt
async def itinerary_backend_health(client: ItineraryClient = Depends(get_itinerary_client)):
    """Status of the itinerary backend (the free tier sleeps; this also wakes it up)."""
    try:
        backend = await client.health()
    except UpstreamError as e:
        raise HTTPException(status_code=503, detail=f"Itinerary backend unavailable: {e.message}")
    return {"status": "healthy", "itinerary_backend": backend}
