"""
Fetch GPS Script
Adds latitude/longitude to every attraction in the destination catalog using
OpenStreetMap Nominatim. Nominatim allows ~1 request/second, so a full run
takes a while. Attractions that cannot be found get null coordinates and the
app falls back to the city centre.

Usage:
    python -m voyagehub.scripts.fetch_gps            # first two cities only
    python -m voyagehub.scripts.fetch_gps --all
    python -m voyagehub.scripts.fetch_gps --all --input other.json --output out.json
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from voyagehub.config import settings
from voyagehub.core.throttle import RequestThrottle
from voyagehub.modules.destinations.service import DEFAULT_CATALOG_PATH
from voyagehub.modules.places.service import PlacesService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEST_MODE_CITIES = 2


async def add_gps_to_destination(places: PlacesService, destination: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of the destination with coordinates on each attraction"""
    city = destination.get("city", "")
    country = destination.get("country", "")
    logger.info(f"Processing: {city}, {country}")

    updated_attractions = []
    for attraction in destination.get("attractions", []):
        coords = await places.geocode_attraction(city, country, attraction["name"])
        if coords:
            logger.info(f"Found: {attraction['name']} -> ({coords.latitude}, {coords.longitude})")
        else:
            logger.info(f"Not found: {attraction['name']} (will use city center)")
        updated_attractions.append({
            **attraction,
            "latitude": coords.latitude if coords else None,
            "longitude": coords.longitude if coords else None,
        })

    logger.info(f"{city} completed")
    return {**destination, "attractions": updated_attractions}


async def add_gps_to_destinations(
    destinations: List[Dict[str, Any]],
    places: PlacesService,
    test_mode: bool = True,
) -> List[Dict[str, Any]]:
    """Geocode all cities, or only the first two in test mode (the rest are kept unchanged)."""
    to_process = destinations[:TEST_MODE_CITIES] if test_mode else destinations
    logger.info(f"Processing {len(to_process)} cities...")

    updated = []
    for destination in to_process:
        updated.append(await add_gps_to_destination(places, destination))

    if test_mode:
        updated.extend(destinations[TEST_MODE_CITIES:])

    total = sum(len(d.get("attractions", [])) for d in to_process)
    logger.info(f"Processed {len(to_process)} cities, {total} attractions")
    return updated


def build_places_service(interval: Optional[float] = None) -> PlacesService:
    return PlacesService(
        settings.nominatim_url,
        settings.wikipedia_summary_url,
        settings.user_agent,
        timeout=settings.http_timeout,
        throttle=RequestThrottle(interval if interval is not None else settings.nominatim_min_interval),
    )


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Add GPS coordinates to catalog attractions")
    parser.add_argument("--all", action="store_true", help="process every city (default: first two)")
    parser.add_argument("--input", type=Path, default=DEFAULT_CATALOG_PATH)
    parser.add_argument("--output", type=Path, default=None, help="defaults to overwriting --input")
    args = parser.parse_args(argv)

    with args.input.open("r", encoding="utf-8") as f:
        destinations = json.load(f)

    updated = asyncio.run(add_gps_to_destinations(destinations, build_places_service(), test_mode=not args.all))

    output = args.output or args.input
    with output.open("w", encoding="utf-8") as f:
        json.dump(updated, f, indent=2, ensure_ascii=False)
    logger.info(f"File saved: {output}")


if __name__ == "__main__":
    main()
