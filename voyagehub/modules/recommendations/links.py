"""Outbound booking / search links shown next to each recommendation."""

from typing import Dict, Optional
from urllib.parse import quote

PROVIDER_URLS = {
    "Skyscanner": "https://www.skyscanner.com",
    "Trainline": "https://www.thetrainline.com",
    "FlixBus": "https://www.flixbus.com",
    "Uber": "https://m.uber.com",
    "Ola": "https://www.olacabs.com",
}


def _q(text: str) -> str:
    return quote(text, safe="")


def maps_link(name: str, destination: str) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={_q(name + ' ' + destination)}"


def hotel_links(name: str, destination: str) -> Dict[str, str]:
    return {
        "booking": f"https://www.booking.com/search.html?ss={_q(destination + ' ' + name)}",
        "agoda": f"https://www.agoda.com/search?city={_q(destination)}&searchText={_q(name)}",
    }


def restaurant_links(name: str, destination: str) -> Dict[str, str]:
    return {
        "zomato": f"https://www.zomato.com/search?q={_q(destination + ' ' + name)}",
        "maps": maps_link(name, destination),
    }


def activity_links(name: str, destination: str) -> Dict[str, str]:
    return {
        "viator": f"https://www.viator.com/searchResults/all?text={_q(destination + ' ' + name)}",
        "maps": maps_link(name, destination),
    }


def provider_link(provider: Optional[str], destination: str, url: Optional[str] = None) -> str:
    """Explicit URL, then a known provider homepage, then a web search."""
    if url:
        return url
    if provider and provider in PROVIDER_URLS:
        return PROVIDER_URLS[provider]
    return f"https://www.google.com/search?q={_q((provider or 'transport') + ' ' + destination)}"
