import asyncio

import httpx

from conftest import make_places_service


PARIS_HIT = {
    "display_name": "Paris, Ile-de-France, Metropolitan France, France",
    "lat": "48.8566",
    "lon": "2.3522",
    "address": {"city": "Paris", "country": "France"},
}
VILLAGE_HIT = {
    "display_name": "Giverny, Normandy, France",
    "name": "Giverny",
    "lat": "49.0758",
    "lon": "1.5331",
    "address": {"village": "Giverny", "country": "France"},
}


def test_search_formats_results():
    service, handler = make_places_service({("GET", "/search"): [PARIS_HIT, VILLAGE_HIT]})
    results = asyncio.run(service.search_places("Par"))
    assert results[0].display_name == "Paris, France"
    assert results[0].city == "Paris"
    assert results[0].lat == 48.8566
    assert results[1].city == "Giverny"
    assert results[1].display_name == "Giverny, France"

    request = handler.calls[0]
    assert request.headers["User-Agent"] == "VoyageHub-Test"
    assert request.url.params["format"] == "json"
    assert request.url.params["limit"] == "5"
    assert request.url.params["addressdetails"] == "1"


def test_short_queries_skip_the_network():
    service, handler = make_places_service({})
    assert asyncio.run(service.search_places("P")) == []
    assert asyncio.run(service.search_places("")) == []
    assert handler.calls == []


def test_search_errors_yield_no_suggestions():
    service, _ = make_places_service({
        ("GET", "/search"): lambda request: httpx.Response(503, text="busy"),
    })
    assert asyncio.run(service.search_places("Paris")) == []


def test_reverse_lookup():
    service, _ = make_places_service({("GET", "/reverse"): PARIS_HIT})
    place = asyncio.run(service.reverse_lookup(48.85, 2.35))
    assert place.display_name == "Paris, France"


def test_reverse_lookup_nothing_found():
    service, _ = make_places_service({("GET", "/reverse"): {"error": "Unable to geocode"}})
    assert asyncio.run(service.reverse_lookup(0.0, 0.0)) is None


def test_geocode_attraction_builds_query():
    service, handler = make_places_service({("GET", "/search"): [{"lat": "48.8584", "lon": "2.2945"}]})
    coords = asyncio.run(service.geocode_attraction("Paris", "France", "Eiffel Tower"))
    assert coords.latitude == 48.8584
    assert handler.calls[0].url.params["q"] == "Eiffel Tower, Paris, France"
    assert handler.calls[0].url.params["limit"] == "1"


def test_geocode_not_found():
    service, _ = make_places_service({("GET", "/search"): []})
    assert asyncio.run(service.geocode("Nowhere at all")) is None


def test_city_description_from_wikipedia():
    extract = "Paris is the capital and largest city of France, with an estimated population of two million."
    service, handler = make_places_service({("GET", "/page/summary/New_York"): {"extract": extract}})
    result = asyncio.run(service.get_city_description("New York", "fallback"))
    assert result.description == extract
    assert result.source == "wikipedia"


def test_short_extract_uses_fallback():
    service, _ = make_places_service({("GET", "/page/summary/Rome"): {"extract": "Rome may refer to:"}})
    result = asyncio.run(service.get_city_description("Rome", "The Eternal City."))
    assert result.description == "The Eternal City."
    assert result.source == "fallback"


def test_wikipedia_failure_uses_fallback():
    service, _ = make_places_service({
        ("GET", "/page/summary/Rome"): lambda request: httpx.Response(500, text="oops"),
    })
    result = asyncio.run(service.get_city_description("Rome", "The Eternal City."))
    assert result.description == "The Eternal City."
