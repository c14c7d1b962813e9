import json
from datetime import datetime, timedelta
from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from voyagehub.core import dependencies
from voyagehub.core.dependencies import (
    get_current_user_id, get_optional_user, get_user_supabase, get_optional_user_supabase
)
from voyagehub.core.itinerary_client import ItineraryClient, get_itinerary_client
from voyagehub.database.supabase_client import get_supabase, get_auth_client_factory
from voyagehub.main import app
from voyagehub.modules.auth.service import clear_user_cache
from voyagehub.modules.places.service import PlacesService, get_places_service

USER = {"id": "user-1", "email": "traveler@example.com", "user_metadata": {}}
OTHER_USER = {"id": "user-2", "email": "other@example.com", "user_metadata": {}}


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.action = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.want_count = False
        self.head = False

    def select(self, *columns, count=None, head=None):
        self.action = "select"
        self.want_count = count is not None
        self.head = bool(head)
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def _matches(self, row):
        return all(str(row.get(c)) == str(v) for c, v in self.filters)

    def execute(self):
        if self.db.fail:
            raise Exception("connection refused")
        rows = self.db.tables.setdefault(self.table, [])
        if self.action == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for p in payloads:
                self.db.counter += 1
                row = {
                    "id": f"{self.table.lower()}-{self.db.counter}",
                    "created_at": (self.db.clock + timedelta(minutes=self.db.counter)).isoformat(),
                    **p,
                }
                rows.append(row)
                inserted.append(row)
            return SimpleNamespace(data=inserted, count=None)
        matched = [r for r in rows if self._matches(r)]
        if self.action == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=matched, count=None)
        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        count = len(matched) if self.want_count else None
        return SimpleNamespace(data=[] if self.head else matched, count=count)


def session_response(user_id="user-1", email="traveler@example.com"):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email),
        session=SimpleNamespace(access_token="access", refresh_token="refresh"),
    )


class FakeAdmin:
    def __init__(self, auth):
        self.auth = auth

    def sign_out(self, jwt, scope="global"):
        self.auth._record("admin.sign_out", jwt)

    def update_user_by_id(self, user_id, attributes):
        self.auth._record("admin.update_user_by_id", (user_id, attributes))
        return SimpleNamespace(user=SimpleNamespace(id=user_id))


class FakeAuth:
    """supabase.auth stand-in. Tokens starting with "bad" fail verification."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.user_lookups = 0
        self.storage = None
        self.admin = FakeAdmin(self)

    def _record(self, name, payload):
        self.calls.append((name, payload))
        if self.error:
            raise Exception(self.error)

    def sign_in_with_otp(self, payload):
        self._record("sign_in_with_otp", payload)

    def verify_otp(self, payload):
        self._record("verify_otp", payload)
        return session_response(email=payload["email"])

    def sign_in_with_oauth(self, payload):
        self._record("sign_in_with_oauth", payload)
        if self.storage is not None:
            self.storage.set_item("supabase.auth.token-code-verifier", "verifier-123")
        return SimpleNamespace(provider="google", url="https://auth.test/authorize?provider=google")

    def exchange_code_for_session(self, payload):
        self._record("exchange_code_for_session", payload)
        return session_response()

    def get_user(self, jwt=None):
        self.user_lookups += 1
        self._record("get_user", jwt)
        if jwt.startswith("bad"):
            raise Exception("invalid JWT: unable to parse or verify signature")
        user = OTHER_USER if jwt.startswith("other") else USER
        return SimpleNamespace(user=SimpleNamespace(
            id=user["id"], email=user["email"],
            user_metadata={"display_name": "Asha"}, created_at=None,
        ))

    def sign_out(self):
        self._record("sign_out", None)


class FakeSupabase:
    """Just enough of the supabase-py query builder for the services."""

    def __init__(self):
        self.tables = {}
        self.fail = False
        self.counter = 0
        self.clock = datetime(2026, 1, 1, 12, 0, 0)
        self.auth = FakeAuth()
        # bearer tokens that per-request user clients were built with
        self.user_tokens = []

    def table(self, name):
        return FakeQuery(self, name)


def json_handler(routes):
    """MockTransport handler answering {(method, path): payload-or-callable}."""
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        key = (request.method, request.url.path)
        if key not in routes:
            return httpx.Response(404, json={"error": "not found"})
        answer = routes[key]
        if callable(answer):
            return answer(request)
        return httpx.Response(200, json=answer)

    handler.calls = calls
    return handler


class NoThrottle:
    async def wait(self):
        return None


def make_places_service(routes):
    handler = json_handler(routes)
    service = PlacesService(
        "https://nominatim.test",
        "https://wiki.test/page/summary",
        "VoyageHub-Test",
        transport=httpx.MockTransport(handler),
        throttle=NoThrottle(),
    )
    return service, handler


def make_itinerary_client(routes):
    handler = json_handler(routes)
    return ItineraryClient("https://itinerary.test", transport=httpx.MockTransport(handler)), handler


def request_json(request: httpx.Request):
    return json.loads(request.content.decode())


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def backend_routes():
    """Mutable route table for the itinerary backend; tests fill it in."""
    return {}


@pytest.fixture
def place_routes():
    return {
        ("GET", "/search"): [{
            "display_name": "Paris, Ile-de-France, France",
            "lat": "48.8566",
            "lon": "2.3522",
            "address": {"city": "Paris", "country": "France"},
        }],
    }


@pytest.fixture
def backend(backend_routes):
    return make_itinerary_client(backend_routes)


@pytest.fixture
def places(place_routes):
    return make_places_service(place_routes)


def fake_auth_client_factory(supabase):
    """Flow clients all resolve to the fake; the OAuth storage is handed to FakeAuth."""
    def factory(storage=None):
        supabase.auth.storage = storage
        return supabase
    return factory


@pytest.fixture(autouse=True)
def fresh_auth_cache():
    clear_user_cache()
    yield
    clear_user_cache()


def _override_services(supabase, backend, places):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_auth_client_factory] = lambda: fake_auth_client_factory(supabase)
    app.dependency_overrides[get_itinerary_client] = lambda: backend[0]
    app.dependency_overrides[get_places_service] = lambda: places[0]


@pytest.fixture
def client(supabase, backend, places):
    _override_services(supabase, backend, places)
    app.dependency_overrides[get_current_user_id] = lambda: USER
    app.dependency_overrides[get_optional_user] = lambda: USER
    app.dependency_overrides[get_user_supabase] = lambda: supabase
    app.dependency_overrides[get_optional_user_supabase] = lambda: supabase
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def guest_client(client):
    app.dependency_overrides[get_optional_user] = lambda: None
    app.dependency_overrides[get_optional_user_supabase] = lambda: None
    return client


@pytest.fixture
def bearer_client(supabase, backend, places, monkeypatch):
    """Real bearer-token dependencies; only Supabase itself is faked."""
    def user_client(token):
        supabase.user_tokens.append(token)
        return supabase

    monkeypatch.setattr(dependencies, "create_user_client", user_client)
    _override_services(supabase, backend, places)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
