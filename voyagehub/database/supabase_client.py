from typing import Callable, Dict, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from voyagehub.config import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


class FlowStorage:
    """In-memory auth storage owned by a single sign-in flow."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def code_verifier(self) -> Optional[str]:
        for key, value in self.items.items():
            if key.endswith("-code-verifier"):
                return value
        return None


def _stateless_options(storage: Optional[FlowStorage] = None) -> ClientOptions:
    return ClientOptions(
        storage=storage or FlowStorage(),
        persist_session=False,
        auto_refresh_token=False,
    )


def create_auth_client(storage: Optional[FlowStorage] = None) -> Client:
    """Short-lived client for OTP / OAuth flows, so sessions never land on the shared client"""
    return create_client(settings.supabase_url, settings.supabase_key, options=_stateless_options(storage))


def create_user_client(access_token: str) -> Client:
    """Client whose table queries run as the caller (row-level security sees auth.uid())"""
    client = create_client(settings.supabase_url, settings.supabase_key, options=_stateless_options())
    client.postgrest.auth(access_token)
    return client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_auth_client_factory() -> Callable[..., Client]:
    return create_auth_client
