"""
Core dependencies for route protection
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from voyagehub.database.supabase_client import get_supabase, get_auth_client_factory, create_user_client
from voyagehub.modules.auth.service import AuthService
from supabase import Client
from typing import Callable, Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    auth_client_factory: Callable[..., Client] = Depends(get_auth_client_factory)
) -> AuthService:
    return AuthService(supabase, auth_client_factory)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    supabase: Client = Depends(get_supabase),
) -> Optional[Dict[str, Any]]:
    """Current user when a valid bearer token is sent, otherwise None (guest browsing)."""
    if credentials is None:
        return None
    try:
        return AuthService(supabase).get_current_user(credentials.credentials)
    except Exception as e:
        logger.debug(f"Ignoring invalid token on optional-auth route: {e}")
        return None


def get_user_supabase(
    credentials: HTTPAuthorizationCredentials = Security(security),
    user_data: Dict = Depends(get_current_user_id)
) -> Client:
    """Supabase client acting as the signed-in caller, for user-owned tables"""
    return create_user_client(credentials.credentials)


def get_optional_user_supabase(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    user_data: Optional[Dict] = Depends(get_optional_user)
) -> Optional[Client]:
    if credentials is None or not user_data:
        return None
    return create_user_client(credentials.credentials)
