from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from voyagehub.modules.auth.schemas import (
    OtpRequest, OtpVerifyRequest, TokenResponse, OAuthUrlResponse,
    OAuthExchangeRequest, DisplayNameUpdate, MessageResponse
)
from voyagehub.modules.auth.service import AuthService
from voyagehub.core.dependencies import get_auth_service, get_current_user_id
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/otp", response_model=MessageResponse)
async def send_otp(
    request: OtpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Email a one-time passcode"""
    service.send_otp(request.email)
    return MessageResponse(message="Passcode sent. Check your inbox")


@router.post("/otp/verify", response_model=TokenResponse)
async def verify_otp(
    request: OtpVerifyRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Verify passcode and get access token"""
    return service.verify_otp(request.email, request.token)


@router.post("/oauth/google", response_model=OAuthUrlResponse)
async def google_oauth(
    redirect_to: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """Authorization URL for Google sign-in"""
    return service.google_oauth_url(redirect_to)


@router.post("/oauth/exchange", response_model=TokenResponse)
async def exchange_oauth_code(
    request: OAuthExchangeRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Trade the OAuth callback code for an access token"""
    return service.exchange_code(request.auth_code, request.code_verifier)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return MessageResponse(message="Logged out successfully")


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
):
    """Get current authenticated user"""
    metadata = current_user.get("user_metadata") or {}
    return {**current_user, "display_name": metadata.get("display_name")}


@router.put("/me/display-name")
async def update_display_name(
    request: DisplayNameUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service)
):
    """Change the name shown on the profile screen"""
    return service.update_display_name(current_user["id"], request.display_name)
