import hashlib
import logging
import time
from supabase import Client, create_client
from voyagehub.database.supabase_client import FlowStorage, create_auth_client
from voyagehub.modules.auth.schemas import TokenResponse, OAuthUrlResponse
from voyagehub.config.settings import settings
from fastapi import HTTPException
from typing import Callable, Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (every screen re-checks the session)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def normalize_email(email: str) -> str:
    return email.strip().lower()


def clear_user_cache():
    _AUTH_USER_CACHE.clear()


def forget_user(user_id: str):
    """Drop cached sessions belonging to one user"""
    stale = [key for key, (user_data, _) in _AUTH_USER_CACHE.items() if user_data.get("id") == user_id]
    for key in stale:
        del _AUTH_USER_CACHE[key]


class AuthService:
    def __init__(self, supabase: Client, auth_client_factory: Callable[..., Client] = create_auth_client):
        # shared client: token lookups only, never holds a session
        self.supabase = supabase
        self.auth_client_factory = auth_client_factory

    def _token_response(self, auth_response, fallback_email: Optional[str] = None) -> TokenResponse:
        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired passcode")
        return TokenResponse(
            access_token=auth_response.session.access_token,
            refresh_token=auth_response.session.refresh_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or fallback_email,
        )

    def send_otp(self, email: str) -> bool:
        """Email a one-time passcode. New addresses are signed up on the fly."""
        try:
            self.auth_client_factory().auth.sign_in_with_otp({
                "email": normalize_email(email),
                "options": {"should_create_user": True},
            })
            return True
        except Exception as e:
            logger.error(f"Error sending OTP: {e}")
            error_message = str(e).lower()
            if "rate limit" in error_message or "security purposes" in error_message:
                raise HTTPException(status_code=429, detail="Too many requests. Please wait before requesting a new code")
            raise HTTPException(status_code=500, detail=f"Could not send passcode: {e}")

    def verify_otp(self, email: str, token: str) -> TokenResponse:
        """Trade email + passcode for a session"""
        email = normalize_email(email)
        try:
            auth_response = self.auth_client_factory().auth.verify_otp({
                "email": email,
                "token": token,
                "type": "email",
            })
        except Exception as e:
            error_message = str(e).lower()
            if "expired" in error_message or "invalid" in error_message or "token" in error_message:
                raise HTTPException(status_code=401, detail="Invalid or expired passcode")
            raise HTTPException(status_code=500, detail=f"Verification failed: {e}")
        return self._token_response(auth_response, email)

    def google_oauth_url(self, redirect_to: Optional[str] = None) -> OAuthUrlResponse:
        """
        Authorization URL for Google sign-in. The app opens it and returns with a code.
        The PKCE code_verifier is handed back to the app, which sends it with the code.
        """
        options: Dict[str, Any] = {"skip_browser_redirect": True}
        redirect = redirect_to or settings.oauth_redirect_url
        if redirect:
            options["redirect_to"] = redirect
        storage = FlowStorage()
        try:
            response = self.auth_client_factory(storage).auth.sign_in_with_oauth({
                "provider": "google",
                "options": options,
            })
        except Exception as e:
            logger.error(f"Error starting Google OAuth: {e}")
            raise HTTPException(status_code=500, detail=f"Could not start Google sign-in: {e}")
        if not response.url:
            raise HTTPException(status_code=500, detail="Could not start Google sign-in")
        return OAuthUrlResponse(provider="google", url=response.url, code_verifier=storage.code_verifier())

    def exchange_code(self, auth_code: str, code_verifier: Optional[str] = None) -> TokenResponse:
        """Complete the OAuth flow with the code and the verifier from google_oauth_url"""
        params = {"auth_code": auth_code}
        if code_verifier:
            params["code_verifier"] = code_verifier
        try:
            auth_response = self.auth_client_factory().auth.exchange_code_for_session(params)
        except Exception as e:
            logger.error(f"Error exchanging OAuth code: {e}")
            raise HTTPException(status_code=401, detail="Sign-in was cancelled or the code has expired")
        return self._token_response(auth_response)

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "created_at": user.created_at,
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Revoke the session behind this token only"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            self.supabase.auth.admin.sign_out(token, "local")
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    def update_display_name(self, user_id: str, display_name: str) -> Dict[str, Any]:
        """Set user_metadata.display_name (requires service role key)"""
        service_role_key = settings.supabase_service_role_key
        if not service_role_key:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot update user metadata."
            )
        try:
            admin_client = create_client(settings.supabase_url, service_role_key)
            response = admin_client.auth.admin.update_user_by_id(
                user_id,
                {"user_metadata": {"display_name": display_name}}
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update display name: {e}")
        if not response.user:
            raise HTTPException(status_code=404, detail="User not found")
        forget_user(user_id)
        return {"id": response.user.id, "display_name": display_name}
