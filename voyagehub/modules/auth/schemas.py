from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional


class OtpRequest(BaseModel):
    email: EmailStr


class OtpVerifyRequest(BaseModel):
    email: EmailStr
    token: str

    @field_validator("token")
    @classmethod
    def strip_token(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Passcode is required")
        return v


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: Optional[str] = None


class OAuthUrlResponse(BaseModel):
    provider: str
    url: str
    code_verifier: Optional[str] = None  # PKCE, sent back with the code


class OAuthExchangeRequest(BaseModel):
    auth_code: str
    code_verifier: Optional[str] = None


class DisplayNameUpdate(BaseModel):
    display_name: str

    @field_validator("display_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Display name cannot be empty")
        return v


class MessageResponse(BaseModel):
    message: str
