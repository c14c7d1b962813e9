from pydantic import BaseModel, field_validator
from typing import Optional, Union
from datetime import datetime


class FavoriteCreate(BaseModel):
    destination_id: Union[str, int]
    destination_name: Optional[str] = None

    @field_validator("destination_id")
    @classmethod
    def as_text(cls, v) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("destination_id is required")
        return v


class FavoriteResponse(BaseModel):
    id: str
    user_id: str
    destination_id: str
    destination_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FavoriteStatus(BaseModel):
    destination_id: str
    is_favorite: bool


class CountResponse(BaseModel):
    count: int
