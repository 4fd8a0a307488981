from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.base import BaseSchema


class ProfileUpdateRequest(BaseModel):
    telegram_id: str = Field(..., min_length=1)
    name: Optional[str] = None
    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @field_validator("telegram_id", mode="before")
    @classmethod
    def _coerce_telegram_id(cls, v):
        # Telegram clients send the id as a JSON number
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ProfileSaveResponse(BaseModel):
    status: str


class ProfileOut(BaseSchema):
    telegram_id: str
    name: Optional[str] = None
    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    avatar_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    last_seen: Optional[datetime] = None
