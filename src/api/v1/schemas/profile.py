"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile."""

    username: str = Field(..., min_length=1, max_length=30)
    display_name: str | None = Field(None, max_length=50)
    avatar: str | None = Field(None, max_length=500)
    bio: str | None = Field(None, max_length=200)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return v.strip().lower()


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "username": "alice",
                "display_name": "Alice",
                "avatar": None,
                "bio": "Splitting rent since 2019",
                "share_url": "https://allrails.app/p/alice",
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    username: str
    display_name: str | None
    avatar: str | None
    bio: str | None
    share_url: str
    created_at: datetime
    updated_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for the caller's profile; ``data`` is null before first save."""

    data: ProfileResponse | None
