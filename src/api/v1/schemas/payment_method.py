"""Pydantic schemas for PaymentMethod API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PaymentMethodCreate(BaseModel):
    """Schema for creating a PaymentMethod."""

    type: str = Field(..., min_length=1, max_length=50)
    handle: str = Field(..., max_length=255)
    label: str | None = Field(None, max_length=100)


class PaymentMethodUpdate(BaseModel):
    """Schema for updating a PaymentMethod (all fields optional)."""

    type: str | None = Field(None, min_length=1, max_length=50)
    label: str | None = Field(None, max_length=100)
    handle: str | None = Field(None, max_length=255)
    active: bool | None = None


class ReorderEntry(BaseModel):
    """One position in a reorder request."""

    id: UUID
    sort_order: int = Field(..., ge=0)


class PaymentMethodReorder(BaseModel):
    """Schema for reordering all of the caller's payment methods."""

    order: list[ReorderEntry]


class PaymentMethodResponse(BaseModel):
    """Schema for PaymentMethod response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "type": "venmo",
                "label": None,
                "display_label": "Venmo",
                "handle": "@alice",
                "sort_order": 0,
                "active": True,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    type: str
    label: str | None
    display_label: str
    handle: str
    sort_order: int
    active: bool
    created_at: datetime
    updated_at: datetime


class PaymentMethodListResponse(BaseModel):
    """Schema for list of PaymentMethods."""

    data: list[PaymentMethodResponse]


class PaymentMethodDetailResponse(BaseModel):
    """Schema for single PaymentMethod."""

    data: PaymentMethodResponse
