"""Pydantic schemas for the public page and payment type registry."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ActionResponse(BaseModel):
    """What the visitor's button does.

    ``navigate`` carries ``uri``; ``display_and_copy`` carries ``text`` and
    ``instructions``.
    """

    kind: Literal["navigate", "display_and_copy"]
    uri: str | None = None
    text: str | None = None
    instructions: str | None = None


class PaymentTypeDisplay(BaseModel):
    """Registry presentation for a method's type."""

    label: str
    color: str
    icon: str


class PublicPaymentMethodResponse(BaseModel):
    """Visitor-facing payment method."""

    id: UUID
    type: str
    label: str | None
    handle: str
    sort_order: int
    display: PaymentTypeDisplay
    action: ActionResponse


class PublicPageResponse(BaseModel):
    """Schema for a public payment page."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "display_name": "Alice",
                "avatar": None,
                "bio": None,
                "payment_methods": [
                    {
                        "id": "123e4567-e89b-12d3-a456-426614174000",
                        "type": "venmo",
                        "label": None,
                        "handle": "@alice",
                        "sort_order": 0,
                        "display": {"label": "Venmo", "color": "#3D95CE", "icon": "💙"},
                        "action": {"kind": "navigate", "uri": "https://venmo.com/u/alice"},
                    }
                ],
            }
        },
    )

    username: str
    display_name: str | None
    avatar: str | None
    bio: str | None
    payment_methods: list[PublicPaymentMethodResponse]


class PublicPageDetailResponse(BaseModel):
    """Envelope for a public page."""

    data: PublicPageResponse


class PaymentTypeResponse(BaseModel):
    """One registry entry."""

    key: str
    label: str
    color: str
    icon: str
    display_only: bool
    guidance: str | None = None
    placeholder: str | None = None


class PaymentTypeListResponse(BaseModel):
    """Schema for the payment type registry listing."""

    data: list[PaymentTypeResponse]
