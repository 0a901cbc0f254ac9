"""Public (unauthenticated) API routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_public_page_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.public_page import (
    ActionResponse,
    PaymentTypeDisplay,
    PaymentTypeListResponse,
    PaymentTypeResponse,
    PublicPageDetailResponse,
    PublicPageResponse,
    PublicPaymentMethodResponse,
)
from core.rate_limit import PUBLIC_LIMIT, READ_LIMIT, limiter
from domain.entities.public_page import PublicPaymentMethod
from domain.payment_types import PAYMENT_TYPES, lookup
from domain.resolution import Navigate
from domain.services.public_page_service import PublicPageService

router = APIRouter(tags=["public"])


@router.get(
    "/p/{username}",
    response_model=PublicPageDetailResponse,
    summary="Get a public payment page",
    responses={
        200: {"description": "Profile and its active payment methods"},
        404: {"model": ErrorResponse, "description": "No profile with this username"},
    },
)
@limiter.limit(PUBLIC_LIMIT)  # type: ignore[untyped-decorator]
async def get_public_page(
    request: Request,
    username: str,
    service: PublicPageService = Depends(get_public_page_service),
) -> PublicPageDetailResponse:
    """
    Get the visitor-facing page for a username (case-insensitive).

    Each method carries an `action`: `navigate` with a deep-link `uri`, or
    `display_and_copy` with the `text` to copy and `instructions`.
    """
    page = await service.get_public_page(username)
    return PublicPageDetailResponse(
        data=PublicPageResponse(
            username=page.username,
            display_name=page.display_name,
            avatar=page.avatar,
            bio=page.bio,
            payment_methods=[_build_public_method(m) for m in page.payment_methods],
        )
    )


@router.get(
    "/payment-types",
    response_model=PaymentTypeListResponse,
    summary="List supported payment types",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_payment_types(request: Request) -> PaymentTypeListResponse:
    """Get the payment type registry in picker order."""
    return PaymentTypeListResponse(
        data=[
            PaymentTypeResponse(
                key=config.key,
                label=config.label,
                color=config.color,
                icon=config.icon,
                display_only=config.display_only,
                guidance=config.guidance,
                placeholder=config.placeholder,
            )
            for config in PAYMENT_TYPES.values()
        ]
    )


def _build_public_method(method: PublicPaymentMethod) -> PublicPaymentMethodResponse:
    """Convert a projected method and its action to the response schema."""
    config = lookup(method.type)
    action = method.action
    if isinstance(action, Navigate):
        action_response = ActionResponse(kind=action.kind.value, uri=action.uri)
    else:
        action_response = ActionResponse(
            kind=action.kind.value,
            text=action.text,
            instructions=action.instructions,
        )

    return PublicPaymentMethodResponse(
        id=method.id,
        type=method.type,
        label=method.label,
        handle=method.handle,
        sort_order=method.sort_order,
        display=PaymentTypeDisplay(
            label=method.label or config.label,
            color=config.color,
            icon=config.icon,
        ),
        action=action_response,
    )
