"""Payment method API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_payment_method_service
from api.v1.schemas.common import ErrorResponse, SuccessResponse
from api.v1.schemas.payment_method import (
    PaymentMethodCreate,
    PaymentMethodDetailResponse,
    PaymentMethodListResponse,
    PaymentMethodReorder,
    PaymentMethodResponse,
    PaymentMethodUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.payment_method import PaymentMethod
from domain.ordering import ids_from_positions
from domain.services.payment_method_service import PaymentMethodService

router = APIRouter(prefix="/payment-methods", tags=["payment-methods"])


@router.get(
    "",
    response_model=PaymentMethodListResponse,
    summary="List your payment methods",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_payment_methods(
    request: Request,
    user: CurrentUser,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodListResponse:
    """Get all payment methods for the authenticated account in display order."""
    methods = await service.get_all_for_user(user.id)
    return PaymentMethodListResponse(data=[_build_response(m) for m in methods])


@router.post(
    "",
    response_model=PaymentMethodDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a payment method",
    responses={
        201: {"description": "Payment method created"},
        400: {"model": ErrorResponse, "description": "Empty handle"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_payment_method(
    request: Request,
    body: PaymentMethodCreate,
    user: CurrentUser,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodDetailResponse:
    """
    Add a payment method at the end of the list. New methods start active.

    `type` selects the registry rules (`venmo`, `cashapp`, `paypal`, `zelle`,
    `bitcoin`, `ethereum`, `applepay`, `googlepay`); unknown types are stored
    and rendered as display-only.
    """
    method = await service.create(
        user_id=user.id,
        type=body.type,
        handle=body.handle,
        label=body.label,
    )
    return PaymentMethodDetailResponse(data=_build_response(method))


@router.patch(
    "/reorder",
    response_model=PaymentMethodListResponse,
    summary="Reorder your payment methods",
    responses={
        200: {"description": "Methods in their new order"},
        400: {"model": ErrorResponse, "description": "Order is not a permutation of your methods"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reorder_payment_methods(
    request: Request,
    body: PaymentMethodReorder,
    user: CurrentUser,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodListResponse:
    """
    Replace the display order. The body must list every one of your methods
    exactly once with sort orders `0..n-1`.
    """
    ordered_ids = ids_from_positions([(entry.id, entry.sort_order) for entry in body.order])
    methods = await service.reorder(user.id, ordered_ids)
    return PaymentMethodListResponse(data=[_build_response(m) for m in methods])


@router.put(
    "/{method_id}",
    response_model=PaymentMethodDetailResponse,
    summary="Update a payment method",
    responses={
        200: {"description": "Payment method updated"},
        400: {"model": ErrorResponse, "description": "Empty handle"},
        404: {"model": ErrorResponse, "description": "Payment method not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_payment_method(
    request: Request,
    method_id: UUID,
    body: PaymentMethodUpdate,
    user: CurrentUser,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodDetailResponse:
    """Partially update a payment method. Send `label: null` to clear the label."""
    label = ... if "label" not in body.model_fields_set else body.label

    method = await service.update(
        method_id=method_id,
        user_id=user.id,
        type=body.type,
        label=label,
        handle=body.handle,
        active=body.active,
    )
    return PaymentMethodDetailResponse(data=_build_response(method))


@router.post(
    "/{method_id}/toggle",
    response_model=PaymentMethodDetailResponse,
    summary="Toggle a payment method on or off",
    responses={
        200: {"description": "Payment method with its active flag flipped"},
        404: {"model": ErrorResponse, "description": "Payment method not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_payment_method(
    request: Request,
    method_id: UUID,
    user: CurrentUser,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodDetailResponse:
    """Flip the active flag. Inactive methods are hidden from the public page."""
    method = await service.toggle_active(method_id, user.id)
    return PaymentMethodDetailResponse(data=_build_response(method))


@router.delete(
    "/{method_id}",
    response_model=SuccessResponse,
    summary="Delete a payment method",
    responses={
        200: {"description": "Payment method deleted"},
        404: {"model": ErrorResponse, "description": "Payment method not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_payment_method(
    request: Request,
    method_id: UUID,
    user: CurrentUser,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> SuccessResponse:
    """Delete a payment method. Remaining methods keep their sort order until the next reorder."""
    await service.delete(method_id, user.id)
    return SuccessResponse(success=True)


def _build_response(method: PaymentMethod) -> PaymentMethodResponse:
    """Convert domain entity to response schema."""
    return PaymentMethodResponse(
        id=method.id,
        type=method.type,
        label=method.label,
        display_label=method.display_label,
        handle=method.handle,
        sort_order=method.sort_order,
        active=method.active,
        created_at=method.created_at,
        updated_at=method.updated_at,
    )
