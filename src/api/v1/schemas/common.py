"""Schemas shared by every v1 router."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error_code: str = Field(..., examples=["PAYMENT_METHOD_NOT_FOUND"])
    message: str
    details: dict[str, Any] | None = None


class SuccessResponse(BaseModel):
    """Acknowledgement for operations with nothing else to return."""

    success: bool = True
