"""Per-client request limits (slowapi), keyed by remote address."""

import structlog
from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

logger = structlog.get_logger()

# Owner dashboard
READ_LIMIT = "30/minute"
WRITE_LIMIT = "10/minute"

# Anonymous visitors hitting /p/{username}
PUBLIC_LIMIT = "60/minute"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


def _retry_after_seconds(exc: RateLimitExceeded) -> int:
    """Length of the exceeded window, the longest a client has to wait."""
    return int(exc.limit.limit.get_expiry())


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render a 429 in the standard error body with a Retry-After header."""
    if not isinstance(exc, RateLimitExceeded):
        raise exc

    retry_after = _retry_after_seconds(exc)
    logger.warning("rate_limit_exceeded", path=request.url.path, limit=exc.detail)
    return ORJSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {exc.detail}",
            "details": {"limit": exc.detail, "retry_after": retry_after},
        },
        headers={"Retry-After": str(retry_after)},
    )
