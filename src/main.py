"""AllRails API application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

setup_logging()

DESCRIPTION = """\
## One link for every way to pay you

An account publishes a page at `/p/{username}` listing its payment methods
(Venmo, Cash App, PayPal, Zelle, crypto wallets, ...). Visitors get a deep
link where the provider has one and a copy-to-clipboard handle otherwise.

### Authentication
Owner endpoints (`/profile`, `/payment-methods`) need a bearer token:
```
Authorization: Bearer <your_token>
```
`/p/{username}`, `/payment-types` and `/health` are public.

### Rate Limits
- Owner reads: 30 requests/minute
- Owner writes: 10 requests/minute
- Public page: 60 requests/minute
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and database checks"},
    {"name": "profile", "description": "Username and public profile details"},
    {"name": "payment-methods", "description": "Manage the payment methods shown on your page"},
    {"name": "public", "description": "Visitor-facing page and payment type registry"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_started", app_env=settings.app_env, version=API_VERSION)
    yield
    await engine.dispose()
    logger.info("app_stopped")


def _install_middleware(app: FastAPI) -> None:
    """Register middleware. Starlette wraps in reverse, so CORS ends up outermost."""
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=DESCRIPTION,
        version=API_VERSION,
        debug=settings.debug,
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _install_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
