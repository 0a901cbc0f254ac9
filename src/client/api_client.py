"""HTTP client for the AllRails REST API.

Error responses are turned back into the same typed exceptions the API raises,
so callers handle ``ResourceNotFoundError`` or ``DomainValidationError`` the
same way on both sides of the wire. Anything that is not a well-formed API
answer becomes a ``TransportError`` carrying the underlying message.
Nothing is retried.
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID
from urllib.parse import quote

import httpx
import structlog

from api.v1.schemas.payment_method import PaymentMethodResponse
from api.v1.schemas.profile import ProfileResponse
from api.v1.schemas.public_page import PaymentTypeResponse, PublicPageResponse
from core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    DomainValidationError,
    ErrorCode,
    InvalidHandleError,
    InvalidReorderError,
    InvalidUsernameError,
    PaymentMethodNotFoundError,
    ProfileNotFoundError,
    ResourceNotFoundError,
    TransportError,
    UsernameTakenError,
)
from client.session import Session

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 10.0


class PaymentsApiClient:
    """Thin async wrapper over ``/api/v1``.

    Usage::

        async with PaymentsApiClient("https://api.allrails.app/api/v1") as api:
            page = await api.get_public_page("alice")
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "PaymentsApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # Profile

    async def get_profile(self, session: Session) -> ProfileResponse | None:
        body = await self._request("GET", "/profile", session=session)
        return ProfileResponse.model_validate(body["data"]) if body["data"] else None

    async def upsert_profile(
        self, session: Session, username: str, **fields: str | None
    ) -> ProfileResponse:
        """Create or update the owner's profile.

        Only the optional fields passed (``display_name``, ``avatar``, ``bio``)
        are sent; pass ``None`` to clear one.
        """
        body = await self._request(
            "PUT", "/profile", session=session, json={"username": username, **fields}
        )
        return ProfileResponse.model_validate(body["data"])

    # Payment methods

    async def list_payment_methods(self, session: Session) -> list[PaymentMethodResponse]:
        body = await self._request("GET", "/payment-methods", session=session)
        return [PaymentMethodResponse.model_validate(item) for item in body["data"]]

    async def create_payment_method(
        self, session: Session, type: str, handle: str, label: str | None = None
    ) -> PaymentMethodResponse:
        body = await self._request(
            "POST",
            "/payment-methods",
            session=session,
            json={"type": type, "handle": handle, "label": label},
        )
        return PaymentMethodResponse.model_validate(body["data"])

    async def update_payment_method(
        self, session: Session, method_id: UUID, patch: dict[str, Any]
    ) -> PaymentMethodResponse:
        body = await self._request(
            "PUT", f"/payment-methods/{method_id}", session=session, json=patch
        )
        return PaymentMethodResponse.model_validate(body["data"])

    async def toggle_payment_method(
        self, session: Session, method_id: UUID
    ) -> PaymentMethodResponse:
        body = await self._request("POST", f"/payment-methods/{method_id}/toggle", session=session)
        return PaymentMethodResponse.model_validate(body["data"])

    async def delete_payment_method(self, session: Session, method_id: UUID) -> None:
        await self._request("DELETE", f"/payment-methods/{method_id}", session=session)

    async def reorder_payment_methods(
        self, session: Session, ordered_ids: Sequence[UUID]
    ) -> list[PaymentMethodResponse]:
        order = [
            {"id": str(method_id), "sort_order": index}
            for index, method_id in enumerate(ordered_ids)
        ]
        body = await self._request(
            "PATCH", "/payment-methods/reorder", session=session, json={"order": order}
        )
        return [PaymentMethodResponse.model_validate(item) for item in body["data"]]

    # Public

    async def get_public_page(self, username: str) -> PublicPageResponse:
        body = await self._request("GET", f"/p/{quote(username, safe='')}")
        return PublicPageResponse.model_validate(body["data"])

    async def list_payment_types(self) -> list[PaymentTypeResponse]:
        body = await self._request("GET", "/payment-types")
        return [PaymentTypeResponse.model_validate(item) for item in body["data"]]

    async def _request(
        self,
        method: str,
        path: str,
        *,
        session: Session | None = None,
        json: Any = None,
    ) -> Any:
        headers = session.authorization_header() if session is not None else {}

        try:
            response = await self._http.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise TransportError(str(e) or type(e).__name__) from e

        if response.is_error:
            raise error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "API returned a non-JSON response",
                details={"status_code": response.status_code},
            ) from e


def error_from_response(response: httpx.Response) -> AppException:
    """Rebuild the typed exception described by an API error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return TransportError(
            response.text or response.reason_phrase,
            details={"status_code": response.status_code},
        )

    message = str(body.get("message") or response.reason_phrase)
    details = body.get("details")
    raw_code = body.get("error_code")
    code = _parse_code(raw_code)
    detail_map = details if isinstance(details, dict) else {}
    status = response.status_code

    if status == 401:
        return AuthenticationError(message, error_code=code or ErrorCode.UNAUTHORIZED)
    if status == 403:
        return AuthorizationError(message)
    if status == 404:
        if code is ErrorCode.PROFILE_NOT_FOUND:
            return ProfileNotFoundError(str(detail_map.get("username", "")))
        if code is ErrorCode.PAYMENT_METHOD_NOT_FOUND:
            return PaymentMethodNotFoundError(str(detail_map.get("method_id", "")))
        return ResourceNotFoundError(message, details=details)
    if status == 409 and code is ErrorCode.USERNAME_TAKEN:
        return UsernameTakenError(str(detail_map.get("username", "")))
    if status in (400, 422):
        if code is ErrorCode.INVALID_HANDLE:
            return InvalidHandleError()
        if code is ErrorCode.INVALID_REORDER:
            return InvalidReorderError(message, details=detail_map or None)
        if code is ErrorCode.INVALID_USERNAME:
            return InvalidUsernameError(str(detail_map.get("username", "")))
        return DomainValidationError(
            message, error_code=code or ErrorCode.VALIDATION_ERROR, details=details
        )

    return TransportError(message, details={"status_code": status, "error_code": raw_code})


def _parse_code(raw: object) -> ErrorCode | None:
    try:
        return ErrorCode(str(raw))
    except ValueError:
        return None
