"""Owner-side manager for an ordered collection of payment methods.

The API is the single source of truth: every successful write is followed by
a fresh list fetch, and the local list is only ever replaced by what the
server returned. There is no optimistic local mutation.

Writes are serialized by one lock held across the write and its reload, so a
move computes its permutation only after every earlier create, delete or
reorder has reloaded. Two browser tabs can still race each other; the last
reorder the server applies wins.
"""

import asyncio
from collections.abc import Sequence
from typing import Any
from uuid import UUID

import structlog

from api.v1.schemas.payment_method import PaymentMethodResponse
from client.api_client import PaymentsApiClient
from client.session import Session
from core.exceptions import AppException, AuthenticationError, InvalidHandleError
from domain.ordering import swap_adjacent

logger = structlog.get_logger()


class MethodCollectionManager:
    """Create, edit, toggle, delete and reorder one owner's payment methods."""

    def __init__(self, api: PaymentsApiClient, session: Session) -> None:
        self._api = api
        self._session = session
        self._methods: list[PaymentMethodResponse] = []
        self._write_lock = asyncio.Lock()
        self._closed = False

    @property
    def methods(self) -> tuple[PaymentMethodResponse, ...]:
        """Last list the server returned, in ascending ``sort_order``."""
        return tuple(self._methods)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Stop applying reload results, e.g. when the owner leaves the page."""
        self._closed = True

    async def refresh(self) -> list[PaymentMethodResponse]:
        """Fetch the owner's methods and replace the local list."""
        self._require_session()
        methods = await self._api.list_payment_methods(self._session)
        self._apply(methods)
        return methods

    async def create(
        self, type: str, handle: str, label: str | None = None
    ) -> PaymentMethodResponse:
        """Append a new active method, then reload.

        Raises:
            AuthenticationError: Without a session, before any request.
            InvalidHandleError: For an empty handle, before any request.
        """
        self._require_session()
        if not handle.strip():
            raise InvalidHandleError()

        async with self._write_lock:
            created = await self._api.create_payment_method(self._session, type, handle, label)
            await self._reload_after("create")
        return created

    async def update(
        self,
        method_id: UUID,
        *,
        type: str | None = None,
        label: Any = ...,
        handle: str | None = None,
        active: bool | None = None,
    ) -> PaymentMethodResponse:
        """Partially update a method; only the fields given are sent.

        ``label=None`` clears the label, leaving it out keeps it.
        """
        self._require_session()
        if handle is not None and not handle.strip():
            raise InvalidHandleError()

        patch: dict[str, Any] = {}
        if type is not None:
            patch["type"] = type
        if label is not ...:
            patch["label"] = label
        if handle is not None:
            patch["handle"] = handle
        if active is not None:
            patch["active"] = active

        async with self._write_lock:
            updated = await self._api.update_payment_method(self._session, method_id, patch)
            await self._reload_after("update")
        return updated

    async def toggle_active(self, method_id: UUID) -> PaymentMethodResponse:
        """Flip a method's active flag once, then reload."""
        self._require_session()
        async with self._write_lock:
            toggled = await self._api.toggle_payment_method(self._session, method_id)
            await self._reload_after("toggle_active")
        return toggled

    async def delete(self, method_id: UUID) -> None:
        """Delete a method, then reload. Other positions are left as they are."""
        self._require_session()
        async with self._write_lock:
            await self._api.delete_payment_method(self._session, method_id)
            await self._reload_after("delete")

    async def reorder(self, ordered_ids: Sequence[UUID]) -> list[PaymentMethodResponse]:
        """Submit a full new order (``sort_order = index``), then reload."""
        self._require_session()
        async with self._write_lock:
            return await self._submit_order(list(ordered_ids))

    async def move_up(self, index: int) -> list[PaymentMethodResponse]:
        """Swap the method at ``index`` with the one above it.

        A no-op on the first method: nothing is sent and the current list is
        returned.
        """
        return await self._move(index, -1)

    async def move_down(self, index: int) -> list[PaymentMethodResponse]:
        """Swap the method at ``index`` with the one below it; a no-op on the last."""
        return await self._move(index, 1)

    async def _move(self, index: int, offset: int) -> list[PaymentMethodResponse]:
        self._require_session()
        async with self._write_lock:
            ordered_ids = swap_adjacent([m.id for m in self._methods], index, offset)
            if ordered_ids is None:
                return list(self._methods)
            return await self._submit_order(ordered_ids)

    async def _submit_order(self, ordered_ids: list[UUID]) -> list[PaymentMethodResponse]:
        reordered = await self._api.reorder_payment_methods(self._session, ordered_ids)
        reloaded = await self._reload_after("reorder")
        return reloaded if reloaded is not None else reordered

    async def _reload_after(self, operation: str) -> list[PaymentMethodResponse] | None:
        """Refetch after a successful write and return the fetched list.

        A failed reload is logged, not raised, and returns None: the write
        already happened and the local list stays stale until the next
        ``refresh()``.
        """
        try:
            methods = await self._api.list_payment_methods(self._session)
        except AppException as e:
            logger.warning(
                "payment_methods_reload_failed",
                operation=operation,
                error_code=e.error_code.value,
                message=e.message,
            )
            return None
        self._apply(methods)
        return methods

    def _apply(self, methods: list[PaymentMethodResponse]) -> None:
        if self._closed:
            logger.debug("payment_methods_reload_discarded", count=len(methods))
            return
        self._methods = list(methods)

    def _require_session(self) -> None:
        if not self._session.is_authenticated:
            raise AuthenticationError("Sign in to manage payment methods")
