"""Payment method service layer with business logic.

Owns an account's ordered collection of payment methods. Every operation is
scoped to the calling account: ids belonging to anyone else are reported as
not found. Writes never renumber other methods except through ``reorder``,
which is the single place ``sort_order`` contiguity is restored.
"""

from datetime import datetime
from typing import Callable, cast
from uuid import UUID

import structlog

from core.exceptions import InvalidHandleError, PaymentMethodNotFoundError
from domain.entities.payment_method import PaymentMethod
from domain.ordering import validate_permutation
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _require_handle(handle: str) -> str:
    handle = handle.strip()
    if not handle:
        raise InvalidHandleError()
    return handle


def _clean_label(label: str | None) -> str | None:
    if label is None:
        return None
    return label.strip() or None


class PaymentMethodService:
    """Service layer for PaymentMethod business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all_for_user(self, user_id: UUID) -> list[PaymentMethod]:
        """Get the caller's payment methods in ascending sort_order."""
        async with self._uow_factory() as uow:
            return await uow.payment_methods.get_all_for_user(user_id)

    async def create(
        self,
        user_id: UUID,
        type: str,
        handle: str,
        label: str | None = None,
    ) -> PaymentMethod:
        """Append a new active payment method to the end of the caller's list.

        Raises:
            InvalidHandleError: If the handle is empty or whitespace.
        """
        handle = _require_handle(handle)

        async with self._uow_factory() as uow:
            # Deletes leave gaps; append after the highest position.
            highest = await uow.payment_methods.get_max_sort_order(user_id)
            sort_order = 0 if highest is None else highest + 1

            method = PaymentMethod(
                user_id=user_id,
                type=type.strip(),
                handle=handle,
                label=_clean_label(label),
                sort_order=sort_order,
                active=True,
            )
            created = await uow.payment_methods.create(method)
            await uow.commit()

        logger.info(
            "payment_method_created",
            user_id=str(user_id),
            method_id=str(created.id),
            type=created.type,
            sort_order=created.sort_order,
        )
        return created

    async def update(
        self,
        method_id: UUID,
        user_id: UUID,
        type: str | None = None,
        label: object = ...,  # Sentinel to detect explicit None
        handle: str | None = None,
        active: bool | None = None,
    ) -> PaymentMethod:
        """Partially update a payment method; omitted fields keep their value.

        Raises:
            PaymentMethodNotFoundError: If the id is unknown or not the caller's.
            InvalidHandleError: If a new handle is empty.
        """
        if handle is not None:
            handle = _require_handle(handle)

        async with self._uow_factory() as uow:
            method = await self._get_owned(uow, method_id, user_id)

            if type is not None:
                method.type = type.strip()
            if label is not ...:
                method.label = _clean_label(cast(str | None, label))
            if handle is not None:
                method.handle = handle
            if active is not None:
                method.active = active

            method.updated_at = datetime.utcnow()
            updated = await uow.payment_methods.update(method)
            await uow.commit()

        logger.info(
            "payment_method_updated",
            user_id=str(user_id),
            method_id=str(method_id),
        )
        return updated

    async def toggle_active(self, method_id: UUID, user_id: UUID) -> PaymentMethod:
        """Flip a payment method's active flag once."""
        async with self._uow_factory() as uow:
            method = await self._get_owned(uow, method_id, user_id)
            method.toggle_active()
            updated = await uow.payment_methods.update(method)
            await uow.commit()

        logger.info(
            "payment_method_toggled",
            user_id=str(user_id),
            method_id=str(method_id),
            active=updated.active,
        )
        return updated

    async def delete(self, method_id: UUID, user_id: UUID) -> bool:
        """Delete a payment method. Other methods keep their sort_order."""
        async with self._uow_factory() as uow:
            await self._get_owned(uow, method_id, user_id)
            deleted = await uow.payment_methods.delete(method_id)
            await uow.commit()

        logger.info(
            "payment_method_deleted",
            user_id=str(user_id),
            method_id=str(method_id),
        )
        return deleted

    async def reorder(self, user_id: UUID, ordered_ids: list[UUID]) -> list[PaymentMethod]:
        """Assign ``sort_order = index`` following ``ordered_ids``.

        The ids must be a permutation of the caller's current methods. On
        rejection nothing is written.

        Raises:
            InvalidReorderError: On missing, foreign, or duplicated ids.
        """
        async with self._uow_factory() as uow:
            current = await uow.payment_methods.get_all_for_user(user_id)
            validate_permutation(ordered_ids, [m.id for m in current])

            await uow.payment_methods.set_sort_orders(
                {method_id: index for index, method_id in enumerate(ordered_ids)}
            )
            await uow.commit()

            reordered = await uow.payment_methods.get_all_for_user(user_id)

        logger.info(
            "payment_methods_reordered",
            user_id=str(user_id),
            count=len(reordered),
        )
        return reordered

    @staticmethod
    async def _get_owned(uow: IUnitOfWork, method_id: UUID, user_id: UUID) -> PaymentMethod:
        """Load a payment method, hiding other accounts' methods as not found."""
        method = await uow.payment_methods.get(method_id)
        if not method or method.user_id != user_id:
            raise PaymentMethodNotFoundError(str(method_id))
        return method
