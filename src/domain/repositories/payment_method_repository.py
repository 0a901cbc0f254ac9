"""Payment method repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.payment_method import PaymentMethod


class IPaymentMethodRepository(Protocol):
    """Repository interface for PaymentMethod entities."""

    async def get(self, id: UUID) -> PaymentMethod | None:
        """Get a payment method by ID."""
        ...

    async def get_all_for_user(self, user_id: UUID) -> list[PaymentMethod]:
        """Get all payment methods for a user, ordered by sort_order."""
        ...

    async def get_active_for_user(self, user_id: UUID) -> list[PaymentMethod]:
        """Get only active payment methods for a user, ordered by sort_order."""
        ...

    async def get_max_sort_order(self, user_id: UUID) -> int | None:
        """Get the highest sort_order in use, or None if the user has none."""
        ...

    async def create(self, method: PaymentMethod) -> PaymentMethod:
        """Create a new payment method."""
        ...

    async def update(self, method: PaymentMethod) -> PaymentMethod:
        """Update an existing payment method."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a payment method and return success status."""
        ...

    async def set_sort_orders(self, positions: dict[UUID, int]) -> None:
        """Write sort_order values for many payment methods at once."""
        ...
