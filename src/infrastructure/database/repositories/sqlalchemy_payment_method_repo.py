"""SQLAlchemy implementation of PaymentMethod repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.payment_method import PaymentMethod
from infrastructure.database.models import PaymentMethodModel


class SQLAlchemyPaymentMethodRepository:
    """SQLAlchemy implementation of IPaymentMethodRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> PaymentMethod | None:
        """Get a payment method by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_all_for_user(self, user_id: UUID) -> list[PaymentMethod]:
        """Get all payment methods for a user, ordered by sort_order."""
        stmt = (
            select(PaymentMethodModel)
            .where(PaymentMethodModel.user_id == user_id)
            .order_by(PaymentMethodModel.sort_order, PaymentMethodModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_active_for_user(self, user_id: UUID) -> list[PaymentMethod]:
        """Get only active payment methods for a user, ordered by sort_order."""
        stmt = (
            select(PaymentMethodModel)
            .where(
                PaymentMethodModel.user_id == user_id,
                PaymentMethodModel.active == True,  # noqa: E712
            )
            .order_by(PaymentMethodModel.sort_order, PaymentMethodModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_max_sort_order(self, user_id: UUID) -> int | None:
        """Get the highest sort_order in use, or None if the user has none."""
        stmt = select(func.max(PaymentMethodModel.sort_order)).where(
            PaymentMethodModel.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.scalar()

    async def create(self, method: PaymentMethod) -> PaymentMethod:
        """Create a new payment method."""
        model = self._to_model(method)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, method: PaymentMethod) -> PaymentMethod:
        """Update an existing payment method."""
        model = await self._get_model(method.id)

        if not model:
            raise ValueError(f"Payment method {method.id} not found")

        model.type = method.type
        model.label = method.label
        model.handle = method.handle
        model.sort_order = method.sort_order
        model.active = method.active
        model.updated_at = method.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a payment method."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def set_sort_orders(self, positions: dict[UUID, int]) -> None:
        """Write sort_order values for many payment methods at once."""
        if not positions:
            return

        stmt = select(PaymentMethodModel).where(PaymentMethodModel.id.in_(list(positions)))
        result = await self._session.execute(stmt)
        for model in result.scalars():
            model.sort_order = positions[model.id]

        await self._session.flush()

    async def _get_model(self, id: UUID) -> PaymentMethodModel | None:
        stmt = select(PaymentMethodModel).where(PaymentMethodModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: PaymentMethodModel) -> PaymentMethod:
        """Convert ORM model to domain entity."""
        return PaymentMethod(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            label=model.label,
            handle=model.handle,
            sort_order=model.sort_order,
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: PaymentMethod) -> PaymentMethodModel:
        """Convert domain entity to ORM model."""
        return PaymentMethodModel(
            id=entity.id,
            user_id=entity.user_id,
            type=entity.type,
            label=entity.label,
            handle=entity.handle,
            sort_order=entity.sort_order,
            active=entity.active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
