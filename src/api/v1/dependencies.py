"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.payment_method_service import PaymentMethodService
from domain.services.profile_service import ProfileService
from domain.services.public_page_service import PublicPageService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_payment_method_service() -> PaymentMethodService:
    """Get PaymentMethod service instance."""
    return PaymentMethodService(get_uow_factory())


@lru_cache
def get_public_page_service() -> PublicPageService:
    """Get PublicPage service instance."""
    return PublicPageService(get_uow_factory())
