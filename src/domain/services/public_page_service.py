"""Compose the read-only public page shown to visitors."""

from typing import Callable

from core.exceptions import ProfileNotFoundError
from domain.entities.public_page import PublicPage, PublicPaymentMethod
from domain.repositories.unit_of_work import IUnitOfWork
from domain.resolution import resolve


class PublicPageService:
    """Builds public projections from profiles and their payment methods."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_public_page(self, username: str) -> PublicPage:
        """Get a profile's public page by username (case-insensitive).

        Only active methods are included, in ascending sort_order. Actions are
        resolved on every call so registry changes apply to stored methods.

        Raises:
            ProfileNotFoundError: If no profile has this username.
        """
        normalized = username.strip().lower()

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(normalized)
            if not profile:
                raise ProfileNotFoundError(username)
            methods = await uow.payment_methods.get_active_for_user(profile.user_id)

        active = sorted((m for m in methods if m.active), key=lambda m: m.sort_order)

        return PublicPage(
            username=profile.username,
            display_name=profile.display_name,
            avatar=profile.avatar,
            bio=profile.bio,
            payment_methods=tuple(
                PublicPaymentMethod(
                    id=m.id,
                    type=m.type,
                    label=m.label,
                    handle=m.handle,
                    sort_order=m.sort_order,
                    action=resolve(m),
                )
                for m in active
            ),
        )
