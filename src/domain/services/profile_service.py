"""Profile service layer with business logic."""

from datetime import datetime
from typing import Callable, cast
from uuid import UUID

import structlog

from core.exceptions import UsernameTakenError
from domain.entities.profile import Profile, normalize_username
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _clean(value: str | None) -> str | None:
    """Trim optional text, storing blanks as None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> Profile | None:
        """Get the caller's profile, or None if it has not been set up yet."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_user(user_id)

    async def upsert(
        self,
        user_id: UUID,
        username: str,
        display_name: object = ...,  # Sentinel: leave unchanged
        avatar: object = ...,
        bio: object = ...,
    ) -> Profile:
        """Create or update the caller's profile.

        Keyed by account, so repeating the same call is idempotent. Optional
        fields left as ``...`` keep their stored value; ``None`` clears them.

        Raises:
            InvalidUsernameError: If the username violates charset/length rules.
            UsernameTakenError: If another account already owns the username.
        """
        normalized = normalize_username(username)

        async with self._uow_factory() as uow:
            holder = await uow.profiles.get_by_username(normalized)
            if holder and holder.user_id != user_id:
                raise UsernameTakenError(normalized)

            profile = await uow.profiles.get_by_user(user_id)
            created = profile is None
            if profile is None:
                profile = Profile(user_id=user_id, username=normalized)

            profile.username = normalized
            if display_name is not ...:
                profile.display_name = _clean(cast(str | None, display_name))
            if avatar is not ...:
                profile.avatar = _clean(cast(str | None, avatar))
            if bio is not ...:
                profile.bio = _clean(cast(str | None, bio))

            if created:
                saved = await uow.profiles.create(profile)
            else:
                profile.updated_at = datetime.utcnow()
                saved = await uow.profiles.update(profile)

            await uow.commit()

        logger.info(
            "profile_saved",
            user_id=str(user_id),
            username=saved.username,
            created=created,
        )
        return saved
