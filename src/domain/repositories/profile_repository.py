"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by an account."""
        ...

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its (lowercase) username."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...
