"""Profile domain entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import InvalidUsernameError

USERNAME_PATTERN = re.compile(r"^[a-z0-9-]{3,30}$")


def normalize_username(raw: str) -> str:
    """Lowercase and trim a username, rejecting anything outside the charset.

    Raises:
        InvalidUsernameError: If the result is not 3-30 chars of ``[a-z0-9-]``.
    """
    username = raw.strip().lower()
    if not USERNAME_PATTERN.fullmatch(username):
        raise InvalidUsernameError(raw)
    return username


@dataclass
class Profile:
    """Public identity of an account: the owner of a payment page."""

    user_id: UUID
    username: str
    id: UUID = field(default_factory=uuid4)
    display_name: str | None = None
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
