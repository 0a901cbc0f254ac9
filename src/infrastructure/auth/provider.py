"""Authentication provider protocol and the account carried by a token."""

from dataclasses import dataclass
from typing import Any, Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """The account a verified bearer token was issued for."""

    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Optional["TokenUser"]:
        """
        Build an account from verified JWT claims.

        Returns None when ``sub`` is missing. Raises ValueError when ``sub``
        is not a UUID.
        """
        subject = claims.get("sub")
        if not subject:
            return None

        metadata = claims.get("user_metadata") or {}
        return cls(
            id=UUID(subject),
            email=claims.get("email"),
            display_name=metadata.get("display_name") or metadata.get("name") or claims.get("name"),
            role=claims.get("role"),
        )


class IAuthProvider(Protocol):
    """Verifies bearer tokens presented to owner endpoints."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's account, or None if the token is not acceptable."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a token for an account (local development and tests)."""
        ...
