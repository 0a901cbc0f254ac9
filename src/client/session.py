"""Explicit session context passed into every authenticated client call."""

from dataclasses import dataclass

from core.exceptions import AuthenticationError


@dataclass(frozen=True, slots=True)
class Session:
    """An owner's bearer token, or none for an anonymous visitor.

    The token is opaque here; the API decides whether it is valid.
    """

    token: str | None = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.token.strip())

    def authorization_header(self) -> dict[str, str]:
        """Build the ``Authorization`` header.

        Raises:
            AuthenticationError: If there is no token.
        """
        if not self.is_authenticated:
            raise AuthenticationError("Sign in to manage payment methods")
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        return f"Session(authenticated={self.is_authenticated})"
