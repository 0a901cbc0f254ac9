"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

bearer_scheme = HTTPBearer(auto_error=False, description="Token from the identity provider")

_auth_provider: IAuthProvider | None = None


def get_auth_provider() -> IAuthProvider:
    """Return the process-wide token verifier."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    auth_provider: Annotated[IAuthProvider, Depends(get_auth_provider)],
) -> TokenUser:
    """
    Resolve the owner making the request.

    Missing credentials and rejected tokens are reported separately so a
    client can tell "sign in" from "sign in again".

    Raises:
        AuthenticationError: UNAUTHORIZED without a bearer token,
            INVALID_TOKEN when the token does not verify
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)
    if user is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
