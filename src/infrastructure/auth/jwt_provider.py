"""Bearer token verification.

Sign-in and token issuance belong to the external identity provider; this
service only checks the tokens it is handed. Two signatures are accepted:

- ES256, checked against the provider's published JWKS
- HS256 with the shared ``JWT_SECRET_KEY`` (local development and tests)

Claims read: ``sub`` (account UUID, required), ``email``, ``role`` and
``user_metadata.display_name``.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Optional

import httpx
import structlog
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

_DECODE_OPTIONS = {"verify_aud": False}

# kid -> JWK, shared by every provider instance in the process
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """
    Return the provider's signing keys by ``kid``.

    A failed fetch yields an empty mapping and leaves the cache unset, so the
    next ES256 token retries.
    """
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.auth_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            keys = response.json().get("keys", [])
    except (httpx.HTTPError, ValueError):
        logger.exception("jwks_fetch_failed", jwks_url=jwks_url)
        return {}

    _jwks_cache = {key["kid"]: key for key in keys if key.get("kid")}
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


class JWTAuthProvider:
    """Verifies JWTs and, for local use, issues HS256 ones."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Verify a token and return its account.

        Returns None for a bad signature, an expired token, an unknown
        signing key, or a ``sub`` that is missing or not a UUID.
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                claims = await self._validate_es256(token, header)
            else:
                claims = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options=_DECODE_OPTIONS,
                )
            return TokenUser.from_claims(claims) if claims is not None else None
        except (JWTError, ValueError):
            return None

    async def _validate_es256(self, token: str, header: dict[str, Any]) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys()).get(kid)
        if key_data is None:
            # Unknown kid: keys may have rotated since the last fetch
            global _jwks_cache
            _jwks_cache = None
            key_data = (await _get_jwks_keys()).get(kid)
        if key_data is None:
            logger.warning("jwks_key_not_found", kid=kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options=_DECODE_OPTIONS,
        )

    def create_token(self, user: TokenUser) -> str:
        """Issue a token for ``user`` signed with the shared secret."""
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "role": "authenticated",
            "exp": datetime.now(UTC) + timedelta(minutes=self._expire_minutes),
            "user_metadata": {"display_name": user.display_name},
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
