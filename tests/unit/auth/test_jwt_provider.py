"""Unit tests for JWTAuthProvider.

Covers HS256 round trips, required claims, and the ES256/JWKS path:
- _get_jwks_keys() fetching, caching, and error handling
- _validate_es256() with a mocked JWKS endpoint and key rotation
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from jose import jwt as jose_jwt

from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import JWTAuthProvider, _get_jwks_keys
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://auth.example.com/.well-known/jwks.json"


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _mock_http_client(response: MagicMock | None = None, error: Exception | None = None):
    client = AsyncMock()
    if error is not None:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def _jwks_response(keys: list[dict]) -> MagicMock:
    response = MagicMock()
    response.json.return_value = {"keys": keys}
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture(autouse=True)
def _clear_jwks_cache():
    """Reset the module-level JWKS cache before and after every test."""
    jwt_provider_module._jwks_cache = None
    yield
    jwt_provider_module._jwks_cache = None


@pytest.fixture
def hs256_provider() -> JWTAuthProvider:
    """JWTAuthProvider configured for HS256 (local/test tokens)."""
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestHs256:
    async def test_round_trips_created_token(self, hs256_provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="alice@example.com", display_name="Alice")

        result = await hs256_provider.validate_token(hs256_provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.display_name == "Alice"
        assert result.role == "authenticated"

    async def test_accepts_token_without_email(self, hs256_provider: JWTAuthProvider):
        subject = uuid4()
        token = _make_hs256_token({"sub": str(subject), "exp": 9999999999})

        result = await hs256_provider.validate_token(token)

        assert result is not None
        assert result.id == subject
        assert result.email is None

    async def test_rejects_wrong_secret(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999}, secret="other")

        assert await hs256_provider.validate_token(token) is None

    async def test_rejects_missing_sub(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"email": "user@example.com", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_rejects_non_uuid_sub(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "not-a-uuid", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_rejects_garbage(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider.validate_token("not.a.jwt") is None


class TestGetJwksKeys:
    async def test_returns_empty_dict_without_jwks_url(self):
        with patch.object(jwt_provider_module, "settings") as mock_settings:
            mock_settings.auth_jwks_url = ""

            assert await _get_jwks_keys() == {}

    async def test_fetches_and_caches_keys(self):
        client = _mock_http_client(
            _jwks_response(
                [
                    {"kid": "key-1", "kty": "EC", "crv": "P-256", "x": "aa", "y": "bb"},
                    {"kid": "key-2", "kty": "EC", "crv": "P-256", "x": "cc", "y": "dd"},
                ]
            )
        )

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            result = await _get_jwks_keys()
            assert set(result) == {"key-1", "key-2"}

            client.get.reset_mock()
            assert await _get_jwks_keys() == result
            client.get.assert_not_called()

    async def test_returns_empty_dict_on_http_error(self):
        client = _mock_http_client(error=httpx.ConnectError("Connection refused"))

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            assert await _get_jwks_keys() == {}
            assert jwt_provider_module._jwks_cache is None

    async def test_skips_keys_without_kid(self):
        client = _mock_http_client(
            _jwks_response(
                [
                    {"kty": "EC", "crv": "P-256", "x": "aa", "y": "bb"},
                    {"kid": "good-key", "kty": "EC", "crv": "P-256", "x": "cc", "y": "dd"},
                ]
            )
        )

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            assert list(await _get_jwks_keys()) == ["good-key"]


class TestValidateEs256:
    async def test_returns_none_without_kid(self, hs256_provider: JWTAuthProvider):
        result = await hs256_provider._validate_es256("dummy.token.value", {"alg": "ES256"})

        assert result is None

    async def test_refetches_once_then_gives_up_on_unknown_kid(
        self, hs256_provider: JWTAuthProvider
    ):
        with patch.object(
            jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
        ) as mock_get_jwks:
            mock_get_jwks.return_value = {"other-kid": {"kty": "EC"}}

            result = await hs256_provider._validate_es256(
                "dummy.token.value", {"alg": "ES256", "kid": "missing-kid"}
            )

        assert result is None
        assert mock_get_jwks.call_count == 2

    async def test_decodes_with_matching_key(self, hs256_provider: JWTAuthProvider):
        key_data = {"kid": "test-kid", "kty": "EC", "crv": "P-256"}
        payload = {"sub": str(uuid4()), "exp": 9999999999}

        with (
            patch.object(
                jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
            ) as mock_get_jwks,
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module.jwt, "decode", return_value=payload) as mock_decode,
        ):
            mock_get_jwks.return_value = {"test-kid": key_data}

            result = await hs256_provider._validate_es256(
                "es256.token.value", {"alg": "ES256", "kid": "test-kid"}
            )

        assert result == payload
        mock_eckey_cls.assert_called_once_with(key_data, algorithm="ES256")
        mock_decode.assert_called_once_with(
            "es256.token.value",
            mock_eckey_cls.return_value,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    async def test_validate_token_takes_es256_path(self, hs256_provider: JWTAuthProvider):
        user_id = uuid4()
        payload = {
            "sub": str(user_id),
            "email": "es256user@example.com",
            "user_metadata": {"display_name": "ES256 User"},
            "role": "authenticated",
        }

        with (
            patch.object(
                jwt_provider_module.jwt,
                "get_unverified_header",
                return_value={"alg": "ES256", "kid": "k1"},
            ),
            patch.object(hs256_provider, "_validate_es256", new_callable=AsyncMock) as mock_es256,
        ):
            mock_es256.return_value = payload

            result = await hs256_provider.validate_token("es256.token.here")

        mock_es256.assert_called_once_with("es256.token.here", {"alg": "ES256", "kid": "k1"})
        assert result is not None
        assert result.id == user_id
        assert result.display_name == "ES256 User"
