"""Unit tests for JWT authentication adapter (without database dependencies)."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from quill.auth.adapters.base import AuthenticationError
from quill.auth.adapters.jwt import JWTAuthAdapter


@pytest.fixture
def secret_key():
    return "test-secret-key-for-testing-only"


@pytest.fixture
def jwt_adapter(secret_key):
    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm="HS256",
        issuer="test-quill",
        audience="test-api",
    )


def make_token(secret_key, **overrides):
    now = datetime.now(UTC)
    payload = {
        "iss": "test-quill",
        "aud": "test-api",
        "sub": str(uuid4()),
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(hours=1),
    }
    payload.update(overrides)
    return jwt.encode({k: v for k, v in payload.items() if v is not None}, secret_key, "HS256")


class TestJWTAdapter:
    """Test JWT authentication adapter."""

    @pytest.mark.asyncio
    async def test_verify_valid_token(self, jwt_adapter, secret_key):
        subject = str(uuid4())
        principal = await jwt_adapter.verify_token(make_token(secret_key, sub=subject))

        assert principal["provider"] == "jwt"
        assert principal["subject"] == subject
        assert principal["claims"]["iss"] == "test-quill"

    @pytest.mark.asyncio
    async def test_verify_expired_token(self, jwt_adapter, secret_key):
        past_time = datetime.now(UTC) - timedelta(hours=2)
        token = make_token(
            secret_key, iat=past_time, nbf=past_time, exp=past_time + timedelta(minutes=30)
        )

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_wrong_secret(self, jwt_adapter):
        token = make_token("another-secret-key-that-is-long-enough")

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_wrong_audience(self, jwt_adapter, secret_key):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(make_token(secret_key, aud="someone-else"))

    @pytest.mark.asyncio
    async def test_verify_wrong_issuer(self, jwt_adapter, secret_key):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(make_token(secret_key, iss="someone-else"))

    @pytest.mark.asyncio
    async def test_verify_missing_subject(self, jwt_adapter, secret_key):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(make_token(secret_key, sub=None))

    @pytest.mark.asyncio
    async def test_verify_garbage(self, jwt_adapter):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token("not.a.jwt")

    @pytest.mark.asyncio
    async def test_issue_token(self, jwt_adapter, secret_key):
        user_id = uuid4()

        token = await jwt_adapter.issue_token(user_id, {"role": "author"})

        payload = jwt.decode(
            token, secret_key, algorithms=["HS256"], audience="test-api", issuer="test-quill"
        )
        assert payload["sub"] == str(user_id)
        assert payload["role"] == "author"
        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60

    @pytest.mark.asyncio
    async def test_issued_token_round_trips(self, jwt_adapter):
        user_id = uuid4()

        principal = await jwt_adapter.verify_token(await jwt_adapter.issue_token(user_id))

        assert principal["subject"] == str(user_id)

    @pytest.mark.asyncio
    async def test_token_expiry_is_configurable(self, secret_key):
        adapter = JWTAuthAdapter(
            secret_key=secret_key, issuer="test-quill", audience="test-api", token_expiry_days=1
        )

        payload = adapter.decode(await adapter.issue_token(uuid4()))

        assert payload["exp"] - payload["iat"] == 24 * 60 * 60
