"""Unit tests for auth adapter factory."""

from uuid import uuid4

import pytest

from quill.auth.adapters.jwt import JWTAuthAdapter
from quill.auth.factory import (
    get_auth_adapter,
    get_auth_adapter_cached,
    issue_user_token,
    reset_auth_adapter,
)
from quill.config import DEVELOPMENT_JWT_SECRET, settings


class TestAuthFactory:
    """Test auth adapter factory."""

    def test_adapter_uses_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", "test-secret-key-for-testing-only")
        monkeypatch.setattr(settings, "jwt_issuer", "issuer-x")
        monkeypatch.setattr(settings, "jwt_audience", "audience-y")
        monkeypatch.setattr(settings, "token_expiry_days", 3)

        adapter = get_auth_adapter()

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "test-secret-key-for-testing-only"
        assert adapter.issuer == "issuer-x"
        assert adapter.audience == "audience-y"
        assert adapter.token_expiry_days == 3

    def test_development_secret_fallback(self, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", None)
        monkeypatch.setattr(settings, "environment", "test")

        adapter = get_auth_adapter()

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == DEVELOPMENT_JWT_SECRET

    def test_missing_secret_in_production(self, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", None)
        monkeypatch.setattr(settings, "environment", "production")

        with pytest.raises(ValueError, match="JWT secret is required in production"):
            get_auth_adapter()

    @pytest.mark.asyncio
    async def test_issue_user_token_verifies(self):
        user_id = uuid4()

        principal = await get_auth_adapter().verify_token(await issue_user_token(user_id))

        assert principal["subject"] == str(user_id)

    def test_cached_adapter_is_reused(self):
        assert get_auth_adapter_cached() is get_auth_adapter_cached()

    def test_reset_rebuilds_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", "first-secret-for-testing-only")
        first = get_auth_adapter_cached()

        monkeypatch.setattr(settings, "jwt_secret", "second-secret-for-testing-only")
        assert get_auth_adapter_cached() is first

        reset_auth_adapter()
        second = get_auth_adapter_cached()

        assert second is not first
        assert isinstance(second, JWTAuthAdapter)
        assert second.secret_key == "second-secret-for-testing-only"
