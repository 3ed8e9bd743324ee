"""Tests for password policy and hashing."""

import pytest

from quill.auth.passwords import hash_password, validate_password, verify_password


def test_hash_is_not_plain_text():
    hashed = hash_password("jesus123")

    assert hashed != "jesus123"
    assert hashed.startswith("$pbkdf2-sha256$")


def test_verify_password():
    hashed = hash_password("jesus123")

    assert verify_password("jesus123", hashed) is True
    assert verify_password("jesus2", hashed) is False


def test_hashes_are_salted():
    assert hash_password("jesus123") != hash_password("jesus123")


@pytest.mark.parametrize("password", ["", "paty", "1234567"])
def test_short_passwords_rejected(password):
    with pytest.raises(ValueError, match="Password must be 8 characters or longer."):
        hash_password(password)


def test_minimum_length_is_accepted():
    validate_password("12345678")


def test_minimum_length_follows_settings(monkeypatch):
    from quill.config import settings

    monkeypatch.setattr(settings, "min_password_length", 12)

    with pytest.raises(ValueError, match="Password must be 12 characters or longer."):
        validate_password("guadalupana")


def test_unknown_hash_never_matches():
    assert verify_password("jesus123", "jesus123") is False
