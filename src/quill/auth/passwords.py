"""Password hashing and policy."""

from __future__ import annotations

from passlib.context import CryptContext

from ..config import settings

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def validate_password(password: str) -> None:
    """Raise ValueError when the password does not meet the length policy."""
    minimum = settings.min_password_length
    if len(password) < minimum:
        raise ValueError(f"Password must be {minimum} characters or longer.")


def hash_password(password: str) -> str:
    """Validate and hash a plain-text password."""
    validate_password(password)
    return _pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain-text password against a stored hash. Unknown hash formats never match."""
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        return False
