"""Authentication and authorization for Quill."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import AuthContext
from .factory import get_auth_adapter, issue_user_token
from .middleware import authenticate_request, get_auth_context, get_request_auth_context
from .passwords import hash_password, validate_password, verify_password

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "Principal",
    "AuthContext",
    "get_auth_context",
    "authenticate_request",
    "get_request_auth_context",
    "get_auth_adapter",
    "issue_user_token",
    "hash_password",
    "validate_password",
    "verify_password",
]
