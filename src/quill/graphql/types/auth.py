"""
Authentication GraphQL type definitions
"""

import strawberry

from .user import User


@strawberry.type
class AuthPayload:
    """A signed session token together with the user it belongs to."""

    token: str
    user: User
