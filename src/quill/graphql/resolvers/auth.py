from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ...auth.factory import issue_user_token
from ...auth.passwords import hash_password, verify_password
from ...database.connection import get_async_session
from ...dbmodels import Users
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, require_user_id, set_viewer

if TYPE_CHECKING:
    from ..mutations.root import CreateUserInput, LoginUserInput
    from ..types.auth import AuthPayload
    from ..types.user import User

logger = get_logger(__name__)

LOGIN_FAILED = "Unable to login"
EMAIL_TAKEN = "Email taken"


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def resolve_current_user(info: strawberry.Info) -> User:
    """Resolve the authenticated user."""
    user_id = await require_user_id(info)

    async with get_async_session() as session:
        user = await session.get(Users, user_id)

    if user is None:
        # Token outlived its user
        raise RuntimeError("User not found")

    from ..types.user import User as UserType

    return UserType.from_model(user)


async def create_user(info: strawberry.Info, data: CreateUserInput) -> AuthPayload:
    """
    Sign up a new user.

    The password is checked against the length policy and hashed before
    storage. Returns a session token for the new user.
    """
    # A present Authorization header must still be valid
    await get_auth_context_from_info(info)

    email = normalize_email(data.email)
    password_hash = hash_password(data.password)

    async with get_async_session() as session:
        existing = await session.scalar(select(Users.id).where(Users.email == email))
        if existing is not None:
            raise RuntimeError(EMAIL_TAKEN)

        user = Users(name=data.name, email=email, password=password_hash)
        session.add(user)
        try:
            await session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same email
            raise RuntimeError(EMAIL_TAKEN) from e

    token = await issue_user_token(user.id)
    set_viewer(info, user.id, token)

    logger.info("User created", user_id=str(user.id))

    from ..types.auth import AuthPayload as AuthPayloadType
    from ..types.user import User as UserType

    return AuthPayloadType(token=token, user=UserType.from_model(user))


async def login(info: strawberry.Info, data: LoginUserInput) -> AuthPayload:
    """
    Exchange email and password for a session token.

    Unknown emails and wrong passwords fail with the same message.
    """
    await get_auth_context_from_info(info)

    email = normalize_email(data.email)

    async with get_async_session() as session:
        user = await session.scalar(select(Users).where(Users.email == email))

    if user is None or not verify_password(data.password, user.password):
        logger.info("Login failed", reason="unknown email" if user is None else "bad password")
        raise RuntimeError(LOGIN_FAILED)

    token = await issue_user_token(user.id)
    set_viewer(info, user.id, token)

    logger.info("User logged in", user_id=str(user.id))

    from ..types.auth import AuthPayload as AuthPayloadType
    from ..types.user import User as UserType

    return AuthPayloadType(token=token, user=UserType.from_model(user))
