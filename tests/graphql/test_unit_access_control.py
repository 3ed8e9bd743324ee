"""
Unit tests for resolver access control helpers
"""

import uuid
from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from quill.auth.adapters.base import AuthenticationError
from quill.auth.context import AuthContext
from quill.auth.factory import issue_user_token
from quill.dbmodels import Posts
from quill.graphql.access_control import (
    MAX_PAGE_SIZE,
    can_view_post,
    get_auth_context_from_info,
    get_viewer_id,
    is_post_author,
    parse_id,
    require_user_id,
    set_viewer,
    validate_pagination,
)


def make_info(authorization: str | None = None) -> MagicMock:
    """Build a strawberry.Info stand-in carrying a request with the given header."""
    headers = [(b"authorization", authorization.encode())] if authorization else []
    request = Request({"type": "http", "method": "POST", "path": "/graphql", "headers": headers})
    info = MagicMock()
    info.context = {"request": request}
    return info


@pytest.fixture
def sample_post():
    post = MagicMock(spec=Posts)
    post.id = uuid.uuid4()
    post.author_id = uuid.uuid4()
    post.published = False
    return post


class TestCanViewPost:
    def test_published_post_anonymous(self, sample_post):
        sample_post.published = True
        assert can_view_post(sample_post, None) is True

    def test_published_post_other_user(self, sample_post):
        sample_post.published = True
        assert can_view_post(sample_post, uuid.uuid4()) is True

    def test_draft_anonymous(self, sample_post):
        assert can_view_post(sample_post, None) is False

    def test_draft_other_user(self, sample_post):
        assert can_view_post(sample_post, uuid.uuid4()) is False

    def test_draft_author(self, sample_post):
        assert can_view_post(sample_post, sample_post.author_id) is True


class TestIsPostAuthor:
    def test_author(self, sample_post):
        assert is_post_author(sample_post, sample_post.author_id) is True

    def test_not_author(self, sample_post):
        assert is_post_author(sample_post, uuid.uuid4()) is False

    def test_anonymous(self, sample_post):
        sample_post.published = True
        assert is_post_author(sample_post, None) is False


class TestAuthContextFromInfo:
    @pytest.mark.asyncio
    async def test_anonymous_request(self):
        info = make_info()

        assert await get_viewer_id(info) is None
        with pytest.raises(AuthenticationError, match="Authentication required"):
            await require_user_id(info)

    @pytest.mark.asyncio
    async def test_authenticated_request(self):
        user_id = uuid.uuid4()
        info = make_info(f"Bearer {await issue_user_token(user_id)}")

        assert await require_user_id(info) == user_id
        assert await get_viewer_id(info) == user_id

    @pytest.mark.asyncio
    async def test_context_is_cached(self):
        info = make_info()

        first = await get_auth_context_from_info(info)
        second = await get_auth_context_from_info(info)

        assert first is second
        assert info.context["auth"] is first

    @pytest.mark.asyncio
    async def test_invalid_token_requires_authentication(self):
        info = make_info("Bearer not-a-jwt")

        with pytest.raises(AuthenticationError, match="^Authentication required$"):
            await get_viewer_id(info)

    @pytest.mark.asyncio
    async def test_malformed_header_requires_authentication(self):
        info = make_info("Token abc")

        with pytest.raises(AuthenticationError, match="^Authentication required$"):
            await require_user_id(info)

    @pytest.mark.asyncio
    async def test_outcome_stored_on_request_is_reused(self):
        user_id = uuid.uuid4()
        info = make_info("Bearer not-a-jwt")
        info.context["request"].state.auth_outcome = AuthContext(
            user_id=user_id,
            principal={"provider": "jwt", "subject": str(user_id)},
            token="already-verified",
        )

        assert await require_user_id(info) == user_id

    @pytest.mark.asyncio
    async def test_missing_request_is_anonymous(self):
        info = MagicMock()
        info.context = {}

        context = await get_auth_context_from_info(info)

        assert context == AuthContext.anonymous()

    @pytest.mark.asyncio
    async def test_set_viewer_overrides_anonymous(self):
        info = make_info()
        await get_auth_context_from_info(info)
        user_id = uuid.uuid4()

        set_viewer(info, user_id, "token")

        assert await require_user_id(info) == user_id


class TestArguments:
    def test_parse_id(self):
        value = uuid.uuid4()
        assert parse_id(str(value)) == value

    def test_parse_malformed_id(self):
        assert parse_id("not-a-uuid") is None

    def test_default_pagination(self):
        assert validate_pagination(None, None) == (None, 0)

    def test_pagination_bounds(self):
        assert validate_pagination(MAX_PAGE_SIZE, 5) == (MAX_PAGE_SIZE, 5)

    @pytest.mark.parametrize("first", [0, -1, MAX_PAGE_SIZE + 1])
    def test_first_out_of_range(self, first):
        with pytest.raises(ValueError, match="'first' must be between"):
            validate_pagination(first, 0)

    def test_negative_skip(self):
        with pytest.raises(ValueError, match="'skip' must not be negative"):
            validate_pagination(None, -1)
