"""Unit tests for ListCommentsUseCase and GetCommentUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
)
from discuss.domain.error import NotFoundError, ValidationError
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_default_page_size(self, unit_env):
        """Without a limit the configured default of 10 applies."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        list_comments = await unit_env.get(ListCommentsUseCase)
        author_id = str(uuid4())
        for i in range(12):
            await create.execute(CreateCommentRequest(content=f"c{i}", author_id=author_id))

        # Act
        page = await list_comments.execute(ListCommentsRequest())

        # Assert
        assert page.pagination.limit == 10
        assert len(page.comments) == 10
        assert page.pagination.pages == 2

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, unit_env):
        """Oversized limits are clamped to the configured maximum."""
        list_comments = await unit_env.get(ListCommentsUseCase)

        page = await list_comments.execute(ListCommentsRequest(limit=500))

        assert page.pagination.limit == 100


class TestGetCommentUseCase:
    """Tests for GetCommentUseCase."""

    @pytest.mark.asyncio
    async def test_get_existing(self, unit_env):
        create = await unit_env.get(CreateCommentUseCase)
        get_comment = await unit_env.get(GetCommentUseCase)
        created = await create.execute(
            CreateCommentRequest(content="hello", author_id=str(uuid4()))
        )

        view = await get_comment.execute(GetCommentRequest(comment_id=str(created.id)))

        assert view.id == created.id

    @pytest.mark.asyncio
    async def test_get_missing(self, unit_env):
        get_comment = await unit_env.get(GetCommentUseCase)

        with pytest.raises(NotFoundError):
            await get_comment.execute(GetCommentRequest(comment_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, unit_env):
        get_comment = await unit_env.get(GetCommentUseCase)

        with pytest.raises(ValidationError):
            await get_comment.execute(GetCommentRequest(comment_id="nope"))
