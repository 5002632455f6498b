"""Unit tests for CommentQueryService."""

from uuid import uuid4

import pytest

from discuss.domain.error import NotFoundError
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.service import CommentQueryService
from discuss.domain.value import CommentId, CommentSortOrder, UserId, VoteKind
from tests.conftest import make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestListComments:
    """Tests for list_comments method."""

    @pytest.mark.asyncio
    async def test_newest_first(self, unit_env):
        """Default sort returns the most recent comment first."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        old = await comment_repo.create(make_comment(author_id, "old", age_seconds=60))
        new = await comment_repo.create(make_comment(author_id, "new", age_seconds=1))

        # Act
        result = await query_service.list_comments()

        # Assert
        assert [c.id for c in result.comments] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_replies_are_not_listed_at_top_level(self, unit_env):
        """Only comments without a parent are paginated."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        parent = await comment_repo.create(make_comment(author_id, "parent"))
        reply = await comment_repo.create(
            make_comment(author_id, "reply", parent_id=parent.id)
        )
        await comment_repo.append_reply(parent.id, reply.id)

        # Act
        result = await query_service.list_comments()

        # Assert
        assert [c.id for c in result.comments] == [parent.id]
        assert result.pagination.total == 1
        assert [r.id for r in result.comments[0].replies] == [reply.id]

    @pytest.mark.asyncio
    async def test_most_liked_breaks_ties_by_recency(self, unit_env):
        """Likes descending, then created_at descending."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        one_like_old = await comment_repo.create(
            make_comment(author_id, "a", age_seconds=30)
        )
        one_like_new = await comment_repo.create(
            make_comment(author_id, "b", age_seconds=20)
        )
        two_likes = await comment_repo.create(
            make_comment(author_id, "c", age_seconds=10)
        )
        await comment_repo.add_vote(one_like_old.id, UserId(uuid4()), VoteKind.LIKE)
        await comment_repo.add_vote(one_like_new.id, UserId(uuid4()), VoteKind.LIKE)
        for _ in range(2):
            await comment_repo.add_vote(two_likes.id, UserId(uuid4()), VoteKind.LIKE)

        # Act
        result = await query_service.list_comments(sort=CommentSortOrder.MOST_LIKED)

        # Assert
        assert [c.id for c in result.comments] == [
            two_likes.id,
            one_like_new.id,
            one_like_old.id,
        ]

    @pytest.mark.asyncio
    async def test_most_disliked(self, unit_env):
        """Dislikes descending."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        calm = await comment_repo.create(make_comment(author_id, "calm", age_seconds=5))
        hated = await comment_repo.create(
            make_comment(author_id, "hated", age_seconds=50)
        )
        await comment_repo.add_vote(hated.id, UserId(uuid4()), VoteKind.DISLIKE)

        # Act
        result = await query_service.list_comments(
            sort=CommentSortOrder.MOST_DISLIKED
        )

        # Assert
        assert [c.id for c in result.comments] == [hated.id, calm.id]
        assert result.comments[0].dislike_count == 1

    @pytest.mark.asyncio
    async def test_pagination_metadata(self, unit_env):
        """25 comments at limit 10: page 3 has 5, no next, has prev."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        for i in range(25):
            await comment_repo.create(make_comment(author_id, f"c{i}", age_seconds=i))

        # Act
        first = await query_service.list_comments(page=1, limit=10)
        last = await query_service.list_comments(page=3, limit=10)

        # Assert
        assert len(first.comments) == 10
        assert first.pagination.pages == 3
        assert first.pagination.has_next is True
        assert first.pagination.has_prev is False

        assert len(last.comments) == 5
        assert last.pagination.total == 25
        assert last.pagination.has_next is False
        assert last.pagination.has_prev is True

    @pytest.mark.asyncio
    async def test_pages_do_not_overlap(self, unit_env):
        """Consecutive pages partition the listing."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        for i in range(7):
            await comment_repo.create(make_comment(author_id, f"c{i}", age_seconds=i))

        # Act
        pages = [
            await query_service.list_comments(page=page, limit=3)
            for page in (1, 2, 3)
        ]

        # Assert
        ids = [c.id for page in pages for c in page.comments]
        assert len(ids) == 7
        assert len(set(ids)) == 7

    @pytest.mark.asyncio
    async def test_empty_listing(self, unit_env):
        """No comments yields zero pages and no navigation."""
        query_service = await unit_env.get(CommentQueryService)

        result = await query_service.list_comments()

        assert result.comments == []
        assert result.pagination.total == 0
        assert result.pagination.pages == 0
        assert result.pagination.has_next is False
        assert result.pagination.has_prev is False


class TestGetComment:
    """Tests for get_comment method."""

    @pytest.mark.asyncio
    async def test_replies_follow_reply_order_with_authors(self, unit_env):
        """Replies appear in reply_ids order, each with its author summary."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        bob = await user_repo.save(make_user("bob", avatar_url="https://img/bob.png"))

        parent = await comment_repo.create(make_comment(alice.id, "parent"))
        first = await comment_repo.create(
            make_comment(bob.id, "first", parent_id=parent.id, age_seconds=2)
        )
        second = await comment_repo.create(
            make_comment(alice.id, "second", parent_id=parent.id, age_seconds=1)
        )
        await comment_repo.append_reply(parent.id, first.id)
        await comment_repo.append_reply(parent.id, second.id)

        # Act
        view = await query_service.get_comment(parent.id)

        # Assert
        assert view.author.display_name == "alice"
        assert [r.id for r in view.replies] == [first.id, second.id]
        assert view.replies[0].author.display_name == "bob"
        assert view.replies[0].author.avatar_url == "https://img/bob.png"

    @pytest.mark.asyncio
    async def test_missing_avatar_gets_generated_one(self, unit_env):
        """Authors without an avatar get a generated initials avatar."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        carol = await user_repo.save(make_user("carol"))
        comment = await comment_repo.create(make_comment(carol.id))

        # Act
        view = await query_service.get_comment(comment.id)

        # Assert
        assert "carol" in view.author.avatar_url

    @pytest.mark.asyncio
    async def test_unknown_author_yields_no_summary(self, unit_env):
        """A comment whose author is gone is still returned."""
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.create(make_comment(UserId(uuid4())))

        view = await query_service.get_comment(comment.id)

        assert view.author is None

    @pytest.mark.asyncio
    async def test_dangling_reply_ids_are_skipped(self, unit_env):
        """A reply ID with no comment behind it is left out of replies."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        parent = await comment_repo.create(make_comment(author_id, "parent"))
        reply = await comment_repo.create(
            make_comment(author_id, "reply", parent_id=parent.id)
        )
        await comment_repo.append_reply(parent.id, CommentId(uuid4()))
        await comment_repo.append_reply(parent.id, reply.id)

        # Act
        view = await query_service.get_comment(parent.id)

        # Assert
        assert [r.id for r in view.replies] == [reply.id]
        assert len(view.reply_ids) == 2

    @pytest.mark.asyncio
    async def test_replies_of_replies_are_not_expanded(self, unit_env):
        """Only one level of replies is embedded."""
        # Arrange
        query_service = await unit_env.get(CommentQueryService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        root = await comment_repo.create(make_comment(author_id, "root"))
        child = await comment_repo.create(
            make_comment(author_id, "child", parent_id=root.id)
        )
        grandchild = await comment_repo.create(
            make_comment(author_id, "grandchild", parent_id=child.id)
        )
        await comment_repo.append_reply(root.id, child.id)
        await comment_repo.append_reply(child.id, grandchild.id)

        # Act
        view = await query_service.get_comment(root.id)

        # Assert
        assert len(view.replies) == 1
        assert view.replies[0].reply_ids == [grandchild.id]
        assert not hasattr(view.replies[0], "replies")

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        """Unknown ID raises NotFoundError."""
        query_service = await unit_env.get(CommentQueryService)

        with pytest.raises(NotFoundError):
            await query_service.get_comment(CommentId(uuid4()))
