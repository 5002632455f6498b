"""PostgreSQL implementation of Comment repository."""

from collections import defaultdict
from typing import Any, List, Optional, Sequence

from sqlalchemy import asc, delete, desc, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import ValidationError
from discuss.domain.model import Comment
from discuss.domain.model.common import utc_now
from discuss.domain.repository import CommentFilter, CommentRepository
from discuss.domain.repository.comment import UPDATABLE_FIELDS
from discuss.domain.value import CommentId, CommentSortOrder, UserId, VoteKind
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.repository.common import store_operation
from discuss.persistence.tables import (
    comment_replies_table,
    comment_votes_table,
    comments_table,
)


def _vote_count(kind: VoteKind):
    """Correlated subquery counting one kind of vote per comment row."""
    return (
        select(func.count())
        .select_from(comment_votes_table)
        .where(
            comment_votes_table.c.comment_id == comments_table.c.id,
            comment_votes_table.c.kind == kind.value,
        )
        .correlate(comments_table)
        .scalar_subquery()
    )


def _filter_conditions(filter: CommentFilter) -> list:
    conditions = []
    if filter.top_level_only:
        conditions.append(comments_table.c.parent_id.is_(None))
    if filter.parent_id is not None:
        conditions.append(comments_table.c.parent_id == filter.parent_id)
    if filter.author_id is not None:
        conditions.append(comments_table.c.author_id == filter.author_id)
    return conditions


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Vote sets come from comment_votes and reply order from comment_replies;
    both are loaded in one batch per query.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _hydrate(self, rows: Sequence[Any]) -> List[Comment]:
        """Attach vote sets and reply IDs to comment rows."""
        if not rows:
            return []

        ids = [row.id for row in rows]

        likers: dict[Any, list] = defaultdict(list)
        dislikers: dict[Any, list] = defaultdict(list)
        vote_result = await self.session.execute(
            select(
                comment_votes_table.c.comment_id,
                comment_votes_table.c.user_id,
                comment_votes_table.c.kind,
            ).where(comment_votes_table.c.comment_id.in_(ids))
        )
        for comment_id, user_id, kind in vote_result.fetchall():
            target = likers if kind == VoteKind.LIKE.value else dislikers
            target[comment_id].append(user_id)

        replies: dict[Any, list] = defaultdict(list)
        reply_result = await self.session.execute(
            select(comment_replies_table.c.parent_id, comment_replies_table.c.reply_id)
            .where(comment_replies_table.c.parent_id.in_(ids))
            .order_by(comment_replies_table.c.seq)
        )
        for parent_id, reply_id in reply_result.fetchall():
            replies[parent_id].append(reply_id)

        return [
            row_to_comment(
                row._asdict(),
                liker_ids=likers[row.id],
                disliker_ids=dislikers[row.id],
                reply_ids=replies[row.id],
            )
            for row in rows
        ]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        with store_operation("comment_repository.find_by_id", comment_id=str(comment_id)):
            stmt = select(comments_table).where(comments_table.c.id == comment_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if not row:
                return None
            return (await self._hydrate([row]))[0]

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments by ID, preserving the requested order."""
        if not comment_ids:
            return []

        with store_operation("comment_repository.find_by_ids", count=len(comment_ids)):
            stmt = select(comments_table).where(comments_table.c.id.in_(comment_ids))
            result = await self.session.execute(stmt)
            comments = await self._hydrate(result.fetchall())
            by_id = {comment.id: comment for comment in comments}
            return [by_id[cid] for cid in comment_ids if cid in by_id]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        with store_operation(
            "comment_repository.find_children", parent_id=str(parent_id)
        ):
            stmt = (
                select(comments_table)
                .where(comments_table.c.parent_id == parent_id)
                .order_by(asc(comments_table.c.created_at), asc(comments_table.c.id))
            )
            result = await self.session.execute(stmt)
            return await self._hydrate(result.fetchall())

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        with store_operation("comment_repository.create", comment_id=str(comment.id)):
            stmt = comments_table.insert().values(**comment_to_dict(comment))
            await self.session.execute(stmt)
            await self.session.flush()
            return comment.model_copy(
                update={
                    "liker_ids": frozenset(),
                    "disliker_ids": frozenset(),
                    "reply_ids": (),
                }
            )

    async def update_fields(
        self, comment_id: CommentId, **fields: Any
    ) -> Optional[Comment]:
        """Update scalar fields of a comment and bump updated_at."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {sorted(unknown)}")

        with store_operation(
            "comment_repository.update_fields",
            comment_id=str(comment_id),
            fields=sorted(fields),
        ):
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment_id)
                .values(**fields, updated_at=utc_now())
                .returning(comments_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                return None

            await self.session.flush()
            return (await self._hydrate([row]))[0]

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Vote rows and reply edges are removed by ON DELETE CASCADE.
        """
        with store_operation("comment_repository.delete", comment_id=str(comment_id)):
            stmt = delete(comments_table).where(comments_table.c.id == comment_id)
            await self.session.execute(stmt)
            await self.session.flush()

    async def query(
        self,
        filter: CommentFilter,
        sort: CommentSortOrder = CommentSortOrder.NEWEST,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[List[Comment], int]:
        """Find comments with filtering, sorting and pagination."""
        with store_operation(
            "comment_repository.query",
            sort=sort.value,
            offset=offset,
            limit=limit,
        ):
            conditions = _filter_conditions(filter)

            count_stmt = select(func.count()).select_from(comments_table)
            stmt = select(comments_table)
            for condition in conditions:
                count_stmt = count_stmt.where(condition)
                stmt = stmt.where(condition)

            order_by = [desc(comments_table.c.created_at), desc(comments_table.c.id)]
            if sort == CommentSortOrder.MOST_LIKED:
                order_by.insert(0, desc(_vote_count(VoteKind.LIKE)))
            elif sort == CommentSortOrder.MOST_DISLIKED:
                order_by.insert(0, desc(_vote_count(VoteKind.DISLIKE)))

            stmt = stmt.order_by(*order_by).offset(offset).limit(limit)

            total = (await self.session.execute(count_stmt)).scalar() or 0
            result = await self.session.execute(stmt)
            return await self._hydrate(result.fetchall()), total

    async def add_vote(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> None:
        """Insert a vote membership row; existing rows are left alone."""
        with store_operation(
            "comment_repository.add_vote",
            comment_id=str(comment_id),
            user_id=str(user_id),
            kind=kind.value,
        ):
            stmt = (
                pg_insert(comment_votes_table)
                .values(comment_id=comment_id, user_id=user_id, kind=kind.value)
                .on_conflict_do_nothing(
                    index_elements=["comment_id", "user_id", "kind"]
                )
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove_vote(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> bool:
        """Delete a vote membership row."""
        with store_operation(
            "comment_repository.remove_vote",
            comment_id=str(comment_id),
            user_id=str(user_id),
            kind=kind.value,
        ):
            stmt = delete(comment_votes_table).where(
                comment_votes_table.c.comment_id == comment_id,
                comment_votes_table.c.user_id == user_id,
                comment_votes_table.c.kind == kind.value,
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def append_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Insert a reply edge; seq keeps creation order."""
        with store_operation(
            "comment_repository.append_reply",
            parent_id=str(parent_id),
            reply_id=str(reply_id),
        ):
            stmt = (
                pg_insert(comment_replies_table)
                .values(parent_id=parent_id, reply_id=reply_id)
                .on_conflict_do_nothing(index_elements=["parent_id", "reply_id"])
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove_reply(self, parent_id: CommentId, reply_id: CommentId) -> bool:
        """Delete a reply edge.

        Runs in a savepoint: a failure here rolls back only this statement
        and leaves the surrounding transaction usable.
        """
        with store_operation(
            "comment_repository.remove_reply",
            parent_id=str(parent_id),
            reply_id=str(reply_id),
        ):
            stmt = delete(comment_replies_table).where(
                comment_replies_table.c.parent_id == parent_id,
                comment_replies_table.c.reply_id == reply_id,
            )
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
            return result.rowcount > 0  # type: ignore[attr-defined]
