"""Repository for likes and saved posts."""

from collections.abc import Iterable
from datetime import datetime
from logging import getLogger
from uuid import UUID

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.models.engagement import CommentLikeDB, PostLikeDB, SavedPostDB
from app.models.post import PostDB

logger = file_logger(getLogger(__name__))


class EngagementRepository:
    """
    Toggle-style rows keyed by (user, target).

    ``add_*`` returns False when the row already exists and ``remove_*``
    returns False when there was nothing to remove, so callers can map
    both cases to a duplicate-action error without catching integrity
    errors.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # Post likes

    async def has_liked_post(self, user_id: UUID, post_id: UUID) -> bool:
        result = await self.session.execute(
            select(1)
            .where(PostLikeDB.user_id == user_id, PostLikeDB.post_id == post_id)  # type: ignore[arg-type]
            .limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def add_post_like(self, user_id: UUID, post_id: UUID) -> bool:
        if await self.has_liked_post(user_id, post_id):
            return False
        self.session.add(PostLikeDB(user_id=user_id, post_id=post_id))
        await self.session.flush()
        return True

    async def remove_post_like(self, user_id: UUID, post_id: UUID) -> bool:
        result = await self.session.execute(
            delete(PostLikeDB).where(
                PostLikeDB.user_id == user_id,  # type: ignore[arg-type]
                PostLikeDB.post_id == post_id,  # type: ignore[arg-type]
            ),
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def post_like_counts(self, post_ids: Iterable[UUID]) -> dict[UUID, int]:
        """Like count per post. Posts without likes are absent from the result."""
        ids = list(post_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(PostLikeDB.post_id, func.count())
            .where(PostLikeDB.post_id.in_(ids))  # type: ignore[attr-defined]
            .group_by(PostLikeDB.post_id),
        )
        return {post_id: count for post_id, count in result.all()}

    # Saved posts

    async def has_saved_post(self, user_id: UUID, post_id: UUID) -> bool:
        result = await self.session.execute(
            select(1)
            .where(SavedPostDB.user_id == user_id, SavedPostDB.post_id == post_id)  # type: ignore[arg-type]
            .limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def add_saved_post(self, user_id: UUID, post_id: UUID) -> bool:
        if await self.has_saved_post(user_id, post_id):
            return False
        self.session.add(SavedPostDB(user_id=user_id, post_id=post_id))
        await self.session.flush()
        return True

    async def remove_saved_post(self, user_id: UUID, post_id: UUID) -> bool:
        result = await self.session.execute(
            delete(SavedPostDB).where(
                SavedPostDB.user_id == user_id,  # type: ignore[arg-type]
                SavedPostDB.post_id == post_id,  # type: ignore[arg-type]
            ),
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def list_saved(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[tuple[PostDB, datetime]], int]:
        """
        A user's saved posts, most recently saved first.

        Returns:
            (post, saved_at) pairs for the page and the total saved count.
        """
        condition = SavedPostDB.user_id == user_id
        result = await self.session.execute(
            select(PostDB, SavedPostDB.created_at)
            .join(SavedPostDB, SavedPostDB.post_id == PostDB.id)  # type: ignore[arg-type]
            .where(condition)  # type: ignore[arg-type]
            .order_by(desc(SavedPostDB.created_at))
            .offset(skip)
            .limit(limit),
        )
        rows = [(post, saved_at) for post, saved_at in result.all()]
        total = await self.session.scalar(
            select(func.count()).select_from(SavedPostDB).where(condition),  # type: ignore[arg-type]
        )
        return rows, total or 0

    # Comment likes

    async def has_liked_comment(self, user_id: UUID, comment_id: UUID) -> bool:
        result = await self.session.execute(
            select(1)
            .where(CommentLikeDB.user_id == user_id, CommentLikeDB.comment_id == comment_id)  # type: ignore[arg-type]
            .limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def add_comment_like(self, user_id: UUID, comment_id: UUID) -> bool:
        if await self.has_liked_comment(user_id, comment_id):
            return False
        self.session.add(CommentLikeDB(user_id=user_id, comment_id=comment_id))
        await self.session.flush()
        return True

    async def remove_comment_like(self, user_id: UUID, comment_id: UUID) -> bool:
        result = await self.session.execute(
            delete(CommentLikeDB).where(
                CommentLikeDB.user_id == user_id,  # type: ignore[arg-type]
                CommentLikeDB.comment_id == comment_id,  # type: ignore[arg-type]
            ),
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def comment_like_counts(self, comment_ids: Iterable[UUID]) -> dict[UUID, int]:
        ids = list(comment_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(CommentLikeDB.comment_id, func.count())
            .where(CommentLikeDB.comment_id.in_(ids))  # type: ignore[attr-defined]
            .group_by(CommentLikeDB.comment_id),
        )
        return {comment_id: count for comment_id, count in result.all()}
