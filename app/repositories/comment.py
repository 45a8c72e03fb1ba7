"""Comment repository for database operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import asc, select

from app.models.comment import CommentDB
from app.repositories.base import BaseRepository


class CommentRepository(BaseRepository[CommentDB]):
    """
    Repository for Comment database operations.

    Threads are read one level at a time: ``list_roots`` for the top level,
    then ``list_children`` with every id of the previous level. Siblings
    come back oldest first.
    """

    model = CommentDB

    async def create(
        self,
        content: str,
        post_id: UUID,
        user_id: UUID,
        parent_id: UUID | None = None,
    ) -> CommentDB:
        return await self._add_and_refresh(
            CommentDB(content=content, post_id=post_id, user_id=user_id, parent_id=parent_id),
        )

    async def get_parent_id(self, comment_id: UUID) -> UUID | None:
        """Parent of ``comment_id``; None for a root or an unknown comment."""
        result = await self.session.execute(
            select(CommentDB.parent_id).where(CommentDB.id == comment_id),  # type: ignore[arg-type]
        )
        return result.scalar_one_or_none()

    async def list_roots(self, post_id: UUID) -> list[CommentDB]:
        result = await self.session.execute(
            select(CommentDB)
            .where(CommentDB.post_id == post_id, CommentDB.parent_id.is_(None))  # type: ignore[arg-type, union-attr]
            .order_by(asc(CommentDB.created_at)),
        )
        return list(result.scalars().all())

    async def list_children(
        self,
        parent_ids: Iterable[UUID],
        post_id: UUID,
    ) -> list[CommentDB]:
        """Direct replies to any of ``parent_ids`` on ``post_id``."""
        ids = list(parent_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(CommentDB)
            .where(CommentDB.post_id == post_id, CommentDB.parent_id.in_(ids))  # type: ignore[arg-type, union-attr]
            .order_by(asc(CommentDB.created_at)),
        )
        return list(result.scalars().all())
