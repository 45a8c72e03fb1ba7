"""Follow relationships between users."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import desc, func, select

from app.models.engagement import FollowerDB
from app.models.user import UserDB
from app.repositories.base import BaseRepository


class FollowRepository(BaseRepository[FollowerDB]):
    """Repository for follower rows. ``follower_id`` follows ``following_id``."""

    model = FollowerDB

    async def get(self, follower_id: UUID, following_id: UUID) -> FollowerDB | None:
        result = await self.session.execute(
            select(FollowerDB).where(
                FollowerDB.follower_id == follower_id,  # type: ignore[arg-type]
                FollowerDB.following_id == following_id,  # type: ignore[arg-type]
            ),
        )
        return result.scalar_one_or_none()

    async def create(self, follower_id: UUID, following_id: UUID) -> FollowerDB:
        return await self._add_and_refresh(
            FollowerDB(follower_id=follower_id, following_id=following_id),
        )

    async def list_followers(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[tuple[UserDB, datetime]], int]:
        """Users following ``user_id``, newest follow first."""
        return await self._list(
            FollowerDB.following_id == user_id,
            FollowerDB.follower_id,
            skip,
            limit,
        )

    async def list_following(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[tuple[UserDB, datetime]], int]:
        """Users ``user_id`` follows, newest follow first."""
        return await self._list(
            FollowerDB.follower_id == user_id,
            FollowerDB.following_id,
            skip,
            limit,
        )

    async def _list(
        self,
        condition: object,
        join_column: object,
        skip: int,
        limit: int,
    ) -> tuple[list[tuple[UserDB, datetime]], int]:
        result = await self.session.execute(
            select(UserDB, FollowerDB.created_at)
            .join(FollowerDB, join_column == UserDB.uuid)  # type: ignore[arg-type]
            .where(condition)  # type: ignore[arg-type]
            .order_by(desc(FollowerDB.created_at))
            .offset(skip)
            .limit(limit),
        )
        rows = [(user, followed_at) for user, followed_at in result.all()]
        total = await self.session.scalar(
            select(func.count()).select_from(FollowerDB).where(condition),  # type: ignore[arg-type]
        )
        return rows, total or 0
