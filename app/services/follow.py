"""Follow and unfollow users, and list follow relationships."""

from datetime import datetime
from logging import getLogger
from uuid import UUID

from app.configs import file_logger
from app.errors import DuplicateActionError, UserNotFoundError, ValidationFailedError
from app.models import UserDB
from app.repositories import FollowRepository, UserRepository
from app.schemas.user import FollowersResponse, FollowingResponse, FollowUser

logger = file_logger(getLogger(__name__))


def _follow_users(rows: list[tuple[UserDB, datetime]]) -> list[FollowUser]:
    return [
        FollowUser(id=user.uuid, username=user.username, created_at=followed_at)
        for user, followed_at in rows
    ]


class FollowService:
    def __init__(self, user_repo: UserRepository, follow_repo: FollowRepository) -> None:
        self.user_repo = user_repo
        self.follow_repo = follow_repo

    async def follow(self, follower_id: UUID, user_id: UUID) -> None:
        """
        Make ``follower_id`` follow ``user_id``.

        Raises:
            ValidationFailedError: Following yourself
            UserNotFoundError: No such user
            DuplicateActionError: Already following
        """
        if follower_id == user_id:
            raise ValidationFailedError("Cannot follow yourself")
        if not await self.user_repo.exists(user_id):
            raise UserNotFoundError
        if await self.follow_repo.get(follower_id, user_id):
            raise DuplicateActionError("Already following this user")

        await self.follow_repo.create(follower_id, user_id)
        await self.follow_repo.commit()
        logger.info(f"User {follower_id} followed {user_id}")

    async def unfollow(self, follower_id: UUID, user_id: UUID) -> None:
        follow = await self.follow_repo.get(follower_id, user_id)
        if not follow:
            raise DuplicateActionError("Not following this user")

        await self.follow_repo.delete(follow)
        await self.follow_repo.commit()
        logger.info(f"User {follower_id} unfollowed {user_id}")

    async def followers(self, user_id: UUID, page: int, limit: int) -> FollowersResponse:
        rows, total = await self.follow_repo.list_followers(user_id, (page - 1) * limit, limit)
        return FollowersResponse(followers=_follow_users(rows), total=total, page=page, limit=limit)

    async def following(self, user_id: UUID, page: int, limit: int) -> FollowingResponse:
        rows, total = await self.follow_repo.list_following(user_id, (page - 1) * limit, limit)
        return FollowingResponse(following=_follow_users(rows), total=total, page=page, limit=limit)
