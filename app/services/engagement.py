"""Likes and saves on posts and comments."""

from uuid import UUID

from app.errors import CommentNotFoundError, DuplicateActionError, PostNotFoundError
from app.models import CommentDB, PostDB
from app.monitoring import get_logger
from app.repositories import CommentRepository, EngagementRepository, PostRepository

logger = get_logger(__name__)


class EngagementService:
    """
    Toggle likes and bookmarks.

    Every method returns the post that was touched so the caller can
    invalidate the cached responses that mention it. Like methods also
    return the like count after the change.
    """

    def __init__(
        self,
        post_repo: PostRepository,
        comment_repo: CommentRepository,
        engagement_repo: EngagementRepository,
    ) -> None:
        self.post_repo = post_repo
        self.comment_repo = comment_repo
        self.engagement_repo = engagement_repo

    async def _post(self, post_id: UUID) -> PostDB:
        post = await self.post_repo.get_by_id(post_id)
        if not post:
            raise PostNotFoundError
        return post

    async def _comment(self, post_id: UUID, comment_id: UUID) -> tuple[PostDB, CommentDB]:
        post = await self._post(post_id)
        comment = await self.comment_repo.get_by_id(comment_id)
        if not comment or comment.post_id != post.id:
            raise CommentNotFoundError
        return post, comment

    async def _post_likes(self, post_id: UUID) -> int:
        return (await self.engagement_repo.post_like_counts([post_id])).get(post_id, 0)

    async def _comment_likes(self, comment_id: UUID) -> int:
        return (await self.engagement_repo.comment_like_counts([comment_id])).get(comment_id, 0)

    async def like_post(self, user_id: UUID, post_id: UUID) -> tuple[PostDB, int]:
        post = await self._post(post_id)
        if not await self.engagement_repo.add_post_like(user_id, post.id):
            raise DuplicateActionError("You have already liked this post")
        await self.post_repo.commit()
        logger.info("Post liked", post_id=str(post.id), user_id=str(user_id))
        return post, await self._post_likes(post.id)

    async def unlike_post(self, user_id: UUID, post_id: UUID) -> tuple[PostDB, int]:
        post = await self._post(post_id)
        if not await self.engagement_repo.remove_post_like(user_id, post.id):
            raise DuplicateActionError("You have not liked this post")
        await self.post_repo.commit()
        logger.info("Post unliked", post_id=str(post.id), user_id=str(user_id))
        return post, await self._post_likes(post.id)

    async def save_post(self, user_id: UUID, post_id: UUID) -> PostDB:
        post = await self._post(post_id)
        if not await self.engagement_repo.add_saved_post(user_id, post.id):
            raise DuplicateActionError("You have already saved this post")
        await self.post_repo.commit()
        return post

    async def unsave_post(self, user_id: UUID, post_id: UUID) -> PostDB:
        post = await self._post(post_id)
        if not await self.engagement_repo.remove_saved_post(user_id, post.id):
            raise DuplicateActionError("You have not saved this post")
        await self.post_repo.commit()
        return post

    async def like_comment(
        self,
        user_id: UUID,
        post_id: UUID,
        comment_id: UUID,
    ) -> tuple[PostDB, int]:
        """
        Like a comment on ``post_id``.

        Raises:
            PostNotFoundError: No such post
            CommentNotFoundError: No such comment on this post
            DuplicateActionError: Already liked
        """
        post, comment = await self._comment(post_id, comment_id)
        if not await self.engagement_repo.add_comment_like(user_id, comment.id):
            raise DuplicateActionError("You have already liked this comment")
        await self.post_repo.commit()
        logger.info("Comment liked", comment_id=str(comment.id), user_id=str(user_id))
        return post, await self._comment_likes(comment.id)

    async def unlike_comment(
        self,
        user_id: UUID,
        post_id: UUID,
        comment_id: UUID,
    ) -> tuple[PostDB, int]:
        post, comment = await self._comment(post_id, comment_id)
        if not await self.engagement_repo.remove_comment_like(user_id, comment.id):
            raise DuplicateActionError("You have not liked this comment")
        await self.post_repo.commit()
        return post, await self._comment_likes(comment.id)
