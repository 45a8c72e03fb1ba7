"""
Comment threads.

A thread is a forest: top-level comments have no parent and every reply
points at the comment it answers on the same post. Depth is the number of
parent links between a comment and its root, so roots sit at depth 0 and
no comment may sit deeper than ``MAX_THREAD_DEPTH``.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from app.configs import settings
from app.errors import CommentNotFoundError, PostNotFoundError, ThreadDepthExceededError
from app.models import CommentDB, PostDB
from app.monitoring import get_logger
from app.repositories import (
    CommentRepository,
    EngagementRepository,
    PostRepository,
    UserRepository,
)
from app.schemas.comment import CommentNode
from app.schemas.user import UserSummary

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedComment:
    """A new comment, the post it belongs to and its depth in the thread."""

    post: PostDB
    comment: CommentNode
    depth: int


class CommentThreadBuilder:
    """Create comments and replies, and assemble a post's comment forest."""

    def __init__(
        self,
        comment_repo: CommentRepository,
        post_repo: PostRepository,
        user_repo: UserRepository,
        engagement_repo: EngagementRepository,
        max_depth: int = settings.MAX_THREAD_DEPTH,
    ) -> None:
        self.comment_repo = comment_repo
        self.post_repo = post_repo
        self.user_repo = user_repo
        self.engagement_repo = engagement_repo
        self.max_depth = max_depth

    async def _post(self, post_id: UUID) -> PostDB:
        post = await self.post_repo.get_by_id(post_id)
        if not post:
            raise PostNotFoundError
        return post

    async def get_thread_depth(self, comment_id: UUID) -> int:
        """
        Count the parent links above ``comment_id``.

        The walk stops at a root or once ``max_depth`` links have been
        counted, so the result never exceeds ``max_depth``.

        Args:
            comment_id: Comment to measure

        Returns:
            int: 0 for a top-level comment, otherwise its distance to the root
        """
        depth = 0
        current = comment_id
        while depth < self.max_depth:
            parent_id = await self.comment_repo.get_parent_id(current)
            if parent_id is None:
                break
            depth += 1
            current = parent_id
        return depth

    async def build_tree(self, post_id: UUID) -> list[CommentNode]:
        """
        Assemble the full comment forest of a post.

        Levels are loaded breadth first, one query per level, for at most
        ``max_depth`` levels below the roots. Siblings are ordered oldest
        first at every level.

        Raises:
            PostNotFoundError: No such post
        """
        await self._post(post_id)

        roots = await self.comment_repo.list_roots(post_id)
        comments: list[CommentDB] = list(roots)
        level = roots
        for _ in range(self.max_depth):
            if not level:
                break
            level = await self.comment_repo.list_children((c.id for c in level), post_id)
            comments.extend(level)

        nodes = await self._nodes(comments)
        for comment in comments:
            if comment.parent_id is not None and comment.parent_id in nodes:
                nodes[comment.parent_id].replies.append(nodes[comment.id])
        return [nodes[root.id] for root in roots]

    async def create_comment(self, post_id: UUID, user_id: UUID, content: str) -> CreatedComment:
        """Add a top-level comment to a post."""
        post = await self._post(post_id)
        comment = await self.comment_repo.create(content=content, post_id=post.id, user_id=user_id)
        await self.comment_repo.commit()
        logger.info("Comment created", comment_id=str(comment.id), post_id=str(post.id))
        return CreatedComment(post=post, comment=await self._node(comment), depth=0)

    async def create_reply(
        self,
        post_id: UUID,
        parent_comment_id: UUID,
        user_id: UUID,
        content: str,
    ) -> CreatedComment:
        """
        Reply to a comment.

        Args:
            post_id: Post the thread belongs to
            parent_comment_id: Comment being answered
            user_id: Author of the reply
            content: Reply body

        Returns:
            CreatedComment: The reply with depth = parent depth + 1

        Raises:
            PostNotFoundError: No such post
            CommentNotFoundError: No such comment on this post
            ThreadDepthExceededError: The parent already sits at max depth
        """
        post = await self._post(post_id)
        parent = await self.comment_repo.get_by_id(parent_comment_id)
        if not parent or parent.post_id != post.id:
            raise CommentNotFoundError

        parent_depth = await self.get_thread_depth(parent.id)
        if parent_depth >= self.max_depth:
            logger.warning("Reply rejected at max depth", parent_id=str(parent.id))
            raise ThreadDepthExceededError(self.max_depth)

        reply = await self.comment_repo.create(
            content=content,
            post_id=post.id,
            user_id=user_id,
            parent_id=parent.id,
        )
        await self.comment_repo.commit()
        logger.info("Reply created", comment_id=str(reply.id), parent_id=str(parent.id))
        return CreatedComment(post=post, comment=await self._node(reply), depth=parent_depth + 1)

    async def _node(self, comment: CommentDB) -> CommentNode:
        return (await self._nodes([comment]))[comment.id]

    async def _nodes(self, comments: Sequence[CommentDB]) -> dict[UUID, CommentNode]:
        users = await self.user_repo.get_many(c.user_id for c in comments)
        likes = await self.engagement_repo.comment_like_counts(c.id for c in comments)
        return {
            c.id: CommentNode(
                id=c.id,
                content=c.content,
                post_id=c.post_id,
                user_id=c.user_id,
                parent_id=c.parent_id,
                created_at=c.created_at,
                updated_at=c.updated_at,
                user=UserSummary(id=users[c.user_id].uuid, username=users[c.user_id].username),
                like_count=likes.get(c.id, 0),
            )
            for c in comments
        }
