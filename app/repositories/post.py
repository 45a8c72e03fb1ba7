"""Post repository for database operations."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import Any, Literal
from uuid import UUID

from sqlalchemy import asc, delete, desc, func, select, update
from sqlalchemy.sql.expression import ColumnElement

from app.configs import file_logger
from app.models.post import PostDB, PostTagDB
from app.models.taxonomy import TagDB
from app.repositories.base import BaseRepository

logger = file_logger(getLogger(__name__))

SortField = Literal["createdAt", "updatedAt", "title"]
SortOrder = Literal["asc", "desc"]

SORT_COLUMNS: dict[str, Any] = {
    "createdAt": PostDB.created_at,
    "updatedAt": PostDB.updated_at,
    "title": PostDB.title,
}


@dataclass(frozen=True)
class PostFilter:
    """
    Filters and ordering for the public post listing.

    Attributes:
        page: 1-based page number.
        limit: Page size.
        title: Case-insensitive substring of the title.
        author_id: Only posts by this author.
        category_id: Only posts in this category.
        sort_by: Secondary sort field (featured posts always come first).
        sort_order: Direction of the secondary sort.
    """

    page: int = 1
    limit: int = 10
    title: str | None = None
    author_id: UUID | None = None
    category_id: str | None = None
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PostRepository(BaseRepository[PostDB]):
    """Repository for Post database operations."""

    model = PostDB

    async def create(self, data: dict[str, Any]) -> PostDB:
        """
        Create a new post.

        Args:
            data: Column values, including ``author_id`` and ``slug``.

        Returns:
            PostDB: Created post

        Raises:
            DuplicateEntryError: If the slug already exists
        """
        return await self._add_and_refresh(PostDB(**data))

    async def get_by_slug(self, slug: str) -> PostDB | None:
        return await self.get_by_field("slug", slug)

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        statement = select(1).where(PostDB.slug == slug)  # type: ignore[arg-type]
        if exclude_id is not None:
            statement = statement.where(PostDB.id != exclude_id)  # type: ignore[arg-type]
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def update(self, post: PostDB, data: dict[str, Any]) -> PostDB:
        """Apply ``data`` to ``post`` and bump ``updated_at``."""
        for key, value in data.items():
            setattr(post, key, value)
        post.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(post)

    async def increment_view_count(self, post: PostDB) -> PostDB:
        """Atomically add one view, then reload the post."""
        await self.session.execute(
            update(PostDB)
            .where(PostDB.id == post.id)  # type: ignore[arg-type]
            .values(view_count=PostDB.view_count + 1),
        )
        await self.session.refresh(post)
        return post

    async def list_published(self, query: PostFilter) -> tuple[list[PostDB], int]:
        """
        Page through published posts.

        Featured posts come first, then ``query.sort_by`` in
        ``query.sort_order``.

        Returns:
            The page of posts and the total number of matches.
        """
        conditions: list[ColumnElement[bool]] = [PostDB.published.is_(True)]  # type: ignore[attr-defined]
        if query.title:
            conditions.append(PostDB.title.ilike(f"%{query.title}%"))  # type: ignore[attr-defined]
        if query.author_id:
            conditions.append(PostDB.author_id == query.author_id)  # type: ignore[arg-type]
        if query.category_id:
            conditions.append(PostDB.category_id == query.category_id)  # type: ignore[arg-type]

        direction = asc if query.sort_order == "asc" else desc
        statement = (
            select(PostDB)
            .where(*conditions)
            .order_by(desc(PostDB.featured), direction(SORT_COLUMNS[query.sort_by]))
            .offset(query.skip)
            .limit(query.limit)
        )
        posts = list((await self.session.execute(statement)).scalars().all())
        total = await self.session.scalar(select(func.count()).select_from(PostDB).where(*conditions))
        return posts, total or 0

    async def list_by_author(
        self,
        author_id: UUID,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[PostDB], int]:
        """All of an author's posts, drafts included, newest first."""
        condition = PostDB.author_id == author_id
        statement = (
            select(PostDB)
            .where(condition)  # type: ignore[arg-type]
            .order_by(desc(PostDB.created_at))
            .offset(skip)
            .limit(limit)
        )
        posts = list((await self.session.execute(statement)).scalars().all())
        total = await self.session.scalar(
            select(func.count()).select_from(PostDB).where(condition),  # type: ignore[arg-type]
        )
        return posts, total or 0

    async def count_by_author(self, author_id: UUID) -> int:
        total = await self.session.scalar(
            select(func.count()).select_from(PostDB).where(PostDB.author_id == author_id),  # type: ignore[arg-type]
        )
        return total or 0

    async def tags_for(self, post_ids: list[UUID]) -> dict[UUID, list[TagDB]]:
        """Tags of each post, ordered by name."""
        if not post_ids:
            return {}
        statement = (
            select(PostTagDB.post_id, TagDB)
            .join(TagDB, TagDB.id == PostTagDB.tag_id)  # type: ignore[arg-type]
            .where(PostTagDB.post_id.in_(post_ids))  # type: ignore[attr-defined]
            .order_by(TagDB.name)
        )
        tags: dict[UUID, list[TagDB]] = defaultdict(list)
        for post_id, tag in (await self.session.execute(statement)).all():
            tags[post_id].append(tag)
        return dict(tags)

    async def set_tags(self, post_id: UUID, tag_ids: list[str]) -> None:
        """Replace the post's tag set with ``tag_ids``."""
        await self.session.execute(
            delete(PostTagDB).where(PostTagDB.post_id == post_id),  # type: ignore[arg-type]
        )
        for tag_id in dict.fromkeys(tag_ids):
            self.session.add(PostTagDB(post_id=post_id, tag_id=tag_id))
        await self.session.flush()
        logger.debug(f"Post {post_id} tagged with {len(tag_ids)} tags")
