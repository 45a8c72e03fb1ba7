"""
Post service.

Reads compose posts with their author, category, tags and like count in a
fixed number of queries per page. Writes validate category and tag
references, keep the slug in step with the title and commit before
returning, so callers can invalidate cached responses right after.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from logging import getLogger
from typing import Any
from uuid import UUID

from app.configs import file_logger
from app.errors import (
    DuplicateEntryError,
    ForbiddenError,
    PostNotFoundError,
    ValidationFailedError,
)
from app.models import PostDB
from app.repositories import (
    CategoryRepository,
    EngagementRepository,
    PostFilter,
    PostRepository,
    TagRepository,
    UserRepository,
)
from app.schemas.common import Pagination
from app.schemas.post import (
    PostCreate,
    PostListResponse,
    PostResponse,
    PostUpdate,
    SavedPostListResponse,
    SavedPostResponse,
)
from app.schemas.taxonomy import CategoryResponse, TagResponse
from app.schemas.user import UserSummary
from app.utils.helpers import generate_slug, total_pages

logger = file_logger(getLogger(__name__))

DUPLICATE_TITLE = "A post with this title already exists"

# Columns an update may not clear
REQUIRED_FIELDS = frozenset({"title", "content", "published", "featured"})


@dataclass(frozen=True, slots=True)
class PostUpdateResult:
    """An updated post and the slug it had before the update."""

    post: PostResponse
    previous_slug: str


class PostService:
    """Service for post reads and writes."""

    def __init__(
        self,
        post_repo: PostRepository,
        user_repo: UserRepository,
        category_repo: CategoryRepository,
        tag_repo: TagRepository,
        engagement_repo: EngagementRepository,
    ) -> None:
        self.post_repo = post_repo
        self.user_repo = user_repo
        self.category_repo = category_repo
        self.tag_repo = tag_repo
        self.engagement_repo = engagement_repo

    async def compose(self, posts: Sequence[PostDB]) -> list[PostResponse]:
        """
        Build responses for ``posts``, keeping their order.

        Args:
            posts: Posts to render

        Returns:
            list[PostResponse]: One response per post
        """
        if not posts:
            return []
        post_ids = [post.id for post in posts]
        authors = await self.user_repo.get_many(post.author_id for post in posts)
        categories = await self.category_repo.get_many(
            post.category_id for post in posts if post.category_id
        )
        tags = await self.post_repo.tags_for(post_ids)
        likes = await self.engagement_repo.post_like_counts(post_ids)

        responses = []
        for post in posts:
            author = authors[post.author_id]
            category = categories.get(post.category_id) if post.category_id else None
            responses.append(
                PostResponse(
                    id=post.id,
                    title=post.title,
                    slug=post.slug,
                    content=post.content,
                    published=post.published,
                    featured=post.featured,
                    view_count=post.view_count,
                    author_id=post.author_id,
                    category_id=post.category_id,
                    meta_title=post.meta_title,
                    meta_description=post.meta_description,
                    og_image=post.og_image,
                    created_at=post.created_at,
                    updated_at=post.updated_at,
                    like_count=likes.get(post.id, 0),
                    author=UserSummary(id=author.uuid, username=author.username),
                    category=CategoryResponse.model_validate(category) if category else None,
                    tags=[TagResponse.model_validate(tag) for tag in tags.get(post.id, [])],
                ),
            )
        return responses

    async def compose_one(self, post: PostDB) -> PostResponse:
        return (await self.compose([post]))[0]

    async def get_or_404(self, post_id: UUID) -> PostDB:
        post = await self.post_repo.get_by_id(post_id)
        if not post:
            raise PostNotFoundError
        return post

    async def get_owned(self, post_id: UUID, user_id: UUID, action: str) -> PostDB:
        """
        Load a post the user is about to modify.

        Raises:
            PostNotFoundError: No such post
            ForbiddenError: The user is not the author
        """
        post = await self.get_or_404(post_id)
        if post.author_id != user_id:
            raise ForbiddenError(f"Not authorized to {action} this post")
        return post

    # Reads

    async def list_published(self, query: PostFilter) -> PostListResponse:
        posts, total = await self.post_repo.list_published(query)
        return PostListResponse(
            posts=await self.compose(posts),
            pagination=self._pagination(query.page, query.limit, total),
        )

    async def list_by_author(self, author_id: UUID, page: int, limit: int) -> PostListResponse:
        posts, total = await self.post_repo.list_by_author(author_id, (page - 1) * limit, limit)
        return PostListResponse(
            posts=await self.compose(posts),
            pagination=self._pagination(page, limit, total),
        )

    async def list_saved(self, user_id: UUID, page: int, limit: int) -> SavedPostListResponse:
        rows, total = await self.engagement_repo.list_saved(user_id, (page - 1) * limit, limit)
        composed = await self.compose([post for post, _ in rows])
        saved = [
            SavedPostResponse(**response.model_dump(), saved_at=saved_at)
            for response, (_, saved_at) in zip(composed, rows, strict=True)
        ]
        return SavedPostListResponse(
            posts=saved,
            pagination=self._pagination(page, limit, total),
        )

    async def get_published(self, slug: str) -> PostResponse:
        """
        Load a published post by slug and count the view.

        Raises:
            PostNotFoundError: No published post has this slug
        """
        post = await self.post_repo.get_by_slug(slug)
        if not post or not post.published:
            raise PostNotFoundError
        await self.post_repo.increment_view_count(post)
        await self.post_repo.commit()
        return await self.compose_one(post)

    async def get_draft(self, slug: str, user_id: UUID) -> PostResponse:
        """
        Load an unpublished post for its author.

        Raises:
            PostNotFoundError: No draft has this slug
            ForbiddenError: The user is not the author
        """
        post = await self.post_repo.get_by_slug(slug)
        if not post or post.published:
            raise PostNotFoundError
        if post.author_id != user_id:
            raise ForbiddenError("Not authorized to view this post")
        return await self.compose_one(post)

    # Writes

    async def create(self, author_id: UUID, data: PostCreate) -> PostResponse:
        """
        Create a post owned by ``author_id``.

        Raises:
            DuplicateEntryError: Another post already has the derived slug
            ValidationFailedError: Unknown category or tag, or a title with
                no usable characters for a slug
        """
        slug = self._slug_for(data.title)
        if await self.post_repo.slug_exists(slug):
            raise DuplicateEntryError(DUPLICATE_TITLE)
        await self._check_references(data.category_id, data.tags)

        fields = data.model_dump(exclude={"tags"})
        post = await self.post_repo.create(
            {**self._storable(fields), "slug": slug, "author_id": author_id},
        )
        if data.tags:
            await self.post_repo.set_tags(post.id, data.tags)
        await self.post_repo.commit()
        logger.info(f"Post {post.id} created by {author_id}")
        return await self.compose_one(post)

    async def update(self, post_id: UUID, user_id: UUID, data: PostUpdate) -> PostUpdateResult:
        """
        Apply the fields present in ``data`` to an owned post.

        A new title regenerates the slug; ``tags`` replaces the tag set.

        Raises:
            PostNotFoundError: No such post
            ForbiddenError: The user is not the author
            DuplicateEntryError: The new title's slug belongs to another post
            ValidationFailedError: Unknown category or tag
        """
        post = await self.get_owned(post_id, user_id, "update")
        previous_slug = post.slug
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in REQUIRED_FIELDS
        }
        tag_ids: list[str] | None = changes.pop("tags", None)

        if "title" in changes and changes["title"] != post.title:
            slug = self._slug_for(changes["title"])
            if await self.post_repo.slug_exists(slug, exclude_id=post.id):
                raise DuplicateEntryError(DUPLICATE_TITLE)
            changes["slug"] = slug
        await self._check_references(changes.get("category_id"), tag_ids)

        post = await self.post_repo.update(post, self._storable(changes))
        if "tags" in data.model_fields_set:
            await self.post_repo.set_tags(post.id, tag_ids or [])
        await self.post_repo.commit()
        logger.info(f"Post {post.id} updated by {user_id}")
        return PostUpdateResult(post=await self.compose_one(post), previous_slug=previous_slug)

    async def delete(self, post_id: UUID, user_id: UUID) -> PostDB:
        """Delete an owned post and return the deleted row."""
        post = await self.get_owned(post_id, user_id, "delete")
        await self.post_repo.delete(post)
        await self.post_repo.commit()
        logger.info(f"Post {post_id} deleted by {user_id}")
        return post

    # Helpers

    @staticmethod
    def _slug_for(title: str) -> str:
        slug = generate_slug(title)
        if not slug:
            mssg = "Title must contain at least one letter or number"
            raise ValidationFailedError(mssg)
        return slug

    @staticmethod
    def _storable(fields: dict[str, Any]) -> dict[str, Any]:
        if fields.get("og_image") is not None:
            fields["og_image"] = str(fields["og_image"])
        return fields

    @staticmethod
    def _pagination(page: int, limit: int, total: int) -> Pagination:
        return Pagination(page=page, limit=limit, total=total, pages=total_pages(total, limit))

    async def _check_references(self, category_id: str | None, tag_ids: list[str] | None) -> None:
        if category_id and not await self.category_repo.exists(category_id):
            raise ValidationFailedError("Category not found")
        if tag_ids:
            missing = set(tag_ids) - await self.tag_repo.existing_ids(tag_ids)
            if missing:
                raise ValidationFailedError("Tag not found")
