# app/routes/posts.py

"""
Post Routes.

Provides listing, reading, writing, liking and saving of posts.

Summary
-------
Endpoints include:
  - List published posts (filters, sorting, featured first)
  - List the current user's posts and saved posts
  - Get a published post or an owned draft by slug
  - Create, update and delete a post
  - Like/unlike and save/unsave a post

Caching
-------
GET endpoints are cached in the response cache. Every write invalidates the
listings, the entries of the post it touched (by id and by slug) and, where
the author's own views change, that user's entries. Invalidation runs after
the service has committed.

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples. Tiered
limits apply when `X-API-Key` is present.
"""

from logging import getLogger
from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.decorators import cached_response, timed
from app.dependencies import (
    CacheDep,
    EngagementServiceDep,
    PageQueryDep,
    PostListQueryDep,
    PostServiceDep,
    UserDBDep,
)
from app.managers import limiter
from app.managers.rate_limiter import route_limit, write_limit
from app.schemas import (
    LikeResponse,
    MessageResponse,
    PostCreate,
    PostEnvelope,
    PostListResponse,
    PostMutationResponse,
    PostUpdate,
    SavedPostListResponse,
)

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}
NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post not found"}}},
}
UNAUTHORIZED = {
    "description": "Missing or invalid token",
    "content": {"application/json": {"example": {"detail": "Could not validate credentials"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List published posts",
    description="Published posts, featured first, with filters, sorting and pagination.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "posts": [
                            {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "title": "Getting Started with FastAPI",
                                "slug": "getting-started-with-fastapi",
                                "featured": True,
                                "viewCount": 12,
                                "likeCount": 3,
                                "author": {"id": "...", "username": "ada_l"},
                                "tags": [{"id": "tag_tutorial", "name": "Tutorial"}],
                            },
                        ],
                        "pagination": {"page": 1, "limit": 10, "total": 1, "pages": 1},
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="posts_list",
)
@timed("/posts")
@limiter.limit(route_limit)
@cached_response(ttl_name="ttl_posts_list")
async def list_posts(
    request: Request,
    query: PostListQueryDep,
    service: PostServiceDep,
) -> PostListResponse:
    """
    List published posts.

    Parameters
    ----------
    request : Request
        Current request context.
    query : PostFilter
        Page, filters and sort order from the query string.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostListResponse
        One page of posts with pagination metadata.

    Examples
    --------
    Request
        GET /api/posts?page=1&limit=10&sortBy=title&sortOrder=asc
    """
    return await service.list_published(query)


@router.get(
    "/my-posts",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List my posts",
    description="All posts of the current user, drafts included, newest first.",
    responses={401: UNAUTHORIZED, 429: RATE_LIMITED},
    operation_id="posts_mine",
)
@timed("/posts/my-posts")
@limiter.limit(route_limit)
@cached_response(ttl_name="ttl_posts_list")
async def list_my_posts(
    request: Request,
    current_user: UserDBDep,
    page: PageQueryDep,
    service: PostServiceDep,
) -> PostListResponse:
    """
    List the current user's posts.

    Parameters
    ----------
    request : Request
        Current request context.
    current_user : UserDB
        Authenticated user.
    page : PageQuery
        Page and page size.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostListResponse
        The user's posts with pagination metadata.
    """
    return await service.list_by_author(current_user.uuid, page.page, page.limit)


@router.get(
    "/saved",
    response_class=ORJSONResponse,
    response_model=SavedPostListResponse,
    summary="List saved posts",
    description="Posts the current user bookmarked, most recently saved first.",
    responses={401: UNAUTHORIZED, 429: RATE_LIMITED},
    operation_id="posts_saved",
)
@timed("/posts/saved")
@limiter.limit(route_limit)
@cached_response(ttl_name="ttl_posts_list")
async def list_saved_posts(
    request: Request,
    current_user: UserDBDep,
    page: PageQueryDep,
    service: PostServiceDep,
) -> SavedPostListResponse:
    """List the current user's saved posts, each with its ``savedAt`` time."""
    return await service.list_saved(current_user.uuid, page.page, page.limit)


@router.get(
    "/drafts/{slug}",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    summary="Get a draft by slug",
    description="An unpublished post. Only its author may read it.",
    responses={
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {"example": {"detail": "Not authorized to view this post"}},
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_get_draft",
)
@timed("/posts/drafts")
@limiter.limit(route_limit)
@cached_response(ttl_name="ttl_posts_single")
async def get_draft(
    request: Request,
    slug: str,
    current_user: UserDBDep,
    service: PostServiceDep,
) -> PostEnvelope:
    """
    Get an unpublished post owned by the current user.

    Parameters
    ----------
    request : Request
        Current request context.
    slug : str
        Draft slug.
    current_user : UserDB
        Authenticated user.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostEnvelope
        The draft.

    Raises
    ------
    PostNotFoundError
        If no draft has this slug.
    ForbiddenError
        If the user is not the author.
    """
    return PostEnvelope(post=await service.get_draft(slug, current_user.uuid))


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    summary="Get a post by slug",
    description="A published post with author, category, tags and like count.",
    responses={404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="posts_get_by_slug",
)
@timed("/posts/by-slug")
@limiter.limit(route_limit)
@cached_response(ttl_name="ttl_posts_single")
async def get_post(
    request: Request,
    slug: str,
    service: PostServiceDep,
) -> PostEnvelope:
    """
    Get a published post by slug.

    The view count only grows when the post is rendered, so cache hits are
    not counted.

    Parameters
    ----------
    request : Request
        Current request context.
    slug : str
        Post slug.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostEnvelope
        The post.
    """
    return PostEnvelope(post=await service.get_published(slug))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostMutationResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a post",
    description="Create a post owned by the current user. The slug is derived from the title.",
    responses={
        400: {
            "description": "Unknown category or tag",
            "content": {"application/json": {"example": {"detail": "Category not found"}}},
        },
        401: UNAUTHORIZED,
        409: {
            "description": "Duplicate title",
            "content": {
                "application/json": {
                    "example": {"detail": "A post with this title already exists"},
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="posts_create",
)
@timed("/posts/create")
@limiter.limit(write_limit)
async def create_post(
    request: Request,
    data: PostCreate,
    current_user: UserDBDep,
    service: PostServiceDep,
    cache: CacheDep,
) -> PostMutationResponse:
    """
    Create a new post.

    Parameters
    ----------
    request : Request
        Current request context.
    data : PostCreate
        Post input payload.
    current_user : UserDB
        Authenticated author.
    service : PostService
        Post service dependency.
    cache : ResponseCache
        Response cache to invalidate.

    Returns
    -------
    PostMutationResponse
        Confirmation message and the created post.
    """
    post = await service.create(current_user.uuid, data)
    cache.invalidate_list()
    cache.invalidate_user(current_user.uuid)
    return PostMutationResponse(message="Post created successfully", post=post)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostMutationResponse,
    summary="Update a post",
    description="Update fields of a post owned by the current user.",
    responses={
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {"example": {"detail": "Not authorized to update this post"}},
            },
        },
        404: NOT_FOUND,
        409: {
            "description": "Duplicate title",
            "content": {
                "application/json": {
                    "example": {"detail": "A post with this title already exists"},
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="posts_update",
)
@timed("/posts/update")
@limiter.limit(write_limit)
async def update_post(
    request: Request,
    post_id: UUID,
    data: PostUpdate,
    current_user: UserDBDep,
    service: PostServiceDep,
    cache: CacheDep,
) -> PostMutationResponse:
    """
    Update a post.

    A changed title regenerates the slug, so entries under both the old and
    the new slug are dropped.
    """
    result = await service.update(post_id, current_user.uuid, data)
    cache.invalidate_list()
    cache.invalidate_post(post_id, result.post.slug, result.previous_slug)
    cache.invalidate_user(current_user.uuid)
    return PostMutationResponse(message="Post updated successfully", post=result.post)


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a post",
    description="Delete a post owned by the current user.",
    responses={
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {"example": {"detail": "Not authorized to delete this post"}},
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_delete",
)
@timed("/posts/delete")
@limiter.limit(write_limit)
async def delete_post(
    request: Request,
    post_id: UUID,
    current_user: UserDBDep,
    service: PostServiceDep,
    cache: CacheDep,
) -> MessageResponse:
    """Delete a post and drop every cached response that could show it."""
    post = await service.delete(post_id, current_user.uuid)
    cache.invalidate_list()
    cache.invalidate_post(post_id, post.slug)
    cache.invalidate_user(current_user.uuid)
    return MessageResponse(message="Post deleted successfully")


@router.post(
    "/{post_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeResponse,
    status_code=HTTP_201_CREATED,
    summary="Like a post",
    responses={
        400: {
            "description": "Already liked",
            "content": {
                "application/json": {"example": {"detail": "You have already liked this post"}},
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_like",
)
@timed("/posts/like")
@limiter.limit(write_limit)
async def like_post(
    request: Request,
    post_id: UUID,
    current_user: UserDBDep,
    service: EngagementServiceDep,
    cache: CacheDep,
) -> LikeResponse:
    """Like a post and return its new like count."""
    post, like_count = await service.like_post(current_user.uuid, post_id)
    cache.invalidate_list()
    cache.invalidate_post(post.id, post.slug)
    return LikeResponse(message="Post liked successfully", like_count=like_count)


@router.delete(
    "/{post_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeResponse,
    summary="Unlike a post",
    responses={
        400: {
            "description": "Not liked",
            "content": {
                "application/json": {"example": {"detail": "You have not liked this post"}},
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_unlike",
)
@timed("/posts/unlike")
@limiter.limit(write_limit)
async def unlike_post(
    request: Request,
    post_id: UUID,
    current_user: UserDBDep,
    service: EngagementServiceDep,
    cache: CacheDep,
) -> LikeResponse:
    post, like_count = await service.unlike_post(current_user.uuid, post_id)
    cache.invalidate_list()
    cache.invalidate_post(post.id, post.slug)
    return LikeResponse(message="Post unliked successfully", like_count=like_count)


@router.post(
    "/{post_id}/save",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    status_code=HTTP_201_CREATED,
    summary="Save a post",
    responses={
        400: {
            "description": "Already saved",
            "content": {
                "application/json": {"example": {"detail": "You have already saved this post"}},
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_save",
)
@timed("/posts/save")
@limiter.limit(write_limit)
async def save_post(
    request: Request,
    post_id: UUID,
    current_user: UserDBDep,
    service: EngagementServiceDep,
    cache: CacheDep,
) -> MessageResponse:
    """Bookmark a post for the current user."""
    post = await service.save_post(current_user.uuid, post_id)
    cache.invalidate_list()
    cache.invalidate_post(post.id, post.slug)
    return MessageResponse(message="Post saved successfully")


@router.delete(
    "/{post_id}/save",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Unsave a post",
    responses={
        400: {
            "description": "Not saved",
            "content": {
                "application/json": {"example": {"detail": "You have not saved this post"}},
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_unsave",
)
@timed("/posts/unsave")
@limiter.limit(write_limit)
async def unsave_post(
    request: Request,
    post_id: UUID,
    current_user: UserDBDep,
    service: EngagementServiceDep,
    cache: CacheDep,
) -> MessageResponse:
    post = await service.unsave_post(current_user.uuid, post_id)
    cache.invalidate_list()
    cache.invalidate_post(post.id, post.slug)
    return MessageResponse(message="Post unsaved successfully")
