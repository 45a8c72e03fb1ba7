# app/routes/comments.py

"""
Comment Routes.

Threaded comments on posts: read the forest, add top-level comments and
replies (at most five levels deep), and like or unlike comments. The
thread of a post is cached under the post id; every write here drops the
entries of that post.
"""

from logging import getLogger
from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.decorators import cached_response, timed
from app.dependencies import CacheDep, CommentThreadDep, EngagementServiceDep, UserDBDep
from app.managers import limiter
from app.managers.rate_limiter import route_limit, write_limit
from app.schemas import (
    CommentCreate,
    CommentMutationResponse,
    CommentThreadResponse,
    LikeResponse,
)

router = APIRouter(prefix="/posts", tags=["💬 Comments"])

logger = file_logger(getLogger(__name__))

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}
NOT_FOUND = {
    "description": "Post or comment not found",
    "content": {"application/json": {"example": {"detail": "Comment not found"}}},
}


@router.get(
    "/{post_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentThreadResponse,
    summary="Get the comment thread of a post",
    description="Top-level comments oldest first, each with nested replies up to five levels.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "comments": [
                            {
                                "id": "...",
                                "content": "Great post!",
                                "parentId": None,
                                "likeCount": 1,
                                "user": {"id": "...", "username": "ada_l"},
                                "replies": [
                                    {"id": "...", "content": "Agreed", "replies": []},
                                ],
                            },
                        ],
                    },
                },
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="comments_thread",
)
@timed("/posts/comments")
@limiter.limit(route_limit)
@cached_response(ttl_name="ttl_posts_single")
async def get_comments(
    request: Request,
    post_id: UUID,
    builder: CommentThreadDep,
) -> CommentThreadResponse:
    """
    Get the comment forest of a post.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : UUID
        Post identifier.
    builder : CommentThreadBuilder
        Thread builder dependency.

    Returns
    -------
    CommentThreadResponse
        Root comments with their nested replies.
    """
    return CommentThreadResponse(comments=await builder.build_tree(post_id))


@router.post(
    "/{post_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentMutationResponse,
    status_code=HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="comments_create",
)
@timed("/posts/comments/create")
@limiter.limit(write_limit)
async def create_comment(
    request: Request,
    post_id: UUID,
    data: CommentCreate,
    current_user: UserDBDep,
    builder: CommentThreadDep,
    cache: CacheDep,
) -> CommentMutationResponse:
    """Add a top-level comment."""
    created = await builder.create_comment(post_id, current_user.uuid, data.content)
    cache.invalidate_post(created.post.id, created.post.slug)
    return CommentMutationResponse(
        message="Comment created successfully",
        comment=created.comment,
        depth=created.depth,
    )


@router.post(
    "/{post_id}/comments/{comment_id}/reply",
    response_class=ORJSONResponse,
    response_model=CommentMutationResponse,
    status_code=HTTP_201_CREATED,
    summary="Reply to a comment",
    responses={
        400: {
            "description": "Thread too deep",
            "content": {
                "application/json": {
                    "example": {"detail": "Maximum thread depth of 5 levels reached"},
                },
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="comments_reply",
)
@timed("/posts/comments/reply")
@limiter.limit(write_limit)
async def reply_to_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    data: CommentCreate,
    current_user: UserDBDep,
    builder: CommentThreadDep,
    cache: CacheDep,
) -> CommentMutationResponse:
    """
    Reply to a comment on the same post.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : UUID
        Post identifier.
    comment_id : UUID
        Comment being answered.
    data : CommentCreate
        Reply body.
    current_user : UserDB
        Authenticated author.
    builder : CommentThreadBuilder
        Thread builder dependency.
    cache : ResponseCache
        Response cache to invalidate.

    Returns
    -------
    CommentMutationResponse
        The reply and its depth (parent depth + 1).

    Raises
    ------
    ThreadDepthExceededError
        If the parent already sits five levels deep.
    """
    created = await builder.create_reply(post_id, comment_id, current_user.uuid, data.content)
    cache.invalidate_post(created.post.id, created.post.slug)
    return CommentMutationResponse(
        message="Reply created successfully",
        comment=created.comment,
        depth=created.depth,
    )


@router.post(
    "/{post_id}/comments/{comment_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeResponse,
    status_code=HTTP_201_CREATED,
    summary="Like a comment",
    responses={404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="comments_like",
)
@timed("/posts/comments/like")
@limiter.limit(write_limit)
async def like_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    current_user: UserDBDep,
    service: EngagementServiceDep,
    cache: CacheDep,
) -> LikeResponse:
    post, like_count = await service.like_comment(current_user.uuid, post_id, comment_id)
    cache.invalidate_post(post.id, post.slug)
    return LikeResponse(message="Comment liked successfully", like_count=like_count)


@router.delete(
    "/{post_id}/comments/{comment_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeResponse,
    summary="Unlike a comment",
    responses={404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="comments_unlike",
)
@timed("/posts/comments/unlike")
@limiter.limit(write_limit)
async def unlike_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    current_user: UserDBDep,
    service: EngagementServiceDep,
    cache: CacheDep,
) -> LikeResponse:
    post, like_count = await service.unlike_comment(current_user.uuid, post_id, comment_id)
    cache.invalidate_post(post.id, post.slug)
    return LikeResponse(message="Comment unliked successfully", like_count=like_count)
