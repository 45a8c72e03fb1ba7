# app/routes/users.py

"""
User Routes.

Follow and unfollow users and list who follows whom. Follow listings are
not cached; following or unfollowing drops the caller's cached entries.
"""

from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.decorators import timed
from app.dependencies import CacheDep, FollowPageQueryDep, FollowServiceDep, UserDBDep
from app.managers import limiter
from app.managers.rate_limiter import route_limit, write_limit
from app.schemas import FollowActionResponse, FollowersResponse, FollowingResponse

router = APIRouter(prefix="/users", tags=["👤 Users"])

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.post(
    "/{user_id}/follow",
    response_class=ORJSONResponse,
    response_model=FollowActionResponse,
    status_code=HTTP_201_CREATED,
    summary="Follow a user",
    responses={
        400: {
            "description": "Self follow or already following",
            "content": {"application/json": {"example": {"detail": "Cannot follow yourself"}}},
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "User not found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="users_follow",
)
@timed("/users/follow")
@limiter.limit(write_limit)
async def follow_user(
    request: Request,
    user_id: UUID,
    current_user: UserDBDep,
    service: FollowServiceDep,
    cache: CacheDep,
) -> FollowActionResponse:
    """
    Follow a user.

    Parameters
    ----------
    request : Request
        Current request context.
    user_id : UUID
        User to follow.
    current_user : UserDB
        Authenticated follower.
    service : FollowService
        Follow service dependency.
    cache : ResponseCache
        Response cache to invalidate.

    Returns
    -------
    FollowActionResponse
        Confirmation and the followed user's id.
    """
    await service.follow(current_user.uuid, user_id)
    cache.invalidate_user(current_user.uuid)
    return FollowActionResponse(message="Successfully followed user", following_id=user_id)


@router.delete(
    "/{user_id}/follow",
    response_class=ORJSONResponse,
    response_model=FollowActionResponse,
    summary="Unfollow a user",
    responses={
        400: {
            "description": "Not following",
            "content": {"application/json": {"example": {"detail": "Not following this user"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="users_unfollow",
)
@timed("/users/unfollow")
@limiter.limit(write_limit)
async def unfollow_user(
    request: Request,
    user_id: UUID,
    current_user: UserDBDep,
    service: FollowServiceDep,
    cache: CacheDep,
) -> FollowActionResponse:
    await service.unfollow(current_user.uuid, user_id)
    cache.invalidate_user(current_user.uuid)
    return FollowActionResponse(message="Successfully unfollowed user", following_id=user_id)


@router.get(
    "/{user_id}/followers",
    response_class=ORJSONResponse,
    response_model=FollowersResponse,
    summary="List followers",
    description="Users following this user, newest first. `limit` defaults to 20.",
    responses={429: RATE_LIMITED},
    operation_id="users_followers",
)
@timed("/users/followers")
@limiter.limit(route_limit)
async def list_followers(
    request: Request,
    user_id: UUID,
    page: FollowPageQueryDep,
    service: FollowServiceDep,
) -> FollowersResponse:
    return await service.followers(user_id, page.page, page.limit)


@router.get(
    "/{user_id}/following",
    response_class=ORJSONResponse,
    response_model=FollowingResponse,
    summary="List followed users",
    description="Users this user follows, newest first. `limit` defaults to 20.",
    responses={429: RATE_LIMITED},
    operation_id="users_following",
)
@timed("/users/following")
@limiter.limit(route_limit)
async def list_following(
    request: Request,
    user_id: UUID,
    page: FollowPageQueryDep,
    service: FollowServiceDep,
) -> FollowingResponse:
    return await service.following(user_id, page.page, page.limit)
