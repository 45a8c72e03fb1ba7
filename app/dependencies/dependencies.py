# app/dependencies/dependencies.py

"""Application dependencies: sessions, repositories, services, auth and queries."""

from dataclasses import dataclass
from typing import Annotated, Literal
from uuid import UUID

from fastapi import Depends, HTTPException, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from app.configs import settings
from app.configs.settings import DEFAULT_FOLLOW_PAGE_SIZE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.db import get_session
from app.managers.response_cache import ResponseCache
from app.managers.token_manager import decode_access_token
from app.models import UserDB
from app.repositories import (
    CategoryRepository,
    CommentRepository,
    EngagementRepository,
    FollowRepository,
    PostFilter,
    PostRepository,
    TagRepository,
    UserRepository,
)
from app.services import (
    AuthService,
    CommentThreadBuilder,
    EngagementService,
    FollowService,
    PostService,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# Repositories


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


def get_engagement_repository(session: SessionDep) -> EngagementRepository:
    return EngagementRepository(session)


def get_follow_repository(session: SessionDep) -> FollowRepository:
    return FollowRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_tag_repository(session: SessionDep) -> TagRepository:
    return TagRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
EngagementRepoDep = Annotated[EngagementRepository, Depends(get_engagement_repository)]
FollowRepoDep = Annotated[FollowRepository, Depends(get_follow_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
TagRepoDep = Annotated[TagRepository, Depends(get_tag_repository)]


# Services


def get_auth_service(user_repo: UserRepoDep, post_repo: PostRepoDep) -> AuthService:
    return AuthService(user_repo, post_repo)


def get_post_service(
    post_repo: PostRepoDep,
    user_repo: UserRepoDep,
    category_repo: CategoryRepoDep,
    tag_repo: TagRepoDep,
    engagement_repo: EngagementRepoDep,
) -> PostService:
    return PostService(post_repo, user_repo, category_repo, tag_repo, engagement_repo)


def get_engagement_service(
    post_repo: PostRepoDep,
    comment_repo: CommentRepoDep,
    engagement_repo: EngagementRepoDep,
) -> EngagementService:
    return EngagementService(post_repo, comment_repo, engagement_repo)


def get_comment_thread_builder(
    comment_repo: CommentRepoDep,
    post_repo: PostRepoDep,
    user_repo: UserRepoDep,
    engagement_repo: EngagementRepoDep,
) -> CommentThreadBuilder:
    return CommentThreadBuilder(comment_repo, post_repo, user_repo, engagement_repo)


def get_follow_service(user_repo: UserRepoDep, follow_repo: FollowRepoDep) -> FollowService:
    return FollowService(user_repo, follow_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
EngagementServiceDep = Annotated[EngagementService, Depends(get_engagement_service)]
CommentThreadDep = Annotated[CommentThreadBuilder, Depends(get_comment_thread_builder)]
FollowServiceDep = Annotated[FollowService, Depends(get_follow_service)]


# Authentication


async def get_current_user(
    request: Request,
    token: Annotated[str, Depends(oauth2_scheme)],
    user_repo: UserRepoDep,
) -> UserDB:
    """
    Get current authenticated user using user_id from token claims.

    Also records the user id on ``request.state`` so cached responses of
    the route are keyed per user.

    Parameters
    ----------
    request : Request
        Incoming request.
    token : str
        Bearer token.
    user_repo : UserRepository
        User repository.

    Returns
    -------
    UserDB
        Current authenticated user.
    """
    token_data = decode_access_token(token)
    if not token_data:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await user_repo.get_by_id(token_data.user_id)
    if not user:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.user_id = user.uuid
    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]


# Cache


def get_response_cache(request: Request) -> ResponseCache:
    """Dependency to get the response cache created at startup."""
    return request.app.state.response_cache


CacheDep = Annotated[ResponseCache, Depends(get_response_cache)]


# Queries


def get_post_list_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Posts per page"),
    ] = DEFAULT_PAGE_SIZE,
    title: Annotated[
        str | None,
        Query(min_length=1, description="Case-insensitive title search"),
    ] = None,
    author_id: Annotated[UUID | None, Query(alias="authorId")] = None,
    category_id: Annotated[str | None, Query(alias="categoryId")] = None,
    sort_by: Annotated[
        Literal["createdAt", "updatedAt", "title"],
        Query(alias="sortBy"),
    ] = "createdAt",
    sort_order: Annotated[Literal["asc", "desc"], Query(alias="sortOrder")] = "desc",
) -> PostFilter:
    """
    Dependency to construct `PostFilter` from query parameters.

    Returns
    -------
    PostFilter
        Aggregated query parameters object.
    """
    return PostFilter(
        page=page,
        limit=limit,
        title=title,
        author_id=author_id,
        category_id=category_id,
        sort_by=sort_by,
        sort_order=sort_order,
    )


PostListQueryDep = Annotated[PostFilter, Depends(get_post_list_query)]


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


def get_page_query(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


def get_follow_page_query(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_FOLLOW_PAGE_SIZE,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]
FollowPageQueryDep = Annotated[PageQuery, Depends(get_follow_page_query)]
