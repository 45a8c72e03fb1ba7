# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    CacheDep,
    CategoryRepoDep,
    CommentThreadDep,
    EngagementServiceDep,
    FollowPageQueryDep,
    FollowServiceDep,
    PageQuery,
    PageQueryDep,
    PostListQueryDep,
    PostServiceDep,
    SessionDep,
    TagRepoDep,
    UserDBDep,
    UserRepoDep,
    get_category_repository,
    get_comment_repository,
    get_current_user,
    get_engagement_repository,
    get_follow_repository,
    get_post_repository,
    get_response_cache,
    get_tag_repository,
    get_user_repository,
    oauth2_scheme,
)

__all__ = [
    "AuthServiceDep",
    "CacheDep",
    "CategoryRepoDep",
    "CommentThreadDep",
    "EngagementServiceDep",
    "FollowPageQueryDep",
    "FollowServiceDep",
    "PageQuery",
    "PageQueryDep",
    "PostListQueryDep",
    "PostServiceDep",
    "SessionDep",
    "TagRepoDep",
    "UserDBDep",
    "UserRepoDep",
    "get_category_repository",
    "get_comment_repository",
    "get_current_user",
    "get_engagement_repository",
    "get_follow_repository",
    "get_post_repository",
    "get_response_cache",
    "get_tag_repository",
    "get_user_repository",
    "oauth2_scheme",
]
