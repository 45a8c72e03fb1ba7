from app.schemas.auth import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    ProfileResponse,
    ProfileUser,
    SignupRequest,
    TokenData,
)
from app.schemas.cache import (
    CacheClearResponse,
    CacheHealthResponse,
    CacheStatistics,
    CacheStatsResponse,
    HealthCheckResponse,
)
from app.schemas.comment import (
    CommentCreate,
    CommentMutationResponse,
    CommentNode,
    CommentThreadResponse,
)
from app.schemas.common import MessageResponse, Pagination
from app.schemas.post import (
    LikeResponse,
    PostCreate,
    PostEnvelope,
    PostListResponse,
    PostMutationResponse,
    PostResponse,
    PostUpdate,
    SavedPostListResponse,
    SavedPostResponse,
)
from app.schemas.taxonomy import CategoriesResponse, CategoryResponse, TagResponse, TagsResponse
from app.schemas.user import (
    FollowActionResponse,
    FollowersResponse,
    FollowingResponse,
    FollowUser,
    UserSummary,
)

__all__ = [
    "AuthResponse",
    "AuthUser",
    "CacheClearResponse",
    "CacheHealthResponse",
    "CacheStatistics",
    "CacheStatsResponse",
    "CategoriesResponse",
    "CategoryResponse",
    "CommentCreate",
    "CommentMutationResponse",
    "CommentNode",
    "CommentThreadResponse",
    "FollowActionResponse",
    "FollowUser",
    "FollowersResponse",
    "FollowingResponse",
    "HealthCheckResponse",
    "LikeResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "PostCreate",
    "PostEnvelope",
    "PostListResponse",
    "PostMutationResponse",
    "PostResponse",
    "PostUpdate",
    "ProfileResponse",
    "ProfileUser",
    "SavedPostListResponse",
    "SavedPostResponse",
    "SignupRequest",
    "TagResponse",
    "TagsResponse",
    "TokenData",
    "UserSummary",
]
