from app.services.auth import AuthService
from app.services.comment import CommentThreadBuilder, CreatedComment
from app.services.engagement import EngagementService
from app.services.follow import FollowService
from app.services.post import PostService, PostUpdateResult

__all__ = [
    "AuthService",
    "CommentThreadBuilder",
    "CreatedComment",
    "EngagementService",
    "FollowService",
    "PostService",
    "PostUpdateResult",
]
