"""Database models for the application."""

from app.models.comment import CommentDB
from app.models.engagement import CommentLikeDB, FollowerDB, PostLikeDB, SavedPostDB
from app.models.post import PostDB, PostTagDB
from app.models.taxonomy import CategoryDB, TagDB
from app.models.user import UserDB

__all__ = [
    "CategoryDB",
    "CommentDB",
    "CommentLikeDB",
    "FollowerDB",
    "PostDB",
    "PostLikeDB",
    "PostTagDB",
    "SavedPostDB",
    "TagDB",
    "UserDB",
]
