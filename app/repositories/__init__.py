"""Repository layer for database operations."""

from app.repositories.comment import CommentRepository
from app.repositories.engagement import EngagementRepository
from app.repositories.follow import FollowRepository
from app.repositories.post import PostFilter, PostRepository
from app.repositories.taxonomy import CategoryRepository, TagRepository
from app.repositories.user import UserRepository

__all__ = [
    "CategoryRepository",
    "CommentRepository",
    "EngagementRepository",
    "FollowRepository",
    "PostFilter",
    "PostRepository",
    "TagRepository",
    "UserRepository",
]
