"""User summaries and follow listings."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Public author information embedded in posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class FollowUser(BaseModel):
    """A user in a follow listing. ``createdAt`` is when the follow happened."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    username: str
    created_at: datetime = Field(alias="createdAt")


class FollowersResponse(BaseModel):
    followers: list[FollowUser]
    total: int
    page: int
    limit: int


class FollowingResponse(BaseModel):
    following: list[FollowUser]
    total: int
    page: int
    limit: int


class FollowActionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    following_id: UUID = Field(alias="followingId")
