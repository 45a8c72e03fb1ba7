"""Comment thread schemas."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.schemas.user import UserSummary


class CommentCreate(BaseModel):
    """Body of the comment and reply endpoints."""

    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        examples=["Great write-up, thanks!"],
    )


class CommentNode(BaseModel):
    """
    One comment and its replies.

    ``replies`` holds direct children only, oldest first; each child carries
    its own ``replies``. ``parentId`` is None for top-level comments.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    content: str
    post_id: UUID = Field(alias="postId")
    user_id: UUID = Field(alias="userId")
    parent_id: UUID | None = Field(default=None, alias="parentId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    user: UserSummary
    like_count: int = Field(default=0, alias="likeCount")
    replies: list["CommentNode"] = Field(default_factory=list)


class CommentThreadResponse(BaseModel):
    comments: list[CommentNode]


class CommentMutationResponse(BaseModel):
    """
    Created comment or reply.

    ``depth`` is the new comment's distance from its root: 0 for a top-level
    comment, parent depth + 1 for a reply.
    """

    message: str
    comment: CommentNode
    depth: int = 0
