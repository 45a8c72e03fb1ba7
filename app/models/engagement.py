"""Likes, saves and follows: one row per (actor, target) pair."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, UniqueConstraint
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel


def _user_fk(name: str) -> Column:
    return Column(name, ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False, index=True)


def _post_fk() -> Column:
    return Column("post_id", ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)


class PostLikeDB(SQLModel, table=True):
    __tablename__ = cast("declared_attr[str]", "post_likes")
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_post_likes_user_post"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    user_id: UUID = Field(sa_column=_user_fk("user_id"))
    post_id: UUID = Field(sa_column=_post_fk())


class CommentLikeDB(SQLModel, table=True):
    __tablename__ = cast("declared_attr[str]", "comment_likes")
    __table_args__ = (
        UniqueConstraint("user_id", "comment_id", name="uq_comment_likes_user_comment"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    user_id: UUID = Field(sa_column=_user_fk("user_id"))
    comment_id: UUID = Field(
        sa_column=Column(
            "comment_id",
            ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )


class SavedPostDB(SQLModel, table=True):
    """A bookmark. ``created_at`` is reported to the user as ``savedAt``."""

    __tablename__ = cast("declared_attr[str]", "saved_posts")
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_saved_posts_user_post"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    user_id: UUID = Field(sa_column=_user_fk("user_id"))
    post_id: UUID = Field(sa_column=_post_fk())
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class FollowerDB(SQLModel, table=True):
    """``follower_id`` follows ``following_id``."""

    __tablename__ = cast("declared_attr[str]", "followers")
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_followers_pair"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    follower_id: UUID = Field(sa_column=_user_fk("follower_id"))
    following_id: UUID = Field(sa_column=_user_fk("following_id"))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
