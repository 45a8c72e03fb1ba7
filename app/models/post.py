"""Post database models using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class PostDB(SQLModel, table=True):
    """
    Post database model for PostgreSQL.

    A post is visible to everyone once ``published`` is set; until then only
    its author can read it through the drafts endpoint.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        Index("ix_posts_published_featured_created", "published", "featured", "created_at"),
        Index("ix_posts_author_created", "author_id", "created_at"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.uuid)",
    )
    category_id: str | None = Field(
        default=None,
        sa_column=Column(
            "category_id",
            ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        description="Category ID (foreign key to categories.id)",
    )

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="URL-friendly slug derived from the title (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body",
    )
    published: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false"),
    )
    featured: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false"),
    )
    view_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
    )

    # SEO
    meta_title: str | None = Field(default=None, sa_column=Column(String(60)))
    meta_description: str | None = Field(default=None, sa_column=Column(String(160)))
    og_image: str | None = Field(default=None, sa_column=Column(String(2048)))

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "category_id": "cat_tech",
                "title": "Getting Started with FastAPI",
                "slug": "getting-started-with-fastapi",
                "content": "FastAPI is a modern web framework...",
                "published": True,
                "featured": False,
                "view_count": 0,
            },
        },
    )


class PostTagDB(SQLModel, table=True):
    """Association between a post and one of its tags."""

    __tablename__ = cast("declared_attr[str]", "post_tags")
    __table_args__ = (UniqueConstraint("post_id", "tag_id", name="uq_post_tags_post_tag"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    post_id: UUID = Field(
        sa_column=Column(
            "post_id",
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    tag_id: str = Field(
        sa_column=Column(
            "tag_id",
            ForeignKey("tags.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
