"""
Post schemas for the Inkwell blog API.

Attributes are snake_case and serialize to the camelCase names the frontend
uses (``viewCount``, ``likeCount``, ``categoryId`` ...).
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, StringConstraints

from app.configs.settings import (
    MAX_META_DESCRIPTION_LENGTH,
    MAX_META_TITLE_LENGTH,
    MAX_TITLE_LENGTH,
)
from app.schemas.common import Pagination
from app.schemas.taxonomy import CategoryResponse, TagResponse
from app.schemas.user import UserSummary

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_TITLE_LENGTH)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
MetaTitle = Annotated[str, StringConstraints(max_length=MAX_META_TITLE_LENGTH)]
MetaDescription = Annotated[str, StringConstraints(max_length=MAX_META_DESCRIPTION_LENGTH)]


class PostCreate(BaseModel):
    """Body of ``POST /posts``. The slug is derived from the title."""

    model_config = ConfigDict(populate_by_name=True)

    title: Title = Field(examples=["Getting Started with FastAPI"])
    content: Content = Field(examples=["FastAPI is a modern web framework..."])
    published: bool = False
    featured: bool = False
    category_id: str | None = Field(default=None, alias="categoryId", examples=["cat_tech"])
    tags: list[str] | None = Field(
        default=None,
        description="Tag IDs to attach",
        examples=[["tag_programming", "tag_tutorial"]],
    )
    meta_title: MetaTitle | None = Field(default=None, alias="metaTitle")
    meta_description: MetaDescription | None = Field(default=None, alias="metaDescription")
    og_image: HttpUrl | None = Field(default=None, alias="ogImage")


class PostUpdate(BaseModel):
    """
    Body of ``PUT /posts/{id}``.

    Only fields present in the request are applied. ``tags``, when present,
    replaces the whole tag set.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Title | None = None
    content: Content | None = None
    published: bool | None = None
    featured: bool | None = None
    category_id: str | None = Field(default=None, alias="categoryId")
    tags: list[str] | None = None
    meta_title: MetaTitle | None = Field(default=None, alias="metaTitle")
    meta_description: MetaDescription | None = Field(default=None, alias="metaDescription")
    og_image: HttpUrl | None = Field(default=None, alias="ogImage")


class PostResponse(BaseModel):
    """A post with its author, category, tags and like count."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    slug: str
    content: str
    published: bool
    featured: bool
    view_count: int = Field(alias="viewCount")
    author_id: UUID = Field(alias="authorId")
    category_id: str | None = Field(default=None, alias="categoryId")
    meta_title: str | None = Field(default=None, alias="metaTitle")
    meta_description: str | None = Field(default=None, alias="metaDescription")
    og_image: str | None = Field(default=None, alias="ogImage")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    like_count: int = Field(default=0, alias="likeCount")
    author: UserSummary
    category: CategoryResponse | None = None
    tags: list[TagResponse] = Field(default_factory=list)


class SavedPostResponse(PostResponse):
    saved_at: datetime = Field(alias="savedAt")


class PostEnvelope(BaseModel):
    post: PostResponse


class PostMutationResponse(BaseModel):
    message: str
    post: PostResponse


class PostListResponse(BaseModel):
    posts: list[PostResponse]
    pagination: Pagination


class SavedPostListResponse(BaseModel):
    posts: list[SavedPostResponse]
    pagination: Pagination


class LikeResponse(BaseModel):
    """Result of a like or unlike, with the resulting like count."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    like_count: int = Field(alias="likeCount")
