"""Category and tag database models."""

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class CategoryDB(SQLModel, table=True):
    """A post category. Ids are stable strings such as ``cat_tech``."""

    __tablename__ = cast("declared_attr[str]", "categories")

    id: str = Field(primary_key=True, max_length=50, description="Category ID")
    name: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False),
        description="Display name (unique)",
    )
    slug: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
    )


class TagDB(SQLModel, table=True):
    """A free-form post tag. Ids are stable strings such as ``tag_guide``."""

    __tablename__ = cast("declared_attr[str]", "tags")

    id: str = Field(primary_key=True, max_length=50, description="Tag ID")
    name: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="Tag name (unique)",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
    )
