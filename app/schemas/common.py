"""Shared response envelopes."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """A bare confirmation message."""

    message: str = Field(examples=["Post deleted successfully"])


class Pagination(BaseModel):
    """Page window of a listing. ``pages`` is ``ceil(total / limit)``."""

    page: int
    limit: int
    total: int
    pages: int
