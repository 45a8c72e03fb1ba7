# app/routes/taxonomy.py

"""Read-only category and tag listings."""

from typing import Annotated

from fastapi import APIRouter, Query, Request
from fastapi.responses import ORJSONResponse

from app.decorators import cached_response, timed
from app.dependencies import CategoryRepoDep, TagRepoDep
from app.managers import limiter
from app.managers.rate_limiter import route_limit
from app.schemas import CategoriesResponse, CategoryResponse, TagResponse, TagsResponse

categories_router = APIRouter(prefix="/categories", tags=["🗂️ Categories"])
tags_router = APIRouter(prefix="/tags", tags=["🏷️ Tags"])


@categories_router.get(
    "",
    response_class=ORJSONResponse,
    response_model=CategoriesResponse,
    summary="List categories",
    description="All categories ordered by name.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "categories": [
                            {"id": "cat_lifestyle", "name": "Lifestyle", "slug": "lifestyle"},
                        ],
                    },
                },
            },
        },
    },
    operation_id="categories_list",
)
@timed("/categories")
@limiter.limit(route_limit)
@cached_response()
async def list_categories(request: Request, repo: CategoryRepoDep) -> CategoriesResponse:
    """
    List all categories.

    Parameters
    ----------
    request : Request
        Current request context.
    repo : CategoryRepository
        Category repository dependency.

    Returns
    -------
    CategoriesResponse
        Categories ordered by name.
    """
    categories = await repo.list_all()
    return CategoriesResponse(
        categories=[CategoryResponse.model_validate(category) for category in categories],
    )


@tags_router.get(
    "",
    response_class=ORJSONResponse,
    response_model=TagsResponse,
    summary="List tags",
    description="Tags ordered by name, optionally filtered by a case-insensitive search term.",
    operation_id="tags_list",
)
@timed("/tags")
@limiter.limit(route_limit)
@cached_response()
async def list_tags(
    request: Request,
    repo: TagRepoDep,
    search: Annotated[str | None, Query(description="Case-insensitive name filter")] = None,
) -> TagsResponse:
    """List tags whose name contains ``search``, or all tags."""
    tags = await repo.search(search)
    return TagsResponse(tags=[TagResponse.model_validate(tag) for tag in tags])
