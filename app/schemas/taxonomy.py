from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str


class CategoriesResponse(BaseModel):
    categories: list[CategoryResponse]


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class TagsResponse(BaseModel):
    tags: list[TagResponse]
