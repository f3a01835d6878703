"""Article Schemas — content payloads with camelCase wire names.

Invariants:
    - Wire names are camelCase (tagList, favoritesCount, createdAt, ...)
    - Python attributes stay snake_case; populate_by_name lets either be used
    - slug is output-only: clients can never choose or change it

Design Decisions:
    - alias_generator=to_camel on a shared base instead of per-field aliases
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.profile import Profile


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewArticle(CamelModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    body: str | None = None
    tag_list: list[str] = Field(default_factory=list)


class NewArticleRequest(BaseModel):
    article: NewArticle


class UpdateArticle(CamelModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    body: str | None = None


class UpdateArticleRequest(BaseModel):
    article: UpdateArticle


class ArticleView(CamelModel):
    slug: str
    title: str
    description: str
    body: str
    tag_list: list[str]
    created_at: datetime
    updated_at: datetime
    favorites_count: int
    favorited: bool
    author: Profile


class ArticleResponse(BaseModel):
    article: ArticleView


class TagsResponse(BaseModel):
    tags: list[str]
