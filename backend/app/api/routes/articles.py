"""Articles — create/read/update/delete by slug, favorite/unfavorite, tag listing.

Invariants:
    - Reads accept an optional token (favorited/following flags need a viewer)
    - Mutations require a token; ownership checks live in services.articles
    - favorite/unfavorite respond with the recomputed favoritesCount
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import current_user, optional_user
from app.infrastructure.database import get_db
from app.models.user import User
from app.schemas.article import (
    ArticleResponse, NewArticleRequest, TagsResponse, UpdateArticleRequest,
)
from app.services import articles
from app.services.presenters import article_view

router = APIRouter(prefix="/api", tags=["articles"])


@router.post(
    "/articles", response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_article(
    body: NewArticleRequest,
    author: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    article = await articles.create_article(
        db, author,
        title=body.article.title,
        description=body.article.description,
        body=body.article.body,
        tag_list=body.article.tag_list,
    )
    return ArticleResponse(article=await article_view(db, article, author))


@router.get("/articles/{slug}", response_model=ArticleResponse)
async def read_article(
    slug: str,
    viewer: User | None = Depends(optional_user),
    db: AsyncSession = Depends(get_db),
):
    article = await articles.get_article(db, slug)
    return ArticleResponse(article=await article_view(db, article, viewer))


@router.put("/articles/{slug}", response_model=ArticleResponse)
async def update_article(
    slug: str,
    body: UpdateArticleRequest,
    viewer: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    article = await articles.update_article(
        db, viewer, slug, **body.article.model_dump(exclude_unset=True),
    )
    return ArticleResponse(article=await article_view(db, article, viewer))


@router.delete("/articles/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    slug: str,
    viewer: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    await articles.delete_article(db, viewer, slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/articles/{slug}/favorite", response_model=ArticleResponse)
async def favorite_article(
    slug: str,
    viewer: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    article = await articles.favorite_article(db, viewer, slug)
    return ArticleResponse(article=await article_view(db, article, viewer))


@router.delete("/articles/{slug}/favorite", response_model=ArticleResponse)
async def unfavorite_article(
    slug: str,
    viewer: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    article = await articles.unfavorite_article(db, viewer, slug)
    return ArticleResponse(article=await article_view(db, article, viewer))


@router.get("/tags", response_model=TagsResponse)
async def list_tags(db: AsyncSession = Depends(get_db)):
    return TagsResponse(tags=await articles.list_tags(db))
