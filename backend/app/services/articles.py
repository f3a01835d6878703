"""Articles — content lifecycle plus the favorite/unfavorite mutations.

Invariants:
    - slug generated once, before the first INSERT; title edits never touch it
    - Only the author may update or delete an article (ForbiddenActionError)
    - favorite/unfavorite = edge mutation + synchronous favorites_count recompute,
      committed together; the returned article carries the fresh count
    - Creation is all-or-nothing: a slug collision rolls back and surfaces as
      a field error on "slug"
"""

import logging
from collections import Counter
from random import Random

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from app.core.domain_types import RelationKind
from app.core.errors import (
    ErrorContext, FieldValidationError, ForbiddenActionError, ResourceNotFoundError,
)
from app.core.identity_rules import BLANK, TAKEN
from app.core.slugs import generate_slug
from app.models.article import Article
from app.models.favorite import Favorite
from app.models.user import User
from app.services.counter_projection import FavoriteCountProjection
from app.services.relation_graph import favorite_graph

logger = logging.getLogger(__name__)


async def get_article(db: AsyncSession, slug: str) -> Article:
    result = await db.execute(select(Article).where(Article.slug == slug))
    article = result.scalar_one_or_none()
    if article is None:
        raise ResourceNotFoundError("Article", slug)
    return article


def _require_author(article: Article, viewer: User, action: str) -> None:
    if article.author_id != viewer.id:
        raise ForbiddenActionError(
            f"Only the author may {action} this article",
            ErrorContext(user_id=str(viewer.id), article_slug=article.slug),
        )


async def create_article(
    db: AsyncSession,
    author: User,
    *,
    title: str | None,
    description: str | None = None,
    body: str | None = None,
    tag_list: list[str] | None = None,
    rng: Random | None = None,
) -> Article:
    if not title or not title.strip():
        raise FieldValidationError({"title": [BLANK]})

    article = Article(
        slug=generate_slug(title, rng),
        title=title,
        description=description or "",
        body=body or "",
        tag_list=list(tag_list or []),
        author_id=author.id,
        favorites_count=0,
    )
    article.author = author
    db.add(article)
    slug = article.slug
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise FieldValidationError(
            {"slug": [TAKEN]}, ErrorContext(article_slug=slug),
        ) from e
    await db.refresh(article)
    logger.info(
        f"Created article '{article.title}'",
        extra={"user_id": author.id, "article_slug": article.slug},
    )
    return article


async def update_article(
    db: AsyncSession,
    viewer: User,
    slug: str,
    *,
    title: str | None = None,
    description: str | None = None,
    body: str | None = None,
) -> Article:
    article = await get_article(db, slug)
    _require_author(article, viewer, "update")
    if title is not None:
        if not title.strip():
            raise FieldValidationError({"title": [BLANK]})
        article.title = title
    if description is not None:
        article.description = description
    if body is not None:
        article.body = body
    await db.commit()
    await db.refresh(article)
    return article


async def delete_article(db: AsyncSession, viewer: User, slug: str) -> None:
    article = await get_article(db, slug)
    _require_author(article, viewer, "delete")
    await db.execute(delete(Favorite).where(Favorite.article_id == article.id))
    await db.delete(article)
    await db.commit()
    logger.info(
        "Deleted article",
        extra={"user_id": viewer.id, "article_slug": slug},
    )


async def _set_favorite(
    db: AsyncSession, viewer: User, slug: str, favorited: bool,
) -> Article:
    article = await get_article(db, slug)
    graph = favorite_graph(db)
    if favorited:
        await graph.add(viewer.id, article.id)
    else:
        await graph.remove(viewer.id, article.id)
    count = await FavoriteCountProjection(db).recompute(article.id)
    await db.commit()
    set_committed_value(article, "favorites_count", count)
    logger.info(
        f"{'Favorited' if favorited else 'Unfavorited'} article ({count} total)",
        extra={
            "user_id": viewer.id, "article_slug": slug,
            "relation": RelationKind.FAVORITE.value,
        },
    )
    return article


async def favorite_article(db: AsyncSession, viewer: User, slug: str) -> Article:
    return await _set_favorite(db, viewer, slug, favorited=True)


async def unfavorite_article(db: AsyncSession, viewer: User, slug: str) -> Article:
    return await _set_favorite(db, viewer, slug, favorited=False)


async def list_tags(db: AsyncSession) -> list[str]:
    """Distinct tags across all articles, most used first."""
    counts: Counter[str] = Counter()
    for tags in (await db.scalars(select(Article.tag_list))).all():
        counts.update(set(tags or []))
    return [tag for tag, _ in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))]
